"""
ZeroMQ客户端适配器

实现基于ZeroMQ DEALER套接字的JSON-RPC 2.0客户端。
与REQ套接字不同，DEALER允许多个请求同时在途，响应按id匹配。
"""

import logging
from typing import Callable, Optional

from seam_rpc.config import DEFAULT_TIMEOUT_MS
from seam_rpc.rpc.client import RpcClient
from seam_rpc.transport.zeromq import ZeroMQTransport

logger = logging.getLogger(__name__)

class ZeroMQClient(RpcClient):
    """
    ZeroMQ客户端适配器，实现JSON-RPC 2.0语义
    对端需使用ROUTER套接字
    """

    def __init__(self,
                 server_address: str = "tcp://localhost:5555",
                 timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 request_timeout_ms: Optional[int] = None,
                 id_generator: Optional[Callable[[], str]] = None):
        """初始化ZeroMQ客户端

        Args:
            server_address: ZeroMQ服务器地址
            timeout_ms: 连接建立超时时间(毫秒)
            request_timeout_ms: 单个请求超时时间(毫秒)，默认与timeout_ms相同
            id_generator: 请求ID生成函数
        """
        super().__init__(
            server_address,
            ZeroMQTransport,
            timeout_ms=timeout_ms,
            request_timeout_ms=request_timeout_ms,
            id_generator=id_generator,
        )
        logger.info(f"ZeroMQ客户端已创建，服务器地址: {server_address}")
