"""
WebSocket客户端适配器

实现基于WebSocket的JSON-RPC 2.0客户端，连接按需建立，断开后在下一次调用时自动重连。
"""

import logging
from typing import Callable, Optional

from seam_rpc.config import DEFAULT_TIMEOUT_MS
from seam_rpc.rpc.client import RpcClient
from seam_rpc.transport.websocket import WebSocketTransport

logger = logging.getLogger(__name__)

class WebSocketClient(RpcClient):
    """
    WebSocket客户端适配器，实现JSON-RPC 2.0语义

    Example:
        async with WebSocketClient("ws://localhost:8200") as client:
            result = await client.call("mirror", {"data": "test"})
    """

    def __init__(self,
                 url: str = "ws://localhost:8200",
                 timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 request_timeout_ms: Optional[int] = None,
                 id_generator: Optional[Callable[[], str]] = None,
                 ping_interval: Optional[float] = 20,
                 ping_timeout: Optional[float] = 20):
        """初始化WebSocket客户端

        Args:
            url: WebSocket服务器地址 (ws:// 或 wss://)
            timeout_ms: 连接建立超时时间(毫秒)
            request_timeout_ms: 单个请求超时时间(毫秒)，默认与timeout_ms相同
            id_generator: 请求ID生成函数
            ping_interval: 心跳间隔(秒)，None表示关闭心跳
            ping_timeout: 心跳超时(秒)
        """
        def transport_factory(endpoint: str) -> WebSocketTransport:
            return WebSocketTransport(endpoint, ping_interval=ping_interval, ping_timeout=ping_timeout)

        super().__init__(
            url,
            transport_factory,
            timeout_ms=timeout_ms,
            request_timeout_ms=request_timeout_ms,
            id_generator=id_generator,
        )
        logger.info(f"WebSocket客户端已创建，服务器地址: {url}")
