"""
通信适配器接口

定义所有客户端适配器（WebSocket, ZeroMQ）实现的统一异步接口。
这确保了在底层传输变化时，上层应用代码无需修改。
"""

import abc
from typing import Any

class ClientAdapterInterface(abc.ABC):
    """客户端适配器接口，定义所有客户端适配器必须实现的方法"""

    @abc.abstractmethod
    async def call(self, method: str, params: Any = None) -> Any:
        """发送RPC请求并等待响应

        Args:
            method: 要调用的方法名
            params: 方法参数

        Returns:
            响应中的result字段

        Raises:
            RemoteError: 对端返回错误响应
            TimeoutError: 连接或请求超时
            ConnectionError: 传输层失败
        """
        pass

    @abc.abstractmethod
    async def notify(self, method: str, params: Any = None) -> None:
        """发送通知（不分配id，不等待响应）

        Args:
            method: 要调用的方法名
            params: 方法参数
        """
        pass

    @abc.abstractmethod
    async def close(self) -> None:
        """关闭连接并释放资源"""
        pass
