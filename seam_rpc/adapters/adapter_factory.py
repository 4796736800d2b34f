"""
适配器工厂

根据配置创建客户端适配器实例（WebSocket、ZeroMQ）。
"""

from typing import Any, Dict, Optional, Union

from seam_rpc.adapters.adapter_interface import ClientAdapterInterface
from seam_rpc.adapters.websocket.client import WebSocketClient
from seam_rpc.adapters.zeromq.client import ZeroMQClient
from seam_rpc.config import ClientConfig, DEFAULT_ENDPOINTS, DEFAULT_TIMEOUT_MS

class AdapterType:
    """适配器类型常量"""
    WEBSOCKET = "websocket"
    ZEROMQ = "zeromq"

class AdapterFactory:
    """适配器工厂，用于创建客户端适配器实例"""

    @staticmethod
    def create_client(adapter_type: str,
                      config: Optional[Union[Dict[str, Any], ClientConfig]] = None) -> ClientAdapterInterface:
        """创建客户端适配器

        Args:
            adapter_type: 适配器类型，如"websocket"、"zeromq"
            config: 适配器配置参数（字典或ClientConfig）

        Returns:
            ClientAdapterInterface: 客户端适配器实例

        Raises:
            ValueError: 无效的适配器类型
        """
        if isinstance(config, ClientConfig):
            config = {
                "endpoint": config.endpoint,
                "timeout_ms": config.timeout_ms,
                "request_timeout_ms": config.request_timeout_ms,
            }
        elif config is None:
            config = {}

        adapter_type = adapter_type.lower()
        if adapter_type == AdapterType.WEBSOCKET:
            return WebSocketClient(
                url=config.get("endpoint") or DEFAULT_ENDPOINTS[AdapterType.WEBSOCKET],
                timeout_ms=config.get("timeout_ms", DEFAULT_TIMEOUT_MS),
                request_timeout_ms=config.get("request_timeout_ms"),
                id_generator=config.get("id_generator")
            )
        elif adapter_type == AdapterType.ZEROMQ:
            return ZeroMQClient(
                server_address=config.get("endpoint") or DEFAULT_ENDPOINTS[AdapterType.ZEROMQ],
                timeout_ms=config.get("timeout_ms", DEFAULT_TIMEOUT_MS),
                request_timeout_ms=config.get("request_timeout_ms"),
                id_generator=config.get("id_generator")
            )
        else:
            raise ValueError(f"无效的适配器类型: {adapter_type}")

    @staticmethod
    def from_config(config: ClientConfig) -> ClientAdapterInterface:
        """根据ClientConfig创建客户端适配器"""
        return AdapterFactory.create_client(config.adapter, config)
