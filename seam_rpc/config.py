"""
Configuration settings for the RPC client
"""
import os
from typing import Dict, Any, Optional
from dataclasses import dataclass


SUPPORTED_ADAPTERS = ("websocket", "zeromq")

DEFAULT_ENDPOINTS = {
    "websocket": "ws://localhost:8200",
    "zeromq": "tcp://localhost:5555",
}

DEFAULT_TIMEOUT_MS = 5000


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ClientConfig:
    """Configuration for an RPC client adapter"""
    adapter: str = "websocket"
    endpoint: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    request_timeout_ms: Optional[int] = None  # Falls back to timeout_ms

    # Tracing / metrics configuration
    enable_tracing: bool = False
    enable_metrics: bool = False
    service_name: str = "seam_rpc.client"
    otlp_endpoint: str = "localhost:4317"

    def __post_init__(self):
        self.adapter = self.adapter.lower()
        if self.adapter not in SUPPORTED_ADAPTERS:
            raise ValueError(f"Unsupported adapter: {self.adapter}")
        if self.endpoint is None:
            self.endpoint = DEFAULT_ENDPOINTS[self.adapter]
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.request_timeout_ms is not None and self.request_timeout_ms <= 0:
            raise ValueError(f"request_timeout_ms must be positive, got {self.request_timeout_ms}")

    @property
    def effective_request_timeout_ms(self) -> int:
        return self.request_timeout_ms or self.timeout_ms

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from SEAM_RPC_* environment variables"""
        request_timeout = os.getenv("SEAM_RPC_REQUEST_TIMEOUT_MS")
        return cls(
            adapter=os.getenv("SEAM_RPC_ADAPTER", "websocket"),
            endpoint=os.getenv("SEAM_RPC_ENDPOINT"),
            timeout_ms=int(os.getenv("SEAM_RPC_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
            request_timeout_ms=int(request_timeout) if request_timeout else None,
            enable_tracing=_env_bool("SEAM_RPC_ENABLE_TRACING", False),
            enable_metrics=_env_bool("SEAM_RPC_ENABLE_METRICS", False),
            service_name=os.getenv("SEAM_RPC_SERVICE_NAME", "seam_rpc.client"),
            otlp_endpoint=os.getenv("SEAM_RPC_OTLP_ENDPOINT", "localhost:4317"),
        )

    @classmethod
    def default(cls) -> "ClientConfig":
        """Create default configuration"""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "adapter": self.adapter,
            "endpoint": self.endpoint,
            "timeout_ms": self.timeout_ms,
            "request_timeout_ms": self.effective_request_timeout_ms,
            "enable_tracing": self.enable_tracing,
            "enable_metrics": self.enable_metrics,
            "service_name": self.service_name,
        }
