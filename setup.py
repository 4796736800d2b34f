from setuptools import setup, find_packages

setup(
    name="seam_rpc",
    version="0.1.0",
    description="Seam RPC - awaitable JSON-RPC 2.0 client over WebSocket and ZeroMQ",
    author="Oppie.xyz Team",
    packages=find_packages(include=["seam_rpc", "seam_rpc.*"]),
    install_requires=[
        "websockets>=14.0",
        "pyzmq>=24.0.0",
        "opentelemetry-api>=1.14.0",
        "opentelemetry-sdk>=1.14.0",
        "opentelemetry-exporter-otlp>=1.14.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov",
            "black",
            "isort",
            "pylint",
        ],
    },
    python_requires=">=3.9",
)
