#!/usr/bin/env python
"""
RPC Client Example

Demonstrates how to use the adapter factory to create a client from
SEAM_RPC_* environment variables and issue concurrent JSON-RPC 2.0 calls.
Point SEAM_RPC_ENDPOINT at any peer that implements "mirror" and "wait".
"""

import asyncio
import logging

from seam_rpc import AdapterFactory, ClientConfig, RemoteError, RpcError
from seam_rpc.telemetry import configure_telemetry, create_span

def setup_logging():
    """Setup logging configuration"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

logger = logging.getLogger(__name__)

async def run(config: ClientConfig):
    """Run a few calls against the configured peer

    Args:
        config: Client configuration
    """
    logger.info(f"Using {config.adapter} adapter at {config.endpoint}")

    async with AdapterFactory.from_config(config) as client:
        with create_span("example.mirror", {"rpc.method": "mirror"}):
            result = await client.call("mirror", {"message": "Hello, World!"})
        logger.info(f"mirror -> {result}")

        # Responses come back in completion order, not issue order
        slow, fast = await asyncio.gather(
            client.call("wait", {"delay": 200}),
            client.call("wait", {"delay": 100}),
        )
        logger.info(f"wait -> {slow}, {fast}")

        try:
            await client.call("no_such_method")
        except RemoteError as e:
            logger.info(f"Remote error as expected: {e} (code={e.code})")

        await client.notify("log", {"line": "example finished"})

def main():
    setup_logging()
    config = ClientConfig.from_env()
    configure_telemetry(config)

    try:
        asyncio.run(run(config))
    except RpcError as e:
        logger.error(f"RPC failed: {e}")
        raise SystemExit(1)

if __name__ == "__main__":
    main()
