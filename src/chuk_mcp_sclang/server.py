#!/usr/bin/env python3
"""
Entry point for the CHUK SuperCollider MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).

Working directories default to ./arrangements and ./output and can be
moved with --arrangements-dir / --output-dir (or the
SCLANG_ARRANGEMENTS_DIR / SCLANG_OUTPUT_DIR environment variables).
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK SuperCollider MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--arrangements-dir",
        help="Directory for arrangement YAML files (default: ./arrangements)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for compiled .scd and .mid files (default: ./output)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # async_server reads these at import time
    if args.arrangements_dir:
        os.environ["SCLANG_ARRANGEMENTS_DIR"] = args.arrangements_dir
    if args.output_dir:
        os.environ["SCLANG_OUTPUT_DIR"] = args.output_dir

    from chuk_mcp_sclang.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK SuperCollider MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK SuperCollider MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
