"""Main entry point for the Microserver Gen8 Thermal Exporter."""

import sys
import argparse
import signal
import logging
import asyncio
from typing import List, Optional
from gen8_exporter.config import load_config
from gen8_exporter.errors import ExporterError
from gen8_exporter.main import run_exporter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Prometheus exporter for HPE Microserver Gen8 thermal data."
    )

    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to config file. Environment variables override its values.",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Override port from config file.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )

    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> None:
    """Assemble configuration and run the exporter."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    config = load_config(args.config, overrides={"port": args.port})

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    # Handle SIGINT (Ctrl+C) and SIGTERM
    def signal_handler() -> None:
        logging.info("SIGINT or SIGTERM received, shutting down gracefully...")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    await run_exporter(config, stop_event)


def run(argv: Optional[List[str]] = None) -> None:
    """Console script entry point, exits non-zero on fatal errors."""
    try:
        asyncio.run(main(argv))
    except ExporterError as e:
        logging.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
