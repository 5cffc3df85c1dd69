"""
Log configuration for the API process.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root handler and quiets noisy client libraries.
"""

import logging


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("realtime").setLevel(logging.WARNING)
