"""Process-wide logging setup.

Log format:
    2026-01-01 12:00:00,000 INFO  src.dr_ingest.domain.downsampler: Total rows: 1000000
"""

import logging

from config.settings import settings

_LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    resolved = (level or settings.LOG_LEVEL).upper()
    if not root.handlers:
        logging.basicConfig(format=_LOG_FORMAT)
    root.setLevel(resolved)
