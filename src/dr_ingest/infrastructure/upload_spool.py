"""Upload spooling: copy an uploaded stream to disk so it can be opened twice."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)


def ensure_upload_dir(upload_dir: str | Path) -> Path:
    path = Path(upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def spool_upload(stream: BinaryIO, upload_dir: str | Path) -> Path:
    """Write `stream` to a fresh file in upload_dir and return its path."""
    target_dir = ensure_upload_dir(upload_dir)
    with tempfile.NamedTemporaryFile(
        mode="wb", dir=target_dir, prefix="upload_", suffix=".csv", delete=False
    ) as out:
        shutil.copyfileobj(stream, out)
        return Path(out.name)


def discard_upload(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove spooled upload %s", path, exc_info=True)
