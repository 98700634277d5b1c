"""Postmortem dump of upstream payloads that failed to parse."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TEMP_PREFIX = "._new_"


def dump_payload(data: bytes, path: str | Path) -> Path | None:
    """Write ``data`` to ``path`` via an exclusive temp file and rename.

    A partially written dump is never visible under ``path``. Returns the
    final path, or None when the dump could not be written. Never raises.
    """
    path = Path(path)
    tmp_path = path.with_name(TEMP_PREFIX + path.name)

    try:
        fd = os.open(tmp_path, os.O_EXCL | os.O_RDWR | os.O_CREAT, 0o600)
    except OSError as e:
        logger.error("Cannot create payload dump %s: %s", tmp_path, e)
        return None

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error("Failed to write payload dump %s: %s", path, e)
        tmp_path.unlink(missing_ok=True)
        return None

    logger.error("Failed payload written to %s", path)
    return path
