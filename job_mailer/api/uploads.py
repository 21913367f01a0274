"""Transient storage for uploaded spreadsheets.

Uploads are written under random names so concurrent requests never
collide; each request removes its own file when it finishes.
"""

import uuid
from pathlib import Path

from fastapi import UploadFile

from job_mailer.logging import get_logger

logger = get_logger(__name__, component="uploads")

CHUNK_SIZE = 1024 * 1024


def ensure_upload_dir(upload_dir: Path) -> Path:
    """Create the upload directory if it does not exist yet."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


async def save_upload(upload: UploadFile, upload_dir: Path) -> Path:
    """Stream an upload to disk, keeping its (lowercased) extension.

    A partially written file is removed before the error propagates.
    """
    suffix = Path(upload.filename or "").suffix.lower()
    path = upload_dir / f"{uuid.uuid4().hex}{suffix}"

    try:
        with path.open("wb") as fh:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                fh.write(chunk)
    except Exception:
        remove_upload(path)
        raise
    finally:
        await upload.close()

    logger.debug(
        f"Stored upload {upload.filename!r} at {path}",
        extra={"event": "upload.stored", "path": str(path)},
    )
    return path


def remove_upload(path: Path) -> bool:
    """Delete a stored upload. Already-missing files are not an error.

    Returns:
        True if a file was removed, False if there was nothing to remove
    """
    try:
        path.unlink()
    except FileNotFoundError:
        logger.debug(f"Upload {path} already removed")
        return False

    logger.debug(f"Removed upload {path}", extra={"event": "upload.removed", "path": str(path)})
    return True
