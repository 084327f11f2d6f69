import logging
import os
import time
from dataclasses import dataclass
from typing import Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    path: str
    original_name: str


def _stored_name(original_name: str, received_ms: int) -> str:
    return f"{received_ms}-{secure_filename(original_name) or 'upload'}"


def save_upload(file: Optional[FileStorage], upload_dir: str, received_ms: Optional[int] = None) -> StoredFile:
    """Write an uploaded image under ``upload_dir`` as ``<ms>-<name>``.

    The directory is created on demand. When the target name is already
    taken the millisecond prefix is advanced, so an upload never replaces
    an earlier one.
    """
    if file is None or not file.filename:
        raise ValidationError("No image uploaded")

    os.makedirs(upload_dir, exist_ok=True)
    ms = received_ms if received_ms is not None else int(time.time() * 1000)
    while True:
        path = os.path.join(upload_dir, _stored_name(file.filename, ms))
        try:
            # "x" fails if another request claimed the name first
            with open(path, "xb") as out:
                file.save(out)
            break
        except FileExistsError:
            ms += 1
        except BaseException:
            # partial write
            _remove_quietly(path)
            raise
    logger.info("Image path: %s", path)
    return StoredFile(path=path, original_name=file.filename)


def _remove_quietly(path: str) -> bool:
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not remove upload %s: %s", path, e)
        return False
    return True


def discard_upload(stored: StoredFile) -> None:
    if _remove_quietly(stored.path):
        logger.info("Removed orphaned upload %s", stored.path)
