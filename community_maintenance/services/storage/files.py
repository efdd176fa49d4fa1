"""
File helpers for the data directory.

Every file the core writes (database, reports) goes through
write_text_atomic, and the raw-file browser goes through list_files.
"""

import contextlib
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from community_maintenance.audit import AuditLogger
from community_maintenance.models.record import FileMeta


WRITE_ATTEMPTS = 3


@retry(
    retry=retry_if_exception_type(OSError),
    stop=stop_after_attempt(WRITE_ATTEMPTS),
    wait=wait_exponential(multiplier=0.05, max=0.5),
    reraise=True,
)
def write_text_atomic(path: Path, text: str) -> None:
    """
    Replace path with text (UTF-8) in one rename.

    The text goes to a temporary sibling first, so readers see either the
    old file or the new one, never a partial write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        os.replace(tmp_name, path)
    except Exception:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def list_files(
    directory: Path,
    audit_logger: Optional[AuditLogger] = None,
) -> list[FileMeta]:
    """
    Every entry in directory, newest first.

    Entries whose modification time ties, or cannot be read, keep
    directory order. An unreadable directory yields an empty list.
    """
    audit = audit_logger or AuditLogger()

    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        audit.log_file_listing_failed(str(directory), str(e))
        return []

    files = []
    for entry in entries:
        try:
            stat = entry.stat()
        except OSError:
            files.append(FileMeta(name=entry.name, size_bytes=0))
            continue
        files.append(
            FileMeta(
                name=entry.name,
                size_bytes=stat.st_size,
                last_modified=datetime.fromtimestamp(stat.st_mtime),
            )
        )

    # Stable sort: ties and unknown times stay in directory order
    files.sort(
        key=lambda f: f.last_modified.timestamp() if f.last_modified else float("-inf"),
        reverse=True,
    )
    return files
