"""File stat service: existence and byte length of a file under a base directory."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileStat:
    """Result of a file stat lookup.

    Attributes:
        path: Resolved path that was inspected.
        exists: True if something exists at ``path``.
        length: Size in bytes, or None when the file does not exist.
    """

    path: Path
    exists: bool
    length: Optional[int] = None


def stat_file(base_dir: Union[str, Path], relative_path: str) -> FileStat:
    """Stat ``relative_path`` under ``base_dir``.

    Absolute ``relative_path`` values are honoured as-is, matching how the
    path join behaves. A path that cannot be inspected (missing, too long,
    unreadable parent, embedded NUL) is reported as absent.
    """
    path = Path(base_dir) / relative_path
    try:
        size = path.stat().st_size
    except (FileNotFoundError, NotADirectoryError):
        return FileStat(path=path, exists=False)
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot stat {path!s:.200}: {e}")
        return FileStat(path=path, exists=False)
    return FileStat(path=path, exists=True, length=size)
