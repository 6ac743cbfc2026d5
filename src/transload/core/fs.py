"""
Filesystem helpers used by the cache.

All operations are synchronous: the import system calls into the loader and
blocks until the module body is available.
"""

import errno
import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

# Ordered before every real st_mtime_ns, including pre-epoch (negative) ones.
MISSING_MTIME = float("-inf")

ENCODING = "utf-8"


def ensure_directory(path: PathLike) -> None:
  """
  Creates the directory at `path` along with any missing ancestors (``mkdir -p``).

  Existing directories are left untouched. If an ancestor is missing, the parent
  is created first and the directory is retried. Every other failure, including
  `path` naming an existing regular file, propagates to the caller.

  Args:
      path: Directory to create. Relative paths resolve against the cwd.

  Raises:
      OSError: On any failure other than "already exists" or "missing parent".
  """
  directory = Path(os.path.abspath(os.path.normpath(path)))

  try:
    os.mkdir(directory, 0o777)
  except FileExistsError:
    if not directory.is_dir():
      raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(directory))
  except FileNotFoundError:
    if directory.parent == directory:
      raise
    ensure_directory(directory.parent)
    ensure_directory(directory)


def mtime_or_missing(path: PathLike) -> Union[int, float]:
  """
  Returns the modification time of `path` in nanoseconds.

  Any stat failure (missing file, permission problem, broken link) counts as
  absent and yields `MISSING_MTIME`.
  """
  try:
    return os.stat(path).st_mtime_ns
  except (OSError, ValueError):
    return MISSING_MTIME


def read_text(path: PathLike) -> str:
  """Reads the whole file as UTF-8 text."""
  with open(path, "rt", encoding=ENCODING) as f:
    return f.read()


def write_text(path: PathLike, content: str) -> None:
  """Writes `content` to `path` as UTF-8, replacing any previous content."""
  with open(path, "wt", encoding=ENCODING) as f:
    f.write(content)
