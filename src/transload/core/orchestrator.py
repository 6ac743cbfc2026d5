"""
Cached Load Orchestrator.

Every load walks the same path:

1. Derive the cache path from the absolute source path.
2. Compare modification times. The cache is fresh when
   ``cache_mtime >= source_mtime``; ties favour the cache so coarse filesystem
   timestamps do not trigger needless recompiles.
3. Fresh: read the cached text verbatim. Stale or missing: read the source,
   run the transform pipeline, create the parent directory and write the result.
4. Execute the text as the module body under the *source* path.
5. Re-register this loader for its extensions in the hook table.

A failing transform raises before step 3 writes anything, so a broken source
never leaves a cache entry that could later pass as fresh.

The cache is owned by a single process. There is no locking and no atomic
rename: two processes recompiling the same stale file race, and the last write
wins.
"""

import logging
import os
from pathlib import Path
from types import ModuleType
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from transload.core.cache_paths import resolve_cache_path
from transload.core.classify import LOADER_EXTENSIONS, classify
from transload.core.fs import PathLike, ensure_directory, mtime_or_missing, read_text, write_text
from transload.core.host import PythonHost
from transload.core.pipeline import TransformPipeline

logger = logging.getLogger(__name__)


class LoadOutcome(BaseModel):
  """
  Result of resolving one source file through the cache.
  """

  source_path: Path = Field(description="Absolute path of the requested source.")
  cache_path: Path = Field(description="Location of the compiled copy.")
  cache_hit: bool = Field(description="True if the cached copy was served without compiling.")
  text: str = Field(description="The executable Python text.")


class CachedLoader:
  """
  Load handler that serves compiled sources from an on-disk cache.

  Instances are registered directly in the hook table: calling the loader
  with ``(module, filename)`` performs a full `load`.

  Attributes:
      pipeline (TransformPipeline): Transforms applied on a cache miss.
      cache_root (Path): Version-qualified cache root.
      host (PythonHost): Module system bridge used for execution and hooks.
      cwd (str): Working directory that decides the rel/abs partition.
      extensions (tuple): Extensions this loader claims in the hook table.
  """

  def __init__(
    self,
    pipeline: TransformPipeline,
    cache_root: PathLike,
    host: PythonHost,
    cwd: Optional[PathLike] = None,
    extensions: Iterable[str] = LOADER_EXTENSIONS,
  ):
    self.pipeline = pipeline
    self.cache_root = Path(cache_root)
    self.host = host
    self.cwd = os.fspath(cwd) if cwd is not None else os.getcwd()
    self.extensions = tuple(extensions)

  def cache_path_for(self, source_path: PathLike) -> Path:
    return resolve_cache_path(source_path, self.cwd, self.cache_root)

  def is_fresh(self, source_path: PathLike) -> bool:
    """True if the cached copy of `source_path` would be served as-is."""
    return mtime_or_missing(self.cache_path_for(source_path)) >= mtime_or_missing(source_path)

  def fetch(self, source_path: PathLike) -> LoadOutcome:
    """
    Returns the executable text for `source_path`, compiling and caching on a miss.

    Args:
        source_path: Absolute path of the source file.

    Returns:
        LoadOutcome: The text, its cache location and whether it was a hit.

    Raises:
        TransformError: If compilation fails. The cache is left untouched.
        OSError: If reading the source or writing the cache fails.
    """
    source = os.fspath(source_path)
    cache_path = self.cache_path_for(source)

    source_mtime = mtime_or_missing(source)
    cache_mtime = mtime_or_missing(cache_path)

    if cache_mtime >= source_mtime:
      logger.debug("cache hit: %s", source)
      return LoadOutcome(source_path=source, cache_path=cache_path, cache_hit=True, text=read_text(cache_path))

    logger.debug("cache miss: %s", source)
    text = self.pipeline.compile(source, read_text(source), classify(source))

    ensure_directory(cache_path.parent)
    write_text(cache_path, text)
    logger.debug("cached %s -> %s", source, cache_path)

    return LoadOutcome(source_path=source, cache_path=cache_path, cache_hit=False, text=text)

  def load(self, module: ModuleType, source_path: PathLike) -> LoadOutcome:
    """
    Loads `source_path` into `module` through the cache.

    Args:
        module: Module object to populate.
        source_path: Absolute path of the source file.

    Returns:
        LoadOutcome: What was executed.
    """
    outcome = self.fetch(source_path)
    self.host.execute(module, outcome.text, os.fspath(source_path))
    self.register()
    return outcome

  def register(self) -> None:
    """
    Claims this loader's extensions in the hook table and makes sure the
    import finder is in place. Safe to call after every load.
    """
    self.host.hooks.install(self, self.extensions)
    self.host.install_finder()

  def __call__(self, module: ModuleType, filename: str) -> None:
    self.load(module, filename)
