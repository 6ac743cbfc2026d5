"""
Process-wide Activation.

Ties the pieces together: loads both engines, derives the version-qualified
cache root, materialises it, and registers the cached loader for ``.py``,
``.coffee``, ``._py`` and ``._coffee`` files.

There is at most one active `Runtime` per process. Its cache root and working
directory are fixed when it starts.
"""

import inspect
import logging
import os
from pathlib import Path
from typing import Any, Optional

from transload.config import LoaderConfig
from transload.core.cache_paths import cache_root_for
from transload.core.fs import PathLike, ensure_directory
from transload.core.host import PythonHost
from transload.core.main import run_as_main
from transload.core.orchestrator import CachedLoader, LoadOutcome
from transload.core.pipeline import TransformPipeline
from transload.engines import COFFEE, STREAMLINE, IsolatedStreamliner, load_engine

logger = logging.getLogger(__name__)


class Runtime:
  """
  One configured loader instance.

  Attributes:
      config (LoaderConfig): Settings this runtime was built from.
      coffee: The coffee engine.
      streamline (IsolatedStreamliner): The streamline engine behind its isolation adapter.
      host (PythonHost): Bridge to the import system.
      cache_root (Path): ``<cache_dir>/<coffee version>-<streamline version>``.
      loader (CachedLoader): The handler registered in the hook table.
  """

  def __init__(self, config: LoaderConfig, coffee: Any, streamline: Any, host: PythonHost):
    self.config = config
    self.coffee = coffee
    self.streamline = streamline
    self.host = host
    self.cache_root: Path = cache_root_for(config.cache_base, coffee.version, streamline.version)
    self.pipeline = TransformPipeline(coffee, streamline)
    self.loader = CachedLoader(self.pipeline, self.cache_root, host, cwd=config.working_dir)

  @classmethod
  def from_config(cls, config: LoaderConfig, host: Optional[PythonHost] = None) -> "Runtime":
    """
    Locates both engines and builds a runtime.

    Raises:
        EngineNotFoundError: If either engine cannot be found.
    """
    host = host or PythonHost()
    coffee = load_engine(COFFEE, config.coffee_engine)
    streamline = IsolatedStreamliner(
      load_engine(STREAMLINE, config.streamline_engine),
      host.hooks,
      mode=config.streamline_mode,
    )
    return cls(config, coffee, streamline, host)

  def start(self) -> None:
    """Creates the cache root and registers the loader."""
    ensure_directory(self.cache_root)
    self.loader.register()
    logger.debug("transload active, cache root %s", self.cache_root)

  def stop(self) -> None:
    """Removes every hook and the import finder."""
    self.host.hooks.reset()
    self.host.uninstall_finder()

  def compile_file(self, path: PathLike) -> LoadOutcome:
    """Resolves `path` through the cache without executing it."""
    return self.loader.fetch(os.path.abspath(path))

  def run(self, path: PathLike, relative_to: Optional[PathLike] = None) -> str:
    return run_as_main(path, self.host, relative_to)


_RUNTIME: Optional[Runtime] = None


def get_runtime() -> Optional[Runtime]:
  return _RUNTIME


def activate(config: Optional[LoaderConfig] = None) -> Runtime:
  """
  Activates the cached loader for this process.

  Calling it again returns the already active runtime; `config` is ignored then.

  Args:
      config: Settings to use. Loaded from the nearest pyproject.toml if omitted.

  Returns:
      Runtime: The active runtime.
  """
  global _RUNTIME
  if _RUNTIME is not None:
    return _RUNTIME

  runtime = Runtime.from_config(config or LoaderConfig.load())
  runtime.start()
  _RUNTIME = runtime
  return runtime


def deactivate() -> None:
  """Uninstalls the active runtime, if any."""
  global _RUNTIME
  if _RUNTIME is None:
    return
  _RUNTIME.stop()
  _RUNTIME = None


def run(path: PathLike, relative_to: Optional[PathLike] = None) -> str:
  """
  Runs `path` as the program's main module through the cached loader.

  Relative paths resolve against the directory of the calling module.

  Args:
      path: File to run; the extension may be omitted.
      relative_to: Overrides the calling module's file.

  Returns:
      str: The resolved file that ran.
  """
  if relative_to is None:
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
      relative_to = caller.f_globals.get("__file__")
    del frame, caller

  return activate().run(path, relative_to)
