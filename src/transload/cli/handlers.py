"""
CLI Command Handlers.

Each handler receives already-parsed arguments plus a resolved `LoaderConfig`
and returns a process exit code.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.table import Table

from transload.config import LoaderConfig
from transload.core.fs import ensure_directory, write_text
from transload.core.pipeline import TransformError
from transload.engines import EngineNotFoundError
from transload.runtime import Runtime, activate
from transload.utils.console import console, log_error, log_info, log_success


def _activate(config: LoaderConfig) -> Optional[Runtime]:
  try:
    return activate(config)
  except EngineNotFoundError as e:
    log_error(str(e))
    return None


def handle_run(path: Path, script_args: List[str], config: LoaderConfig) -> int:
  """
  Runs `path` as ``__main__`` with ``sys.argv`` set to ``[path, *script_args]``.

  Exceptions raised by the script propagate unchanged.

  Args:
      path: File to run; relative paths resolve against the cwd.
      script_args: Arguments visible to the script.
      config: Loader configuration.

  Returns:
      int: 0 once the script finishes, 1 if the loader could not start.
  """
  runtime = _activate(config)
  if runtime is None:
    return 1

  filename = os.path.abspath(path)
  sys.argv = [filename, *script_args]
  runtime.run(filename)
  return 0


def handle_compile(path: Path, output_path: Optional[Path], config: LoaderConfig) -> int:
  """
  Compiles `path` through the cache and prints or writes the result.

  Args:
      path: Source file.
      output_path: Destination file; stdout if None.
      config: Loader configuration.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not path.is_file():
    log_error(f"Input not found: {path}")
    return 1

  runtime = _activate(config)
  if runtime is None:
    return 1

  try:
    outcome = runtime.compile_file(path)
  except TransformError as e:
    log_error(str(e))
    return 1

  state = "cache hit" if outcome.cache_hit else "compiled"
  log_info(f"{state}: [path]{outcome.cache_path}[/path]")

  if output_path:
    ensure_directory(output_path.parent)
    write_text(output_path, outcome.text)
    log_success(f"Wrote {output_path}")
  else:
    console.print(outcome.text, markup=False, highlight=False, soft_wrap=True, end="")

  return 0


def handle_where(path: Path, config: LoaderConfig) -> int:
  """
  Prints the cache location of `path` and whether it is fresh.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  runtime = _activate(config)
  if runtime is None:
    return 1

  source = os.path.abspath(path)
  cache_path = runtime.loader.cache_path_for(source)
  status = "[success]fresh[/success]" if runtime.loader.is_fresh(source) else "[warning]stale[/warning]"
  console.print(f"[path]{cache_path}[/path] ({status})", soft_wrap=True)
  return 0


def handle_info(config: LoaderConfig) -> int:
  """
  Shows the engines, their versions, the cache root and the claimed extensions.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  runtime = _activate(config)
  if runtime is None:
    return 1

  table = Table(title="transload")
  table.add_column("Setting", style="bold")
  table.add_column("Value")

  table.add_row("coffee engine", f"{type(runtime.coffee).__name__} {runtime.coffee.version}")
  table.add_row("streamline engine", f"{type(runtime.streamline.engine).__name__} {runtime.streamline.version}")
  table.add_row("streamline mode", runtime.config.streamline_mode)
  table.add_row("working dir", str(runtime.config.working_dir))
  table.add_row("cache root", str(runtime.cache_root))
  table.add_row("extensions", " ".join(runtime.loader.extensions))

  console.print(table)
  return 0
