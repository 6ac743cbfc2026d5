"""
Entry-Point Redirection.

Runs an arbitrary file as the program's ``__main__`` module by reusing the
existing main module object and re-entering the load path.
"""

import logging
import os
from typing import Optional

from transload.core.fs import PathLike
from transload.core.host import NoMainModuleError, PythonHost

logger = logging.getLogger(__name__)


def run_as_main(requested_path: PathLike, host: PythonHost, relative_to: Optional[PathLike] = None) -> str:
  """
  Re-targets ``__main__`` at `requested_path` and executes it.

  The load goes through the handler *currently* registered for the file's
  extension rather than a fixed loader, so tools that wrap the handlers still
  see the main module being loaded.

  Args:
      requested_path: Absolute path, or path relative to `relative_to`'s directory.
          The extension may be omitted.
      host: Module system bridge.
      relative_to: File of the calling module.

  Returns:
      str: The resolved filename that was executed.

  Raises:
      NoMainModuleError: If the path is relative and there is no calling module,
          or if the interpreter has no ``__main__`` module.
      ModuleNotFoundError: If the path does not resolve to a file.
      ImportError: If no handler is registered for the resolved extension.
  """
  path = os.fspath(requested_path)
  if not os.path.isabs(path):
    if relative_to is None:
      raise NoMainModuleError(f"Cannot resolve relative path '{path}' without a calling module")
    path = os.path.join(os.path.dirname(os.path.abspath(relative_to)), path)

  filename = host.resolve_filename(path)
  extension = os.path.splitext(filename)[1]

  handler = host.hooks.handler_for(extension)
  if handler is None:
    raise ImportError(f"No loader registered for '{extension}' files", path=filename)

  main = host.main_module()
  host.reset_main(main, filename)

  logger.debug("running %s as __main__", filename)
  handler(main, filename)
  return filename
