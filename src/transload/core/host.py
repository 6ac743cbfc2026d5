"""
Python Import System Bridge.

Connects the explicit `HookTable` to `importlib`:

* `HookTableFinder` is a meta-path finder placed just before the standard
  `PathFinder`. It looks for ``<name><ext>`` (and ``<name>/__init__<ext>``) for
  every extension in the table.
* `HookTableLoader` hands the module to whatever handler is registered for the
  file's extension *at load time*, so wrappers installed by other tools (file
  watchers, profilers) keep working.
* `PythonHost` is the facade the rest of the package talks to: executing text
  as a module body, resolving a request to a file, and managing ``__main__``.
"""

import builtins
import importlib.abc
import importlib.machinery
import importlib.util
import linecache
import os
import sys
from types import ModuleType
from typing import List, Optional, Sequence

from transload.core.fs import PathLike
from transload.core.hooks import HOOKS, HookTable


class NoMainModuleError(RuntimeError):
  """Raised when entry-point redirection has no main module or calling module to work from."""


class HookTableLoader(importlib.machinery.SourceFileLoader):
  """
  File loader that defers execution to the hook table.

  Everything except execution (``get_data``, ``get_resource_reader``,
  ``get_filename``) comes from `SourceFileLoader`, so modules loaded through the
  table keep access to their package data.

  Attributes:
      table (HookTable): Table consulted when the module executes.
      name (str): Fully qualified module name.
      path (str): Absolute path of the file being loaded.
  """

  def __init__(self, table: HookTable, fullname: str, path: str):
    super().__init__(fullname, path)
    self.table = table

  def is_package(self, fullname: str) -> bool:
    # "__init__._coffee" has a dotted extension, so split on the first dot.
    return os.path.basename(self.path).split(".", 1)[0] == "__init__"

  def exec_module(self, module: ModuleType) -> None:
    extension = os.path.splitext(self.path)[1]
    handler = self.table.handler_for(extension)
    if handler is None:
      raise ImportError(f"No loader registered for '{extension}' files", path=self.path)
    handler(module, self.path)


class HookTableFinder(importlib.abc.MetaPathFinder):
  """
  Finds modules whose files carry an extension registered in the hook table.
  """

  def __init__(self, table: HookTable):
    self.table = table

  def find_spec(
    self,
    fullname: str,
    path: Optional[Sequence[str]] = None,
    target: Optional[ModuleType] = None,
  ) -> Optional[importlib.machinery.ModuleSpec]:
    """
    Scans `path` (or ``sys.path``) in order for a package or module file.

    A directory that holds a native extension module for `fullname` ends the
    scan so the standard finders keep precedence for compiled modules.

    Returns:
        Optional[ModuleSpec]: A spec bound to `HookTableLoader`, or None.
    """
    extensions = self.table.extensions()
    if not extensions:
      return None

    tail = fullname.rpartition(".")[2]
    search = sys.path if path is None else path

    for entry in search:
      if not isinstance(entry, str):
        continue
      directory = os.path.abspath(entry or os.getcwd())
      if not os.path.isdir(directory):
        continue

      base = os.path.join(directory, tail)
      if any(os.path.isfile(base + suffix) for suffix in importlib.machinery.EXTENSION_SUFFIXES):
        return None

      if os.path.isdir(base):
        for ext in extensions:
          init = os.path.join(base, "__init__" + ext)
          if os.path.isfile(init):
            return self._spec(fullname, init, [base])

      for ext in extensions:
        candidate = base + ext
        if os.path.isfile(candidate):
          return self._spec(fullname, candidate, None)

    return None

  def _spec(
    self, fullname: str, filename: str, search_locations: Optional[List[str]]
  ) -> Optional[importlib.machinery.ModuleSpec]:
    return importlib.util.spec_from_file_location(
      fullname,
      filename,
      loader=HookTableLoader(self.table, fullname, filename),
      submodule_search_locations=search_locations,
    )


class PythonHost:
  """
  Facade over the interpreter's module system.

  Attributes:
      hooks (HookTable): Extension table this host dispatches through.
  """

  def __init__(self, hooks: HookTable = HOOKS):
    self.hooks = hooks
    self.finder = HookTableFinder(hooks)

  def execute(self, module: ModuleType, text: str, filename: str) -> None:
    """
    Compiles `text` and runs it as the body of `module`.

    The text is registered with `linecache` under `filename` so tracebacks
    show the code that actually ran.

    Raises:
        SyntaxError: If `text` is not valid Python.
    """
    code = compile(text, filename, "exec", dont_inherit=True)
    linecache.cache[filename] = (len(text), None, text.splitlines(True), filename)
    module.__dict__.setdefault("__file__", filename)
    exec(code, module.__dict__)

  def resolve_filename(self, request: PathLike) -> str:
    """
    Resolves a request to a loadable file.

    Tries the path itself, then the path with each registered extension
    appended, then a package ``__init__`` file for each extension.

    Args:
        request: File path, with or without extension.

    Returns:
        str: Absolute path to an existing file.

    Raises:
        ModuleNotFoundError: If nothing matches.
    """
    path = os.path.abspath(request)
    if os.path.isfile(path):
      return path

    extensions = self.hooks.extensions()
    for ext in extensions:
      if os.path.isfile(path + ext):
        return path + ext

    for ext in extensions:
      init = os.path.join(path, "__init__" + ext)
      if os.path.isfile(init):
        return init

    raise ModuleNotFoundError(f"Cannot find module '{os.fspath(request)}'", path=path)

  def main_module(self) -> ModuleType:
    main = sys.modules.get("__main__")
    if main is None:
      raise NoMainModuleError("There is no '__main__' module to redirect")
    return main

  def reset_main(self, module: ModuleType, filename: str) -> None:
    """
    Turns `module` into a fresh main module for `filename`, in place.

    The namespace left by the previous program is dropped and the identity
    and location are replaced. ``sys.argv[0]`` names the file and
    ``sys.path[0]`` becomes its directory.
    """
    namespace = module.__dict__
    namespace.clear()
    namespace.update(
      __name__="__main__",
      __file__=filename,
      __loader__=HookTableLoader(self.hooks, "__main__", filename),
      __spec__=None,
      __package__=None,
      __doc__=None,
      __cached__=None,
      __builtins__=builtins,
    )

    if sys.argv:
      sys.argv[0] = filename
    else:
      sys.argv.append(filename)

    search_dir = os.path.dirname(filename)
    if sys.path:
      sys.path[0] = search_dir
    else:
      sys.path.insert(0, search_dir)

  def install_finder(self) -> None:
    """Places the finder before `PathFinder` in ``sys.meta_path`` (idempotent)."""
    if self.finder in sys.meta_path:
      return
    try:
      index = sys.meta_path.index(importlib.machinery.PathFinder)
    except ValueError:
      index = len(sys.meta_path)
    sys.meta_path.insert(index, self.finder)
    importlib.invalidate_caches()

  def uninstall_finder(self) -> None:
    while self.finder in sys.meta_path:
      sys.meta_path.remove(self.finder)
