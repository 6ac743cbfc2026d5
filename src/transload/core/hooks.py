"""
Loader Hook Table.

An explicit registry mapping file extensions to load handlers. A handler is any
callable ``handler(module, filename)`` that fills `module` from the file.

The import bridge (`transload.core.host.HookTableFinder`) consults this table on
every import, so whichever handler is registered when a file is imported is the
one that runs. Other code may overwrite entries at any time; the owner calls
`reconcile` (or `install` again) to take them back. That is not a lock: it only
repairs overwrites that happened between two loads.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

Handler = Callable[[Any, str], Any]
Snapshot = Tuple[Dict[str, Handler], Optional[Handler], Tuple[str, ...]]


class HookTable:
  """
  Ordered ``extension -> handler`` registry.

  Attributes:
      _handlers (Dict[str, Handler]): Registered handlers, in registration order.
      _owner (Optional[Handler]): Handler claimed by the last `install`.
      _owned (Tuple[str, ...]): Extensions claimed by the last `install`.
  """

  def __init__(self) -> None:
    self._handlers: Dict[str, Handler] = {}
    self._owner: Optional[Handler] = None
    self._owned: Tuple[str, ...] = ()

  def register(self, extension: str, handler: Handler) -> None:
    """Sets the handler for one extension, replacing any previous one."""
    self._handlers[extension] = handler

  def unregister(self, extension: str) -> None:
    self._handlers.pop(extension, None)

  def handler_for(self, extension: str) -> Optional[Handler]:
    """Returns the handler currently registered for `extension`, if any."""
    return self._handlers.get(extension)

  def extensions(self) -> List[str]:
    return list(self._handlers.keys())

  def install(self, handler: Handler, extensions: Iterable[str]) -> None:
    """
    Registers `handler` for every extension in `extensions` and records it as
    the owner of those extensions for later `reconcile` calls.

    Args:
        handler: The load handler.
        extensions: Extensions (with leading dot) to claim.
    """
    self._owner = handler
    self._owned = tuple(extensions)
    self.reconcile()

  def reconcile(self) -> None:
    """Re-asserts the owner on its extensions, undoing foreign overwrites."""
    if self._owner is None:
      return
    for ext in self._owned:
      if self._handlers.get(ext) is not self._owner:
        self._handlers[ext] = self._owner

  def reset(self) -> None:
    """Removes every handler and forgets the owner."""
    self._handlers.clear()
    self._owner = None
    self._owned = ()

  def snapshot(self) -> Snapshot:
    """Captures the full table state."""
    return dict(self._handlers), self._owner, self._owned

  def restore(self, snapshot: Snapshot) -> None:
    """Puts the table back into a state captured by `snapshot`."""
    handlers, owner, owned = snapshot
    self._handlers = dict(handlers)
    self._owner = owner
    self._owned = owned

  def __contains__(self, extension: str) -> bool:
    return extension in self._handlers

  def __len__(self) -> int:
    return len(self._handlers)


# The process-wide table consulted by the installed import finder.
HOOKS = HookTable()
