"""
Logging and Console Utilities.

All diagnostic output of transload flows through the standard `logging`
library under the ``transload`` logger namespace. Library modules only create
records; nothing is printed until a handler is attached, which keeps the import
hook silent inside host applications.

The CLI (or an embedding application) calls `configure_logging` to attach a
`rich` handler. The Rich Console itself sits behind a proxy so the output
destination can be swapped at runtime (e.g. a recording console in tests)
without invalidating the module-level `console` reference imported elsewhere.

Attributes:
    console (_ConsoleProxy): A global, stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.theme import Theme

LOGGER_NAME = "transload"

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

_logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  A Proxy wrapper around `rich.console.Console`.

  All printing operations are forwarded to the 'backend' Console. When the
  backend changes and logging has been configured, the `RichHandler` on the
  ``transload`` logger is rebuilt so records follow the new destination.

  Attributes:
      _backend (Console): The active Rich Console instance.
      _level (Optional[int]): Level set by `configure_logging`, None until then.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._level = None

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates the logging handler.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    if self._level is not None:
      self._configure_logging(self._level)

  def reset(self) -> None:
    """Resets the proxy to a fresh standard output console."""
    self._backend = Console(theme=_THEME)
    if self._level is not None:
      self._configure_logging(self._level)

  @property
  def backend(self) -> Console:
    """The currently active Rich Console."""
    return self._backend

  def _configure_logging(self, level: int) -> None:
    """
    Attaches a `RichHandler` bound to the current backend to the ``transload``
    logger, replacing any handler installed by a previous call.

    Args:
        level (int): Minimum level for the ``transload`` logger.
    """
    for handler in list(_logger.handlers):
      if isinstance(handler, RichHandler):
        _logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    self._level = level
    _logger.setLevel(level)
    _logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards `print` calls to the active backend."""
    self._backend.print(*args, **kwargs)

  def get_style(self, name: str) -> Style:
    """Forwards `get_style` calls to the active backend."""
    return self._backend.get_style(name)

  def export_text(self, **kwargs: Any) -> str:
    """Forwards `export_text` (useful for log capturing)."""
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def configure_logging(verbose: bool = False) -> None:
  """
  Routes ``transload`` log records to the active console.

  Args:
      verbose (bool): If True, DEBUG records (cache hits/misses) are shown.
  """
  console._configure_logging(logging.DEBUG if verbose else logging.INFO)


def set_console(new_console: Console) -> None:
  """
  Global helper to inject a specific console instance.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Global helper to reset the console to standard output."""
  console.reset()


def get_console() -> Console:
  """
  Retrieves the currently active console backend.

  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def log_debug(msg: str) -> None:
  """
  Logs a debug message on the ``transload`` logger.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  _logger.debug(msg, extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content.
  """
  _logger.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """
  Logs a success message.

  Args:
      msg (str): The message content.
  """
  _logger.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning message.

  Args:
      msg (str): The message content.
  """
  _logger.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error message.

  Args:
      msg (str): The message content.
  """
  _logger.error(f"❌ {msg}", extra={"markup": True})
