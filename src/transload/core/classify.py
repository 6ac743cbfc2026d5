"""
Source Classification.

Decides which transform stages apply to a file purely from its name:

* ``.coffee`` and ``._coffee`` files are coffee sources and get transpiled to Python.
* Names ending in ``_.py``, ``._py``, ``_.coffee`` or ``._coffee`` are streamlined
  (the legacy ``_.ext`` and the current ``._ext`` conventions).

The two tags are independent, so ``x._coffee`` is both.
"""

import os
import re
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from transload.core.fs import PathLike
from transload.enums import SourceKind

COFFEE_EXTENSIONS: Tuple[str, ...] = (".coffee", "._coffee")

# Extensions routed through the cached loader, in lookup order.
LOADER_EXTENSIONS: Tuple[str, ...] = (".py", ".coffee", "._py", "._coffee")

STREAMLINE_PATTERN = re.compile(r"(_\.|\._)(py|coffee)$")


class SourceDescriptor(BaseModel):
  """
  Name-derived facts about one source file.
  """

  model_config = ConfigDict(frozen=True)

  path: str
  extension: str
  is_coffee: bool
  is_streamline: bool

  @property
  def kind(self) -> SourceKind:
    """The combined tag as a single variant."""
    return SourceKind.from_tags(self.is_coffee, self.is_streamline)


def classify(path: PathLike) -> SourceDescriptor:
  """
  Classifies a source path.

  Args:
      path: Path of the source file. Only the name is inspected.

  Returns:
      SourceDescriptor: The extension and dialect tags of the file.
  """
  path_str = os.fspath(path)
  extension = os.path.splitext(path_str)[1]
  return SourceDescriptor(
    path=path_str,
    extension=extension,
    is_coffee=extension in COFFEE_EXTENSIONS,
    is_streamline=STREAMLINE_PATTERN.search(path_str) is not None,
  )
