"""
Enumerations shared across the loader.
"""

from enum import Enum


class SourceKind(str, Enum):
  """
  Classification of a source file by its name.

  Attributes:
      PLAIN: Neither transform applies; the file is served as-is.
      COFFEE: Only the coffee transpiler applies.
      STREAMLINE: Only the streamline transform applies.
      COFFEE_STREAMLINE: Coffee first, then streamline.
  """

  PLAIN = "plain"
  COFFEE = "coffee"
  STREAMLINE = "streamline"
  COFFEE_STREAMLINE = "coffee+streamline"

  @classmethod
  def from_tags(cls, coffee: bool, streamline: bool) -> "SourceKind":
    """Builds the variant from the two independent dialect tags."""
    if coffee and streamline:
      return cls.COFFEE_STREAMLINE
    if coffee:
      return cls.COFFEE
    if streamline:
      return cls.STREAMLINE
    return cls.PLAIN


class Stage(str, Enum):
  """Transform stages, listed in the order they run."""

  COFFEE = "coffee"
  STREAMLINE = "streamline"
