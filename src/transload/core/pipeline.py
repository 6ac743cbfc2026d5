"""
Transform Pipeline.

Applies zero, one or two transforms to a source text, always in the same order:
coffee first, streamline second. Streamline expects Python input, so a
``._coffee`` file is transpiled before it is streamlined.
"""

import logging
import os
from typing import Optional

from transload.core.classify import SourceDescriptor, classify
from transload.core.fs import PathLike
from transload.engines.base import CoffeeEngine, CoffeeOptions, StreamlineEngine, StreamlineOptions
from transload.enums import Stage

logger = logging.getLogger(__name__)


class TransformError(ValueError):
  """
  A transform engine rejected a source file.

  Attributes:
      path (str): The offending source file.
      stage (Stage): The stage that failed.
  """

  def __init__(self, path: str, stage: Stage, message: str):
    super().__init__(f"{stage.value} transform failed for {path}: {message}")
    self.path = path
    self.stage = stage


class TransformPipeline:
  """
  Chains the coffee and streamline engines according to a file's dialect tags.
  """

  def __init__(self, coffee: CoffeeEngine, streamline: StreamlineEngine):
    """
    Args:
        coffee: Engine used for coffee sources.
        streamline: Engine used for streamline-annotated sources.
    """
    self.coffee = coffee
    self.streamline = streamline

  def compile(
    self,
    source_path: PathLike,
    source_text: str,
    descriptor: Optional[SourceDescriptor] = None,
  ) -> str:
    """
    Transforms `source_text` into executable Python.

    Args:
        source_path: Absolute path of the source, used for classification and diagnostics.
        source_text: Raw file content.
        descriptor: Precomputed classification. Derived from `source_path` if omitted.

    Returns:
        str: The transformed text, or `source_text` unchanged when no tag applies.

    Raises:
        TransformError: If either engine fails. Nothing has been written at that point.
    """
    path = os.fspath(source_path)
    desc = descriptor or classify(path)
    output = source_text

    if desc.is_coffee:
      options = CoffeeOptions(filename=path)
      logger.debug("coffee: %s", path)
      try:
        output = self.coffee.compile(output, options.model_dump())
      except Exception as e:
        raise TransformError(path, Stage.COFFEE, str(e)) from e

    if desc.is_streamline:
      options = StreamlineOptions()
      logger.debug("streamline: %s", path)
      try:
        output = self.streamline.transform(output, options.model_dump())
      except Exception as e:
        raise TransformError(path, Stage.STREAMLINE, str(e)) from e

    return output
