"""
Tests for Source Classification and the Transform Pipeline.

Verifies which stages fire for each naming convention, their order, the
options each engine receives, and how engine failures are reported.
"""

import pytest

from transload.core.classify import LOADER_EXTENSIONS, classify
from transload.core.pipeline import TransformError
from transload.enums import SourceKind, Stage


@pytest.mark.parametrize(
  "name, kind",
  [
    ("x.coffee", SourceKind.COFFEE),
    ("x.py", SourceKind.PLAIN),
    ("x_.py", SourceKind.STREAMLINE),
    ("x._py", SourceKind.STREAMLINE),
    ("x_.coffee", SourceKind.COFFEE_STREAMLINE),
    ("x._coffee", SourceKind.COFFEE_STREAMLINE),
    ("x.txt", SourceKind.PLAIN),
    ("x_.txt", SourceKind.PLAIN),
  ],
)
def test_classification(name, kind):
  assert classify(f"/proj/{name}").kind is kind


def test_descriptor_exposes_extension():
  desc = classify("/proj/pkg/mod._coffee")
  assert desc.extension == "._coffee"
  assert desc.is_coffee and desc.is_streamline


def test_descriptor_is_immutable():
  desc = classify("/proj/x.coffee")
  with pytest.raises(Exception):
    desc.is_coffee = False


def test_loader_claims_four_extensions():
  assert set(LOADER_EXTENSIONS) == {".py", ".coffee", "._py", "._coffee"}


def test_coffee_only(pipeline, calls):
  out = pipeline.compile("/proj/x.coffee", "a = 1")

  assert [c[0] for c in calls] == ["coffee"]
  assert out == "# coffee\na = 1"


def test_plain_python_is_returned_unchanged(pipeline, calls):
  out = pipeline.compile("/proj/x.py", "a = 1")

  assert calls == []
  assert out == "a = 1"


def test_unknown_extension_is_returned_unchanged(pipeline, calls):
  assert pipeline.compile("/proj/x.txt", "whatever") == "whatever"
  assert calls == []


def test_streamline_only(pipeline, calls):
  out = pipeline.compile("/proj/x_.py", "a = 1")

  assert [c[0] for c in calls] == ["streamline"]
  assert out == "a = 1\n# streamlined\n"


def test_both_stages_run_coffee_first(pipeline, calls):
  out = pipeline.compile("/proj/x._coffee", "a = 1")

  assert [c[0] for c in calls] == ["coffee", "streamline"]
  # streamline receives the coffee output, not the raw source
  assert calls[1][1] == "# coffee\na = 1"
  assert out == "# coffee\na = 1\n# streamlined\n"


def test_engine_options(pipeline, calls):
  pipeline.compile("/proj/x._coffee", "a = 1")

  assert calls[0][2] == {"filename": "/proj/x._coffee", "bare": True}
  assert calls[1][2] == {"lines": "preserve"}


def test_precomputed_descriptor_is_used(pipeline, calls):
  """The descriptor passed in wins over re-classifying the path."""
  desc = classify("/proj/other.coffee")
  pipeline.compile("/proj/x.py", "a = 1", desc)

  assert [c[0] for c in calls] == ["coffee"]


def test_coffee_failure_names_path_and_stage(pipeline):
  with pytest.raises(TransformError) as exc_info:
    pipeline.compile("/proj/broken.coffee", "a = !!")

  err = exc_info.value
  assert err.path == "/proj/broken.coffee"
  assert err.stage is Stage.COFFEE
  assert "/proj/broken.coffee" in str(err)
  assert isinstance(err.__cause__, SyntaxError)


def test_streamline_failure_names_stage(pipeline):
  with pytest.raises(TransformError) as exc_info:
    pipeline.compile("/proj/broken_.py", "a = ??")

  assert exc_info.value.stage is Stage.STREAMLINE


def test_transform_error_is_value_error(pipeline):
  with pytest.raises(ValueError):
    pipeline.compile("/proj/broken.coffee", "!!")
