"""Tests for the application exception hierarchy."""

import pytest

from src.exceptions import (
    AppError,
    ConfigurationError,
    GenerationError,
    PublishError,
    SerializationError,
    SourceLoadError,
)


@pytest.mark.parametrize(
    "cls, code, transient",
    [
        (ConfigurationError, "CONFIGURATION_ERROR", False),
        (SourceLoadError, "SOURCE_LOAD_ERROR", False),
        (SerializationError, "SERIALIZATION_ERROR", False),
        (GenerationError, "GENERATION_ERROR", True),
        (PublishError, "PUBLISH_ERROR", False),
    ],
)
def test_error_codes(cls, code, transient):
    error = cls("went wrong", context={"k": "v"})
    assert isinstance(error, AppError)
    assert str(error) == f"{code}: went wrong"
    assert error.to_dict() == {
        "error_code": code,
        "message": "went wrong",
        "context": {"k": "v"},
        "is_transient": transient,
    }
