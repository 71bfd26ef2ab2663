from __future__ import annotations

import pytest

from gpt_bridge.core.exceptions import (
    ConfigurationError,
    GPTBridgeError,
    ParameterValidationError,
    UpstreamError,
)
from gpt_bridge.core.types import ErrorKind


@pytest.mark.parametrize(
    ('exc_cls', 'kind'),
    [(ParameterValidationError, ErrorKind.validation), (UpstreamError, ErrorKind.upstream)],
)
def test_error_kind_matches_result_classification(exc_cls: type[GPTBridgeError], kind: ErrorKind) -> None:
    assert ErrorKind(exc_cls.error_kind) is kind


def test_default_message_is_class_name() -> None:
    assert str(UpstreamError()) == 'UpstreamError'
    assert ConfigurationError.error_kind == 'ConfigurationError'


def test_validation_error_keeps_fields() -> None:
    exc = ParameterValidationError('bad', fields=('top_p',))
    assert exc.fields == ('top_p',)
    assert str(exc) == 'bad'
