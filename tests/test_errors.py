import logging

import pytest

from dokit.errors import (
    InnerError,
    convert_error,
    ignore_last,
    log_values,
    match_error,
    must,
    must_values,
)


class CustomError(Exception):
    def __init__(self, code, msg):
        super().__init__(msg)
        self.code = code
        self.msg = msg

    def __str__(self):
        return f"[ERR] code: {self.code}, msg: {self.msg}"


def test_must_none():
    assert must(None) is None


def test_must_std_error():
    with pytest.raises(InnerError) as info:
        must(ValueError("std error come"))
    assert str(info.value) == "raw error: std error come"


def test_must_empty_error():
    with pytest.raises(InnerError) as info:
        must(ValueError(""))
    assert str(info.value) == "raw error: "


def test_must_custom_error_matches():
    with pytest.raises(InnerError) as info:
        must(CustomError(1, "custom error come"))
    assert str(info.value) == "raw error: [ERR] code: 1, msg: custom error come"
    assert match_error(info.value) is True


def test_convert_error_keeps_raw():
    err = CustomError(1, "custom error come")
    with pytest.raises(InnerError) as info:
        must(err)
    converted = convert_error(info.value)
    assert converted is info.value
    assert converted.inner.raw is err


def test_match_error_rejects_other_errors():
    assert match_error(ValueError("x")) is False
    assert convert_error(InnerError("plain")) is None


def test_must_values():
    assert must_values(1, None) == 1
    assert must_values(1, "", None) == (1, "")
    assert must_values(1, "", "", 0.0, 1.0, None) == (1, "", "", 0.0, 1.0)


def test_must_values_raises():
    with pytest.raises(InnerError) as info:
        must_values(1, ValueError("boom"))
    assert str(info.value) == "raw error: boom"


def test_must_values_requires_arguments():
    with pytest.raises(TypeError):
        must_values()


@pytest.mark.parametrize("value", [0, 1])
def test_log_values(value, caplog):
    with caplog.at_level(logging.ERROR):
        got = log_values(value, ValueError("err show"))
    assert got == value
    assert "raw error: err show" in caplog.text


def test_ignore_last():
    assert ignore_last(1, "2") == 1
    assert ignore_last(1, "2", 4.0) == (1, "2")