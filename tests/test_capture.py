"""Tests for protected execution and the capture result."""

import pytest

from conftest import raising

from typedcatch.dispatch import Captured, Completed, Panic, capture, panic_any, payload_of


def interrupt():
    raise KeyboardInterrupt


# ---------------------------------------------------------------------------
# panic_any / payload_of
# ---------------------------------------------------------------------------

class TestPanicAny:
    def test_wraps_plain_values(self):
        with pytest.raises(Panic) as info:
            panic_any(62)
        assert info.value.payload == 62

    def test_raises_exceptions_as_themselves(self):
        error = ValueError("boom")
        with pytest.raises(ValueError) as info:
            panic_any(error)
        assert info.value is error

    def test_payload_of_panic(self):
        payload = ["a"]
        assert payload_of(Panic(payload)) is payload

    def test_payload_of_exception(self):
        error = KeyError("k")
        assert payload_of(error) is error


# ---------------------------------------------------------------------------
# capture()
# ---------------------------------------------------------------------------

class TestCapture:
    def test_completed(self):
        assert capture(lambda: 86) == Completed(86)

    def test_completed_none(self):
        assert capture(lambda: None) == Completed(None)

    def test_captured_panic(self):
        result = capture(raising("Catch me if you can"))
        assert isinstance(result, Captured)
        assert isinstance(result.error, Panic)
        assert result.payload == "Catch me if you can"

    def test_captured_exception(self):
        error = ZeroDivisionError("b was zero")
        result = capture(raising(error))
        assert result.error is error
        assert result.payload is error

    def test_side_effects_persist(self):
        log = []

        def protected():
            log.append("before")
            panic_any(1)

        capture(protected)
        assert log == ["before"]

    def test_passthrough_not_captured(self):
        with pytest.raises(KeyboardInterrupt):
            capture(interrupt)

    def test_empty_passthrough_captures_everything(self):
        result = capture(interrupt, passthrough=())
        assert isinstance(result.error, KeyboardInterrupt)


# ---------------------------------------------------------------------------
# Captured
# ---------------------------------------------------------------------------

class TestCaptured:
    def test_from_plain_payload(self):
        captured = Captured.from_payload(62)
        assert isinstance(captured.error, Panic)
        assert captured.payload == 62

    def test_from_exception_payload(self):
        error = RuntimeError("x")
        assert Captured.from_payload(error).error is error

    def test_reraise_same_object(self):
        error = Panic({"code": 7})
        captured = Captured(error)
        with pytest.raises(Panic) as info:
            captured.reraise()
        assert info.value is error
        assert info.value.payload is error.payload
