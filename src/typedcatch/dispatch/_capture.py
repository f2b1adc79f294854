"""Protected execution: run a callable and capture whatever it raises.

The outcome is a two-variant result so the dispatcher can be driven by
synthetic captures in tests, without raising anything real.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import NoReturn, Union


class Panic(Exception):
    """Unwind carrier for payloads that are not exceptions themselves."""

    def __init__(self, payload: object) -> None:
        super().__init__(payload)
        self.payload = payload


def panic_any(payload: object) -> NoReturn:
    """Raise *payload*: exceptions as themselves, anything else in a ``Panic``."""
    if isinstance(payload, BaseException):
        raise payload
    raise Panic(payload)


def payload_of(error: BaseException) -> object:
    """The dynamically-typed payload carried by *error*."""
    if isinstance(error, Panic):
        return error.payload
    return error


# ---------------------------------------------------------------------------
# Capture result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Completed:
    """The protected callable returned normally."""

    value: object


@dataclass(frozen=True)
class Captured:
    """The protected callable raised; *error* is the exception object."""

    error: BaseException

    @classmethod
    def from_payload(cls, payload: object) -> Captured:
        """Wrap *payload* the way ``panic_any`` would, without raising."""
        if isinstance(payload, BaseException):
            return cls(payload)
        return cls(Panic(payload))

    @property
    def payload(self) -> object:
        return payload_of(self.error)

    def reraise(self) -> NoReturn:
        """Resume unwinding with the original exception object."""
        raise self.error


CaptureResult = Union[Completed, Captured]


DEFAULT_PASSTHROUGH: tuple[type[BaseException], ...] = (
    KeyboardInterrupt,
    SystemExit,
    GeneratorExit,
)


def capture(
    protected: Callable[[], object],
    passthrough: tuple[type[BaseException], ...] = DEFAULT_PASSTHROUGH,
) -> CaptureResult:
    """Run *protected* and stop anything it raises at this boundary.

    Exceptions of a *passthrough* type are non-resumable: they are never
    captured and keep propagating.  Whatever *protected* mutated stays
    mutated in both outcomes.
    """
    try:
        value = protected()
    except passthrough:
        raise
    except BaseException as exc:
        return Captured(exc)
    return Completed(value)
