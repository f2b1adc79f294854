"""End-to-end tests for try_catch: the try { } catch { } block analogue."""

import pytest

from conftest import must_not_run, raising

from typedcatch.framework import Panic, arm, panic_any, try_catch


ARR = ["hey", "this", "is", "a", "array"]


def modulo(a, b):
    if b == 0:
        panic_any("b was zero")
    return a % b


def nope():
    panic_any("Nope!")


# ---------------------------------------------------------------------------
# Examples
# ---------------------------------------------------------------------------

class TestExamples:
    def test_modulo_without_panic(self):
        res = try_catch(lambda: modulo(5, 2), arm(str, "s", lambda s: 0))
        assert res == 1

    def test_modulo_with_panic(self):
        messages = []

        def handler(s):
            messages.append(s)
            return 0

        res = try_catch(lambda: modulo(5, 0), arm(str, "s", handler))
        assert res == 0
        assert messages == ["b was zero"]

    def test_slice_patterns(self):
        res = try_catch(
            raising(ARR[1:]),
            arm(int, "_", nope),
            arm(list[str], '["uh", s, *_]', lambda s: s),
            arm(list[str], '["this", h, *t]', lambda h, t: f"{h}_{t[1]}"),
        )
        assert res == "is_array"


# ---------------------------------------------------------------------------
# Block behaviour
# ---------------------------------------------------------------------------

class TestTryCatch:
    def test_empty(self):
        with pytest.raises(Panic):
            try_catch(raising("Nothing should catch this"))

    def test_no_panic(self):
        assert try_catch(lambda: 86, arm(int, "i", lambda i: i + 12)) == 86

    def test_one_arm(self):
        assert try_catch(raising("Catch me if you can"), arm(str, "_", lambda: 42)) == 42

    def test_multi_arm(self):
        res = try_catch(
            raising(6.54),
            arm(int, "_", nope),
            arm(complex, "_", lambda: 65),
            arm(float, "_", lambda: 42),
            arm(str, "_", lambda: 87),
        )
        assert res == 42

    def test_patterns(self):
        res = try_catch(
            raising(ARR[1:]),
            arm(int, "_", nope),
            arm(str, "s", lambda s: s),
            arm(list[str], '["uh", s, *_]', must_not_run),
            arm(list[str], '["this", h, *t]', lambda h, t: f"{h}_{t[1]}"),
        )
        assert res == "is_array"

    def test_block_handler(self):
        def handler(i):
            i = i + 2
            return str(i)

        assert try_catch(raising(62), arm(int, "i", handler)) == "64"

    def test_panic_in_handler(self):
        with pytest.raises(Panic) as info:
            try_catch(raising(62), arm(int, "_", lambda: panic_any("Catch me")))
        assert info.value.payload == "Catch me"

    def test_panic_propagate(self):
        def inner():
            return try_catch(raising(62), arm(int, "_", lambda: panic_any("Catch me")))

        res = try_catch(inner, arm(str, "s", lambda s: f'"{s}"? Caught you!'))
        assert res == '"Catch me"? Caught you!'

    def test_unmatched_inner_reaches_outer(self):
        def inner():
            return try_catch(raising(b"raw"), arm(str, "_", must_not_run))

        assert try_catch(inner, arm(bytes, "b", lambda b: b.decode())) == "raw"
