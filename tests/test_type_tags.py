"""Tests for TypeTag construction and runtime type identity."""

import pytest
from pydantic import ValidationError

from typedcatch.model.types import TypeTag


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestTypeTagOf:
    def test_plain_class(self):
        assert TypeTag.of(int) == TypeTag(target=int)

    def test_list_alias(self):
        tag = TypeTag.of(list[str])
        assert tag.target is list
        assert tag.element is str

    def test_homogeneous_tuple_alias(self):
        tag = TypeTag.of(tuple[int, ...])
        assert tag.target is tuple
        assert tag.element is int

    def test_tag_passes_through(self):
        tag = TypeTag.of(float)
        assert TypeTag.of(tag) is tag

    def test_fixed_tuple_rejected(self):
        with pytest.raises(TypeError, match="Unsupported type annotation"):
            TypeTag.of(tuple[int, str])

    def test_dict_alias_rejected(self):
        with pytest.raises(TypeError, match="Unsupported type annotation"):
            TypeTag.of(dict[str, int])

    def test_non_type_rejected(self):
        with pytest.raises(TypeError, match="expects a class"):
            TypeTag.of("int")

    def test_element_on_non_sequence(self):
        with pytest.raises(ValidationError, match="element type only applies"):
            TypeTag(target=int, element=str)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class TestTypeTagIdentity:
    def test_same_type_equal(self):
        assert TypeTag.of(int) == TypeTag.of(int)
        assert hash(TypeTag.of(int)) == hash(TypeTag.of(int))

    def test_different_types_unequal(self):
        assert TypeTag.of(int) != TypeTag.of(float)
        assert TypeTag.of(list[str]) != TypeTag.of(list[int])
        assert TypeTag.of(list[str]) != TypeTag.of(list)

    def test_frozen(self):
        tag = TypeTag.of(int)
        with pytest.raises(ValidationError):
            tag.target = str

    def test_names(self):
        assert TypeTag.of(int).name == "int"
        assert TypeTag.of(list[str]).name == "list[str]"
        assert TypeTag.of(tuple[int, ...]).name == "tuple[int, ...]"


# ---------------------------------------------------------------------------
# matches()
# ---------------------------------------------------------------------------

class TestTypeTagMatches:
    def test_exact_type(self):
        assert TypeTag.of(int).matches(62)

    def test_other_type(self):
        assert not TypeTag.of(int).matches(6.54)
        assert not TypeTag.of(str).matches(62)

    def test_bool_is_not_int(self):
        assert not TypeTag.of(int).matches(True)

    def test_subclass_needs_relaxed_check(self):
        tag = TypeTag.of(OSError)
        error = FileNotFoundError("missing")
        assert not tag.matches(error)
        assert tag.matches(error, exact=False)

    def test_list_elements(self):
        tag = TypeTag.of(list[str])
        assert tag.matches(["this", "is"])
        assert not tag.matches(["this", 1])

    def test_list_tag_rejects_tuple(self):
        assert not TypeTag.of(list[str]).matches(("this", "is"))

    def test_empty_list_matches_any_element(self):
        assert TypeTag.of(list[str]).matches([])

    def test_tuple_elements(self):
        tag = TypeTag.of(tuple[int, ...])
        assert tag.matches((1, 2, 3))
        assert not tag.matches((1, "2"))

    def test_does_not_consume_payload(self):
        payload = ["a", "b"]
        TypeTag.of(list[int]).matches(payload)
        assert payload == ["a", "b"]
