"""Tests for wren.__init__ — lazy import registry covers all public names."""

import pytest

import wren


@pytest.mark.parametrize("name", wren.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(wren, name)
    assert obj is not None, f"wren.{name} resolved to None"


def test_top_level_names_are_the_submodule_objects() -> None:
    from wren.config import FormOptions
    from wren.forms import FormContainer

    assert wren.FormOptions is FormOptions
    assert wren.FormContainer is FormContainer


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        wren.__getattr__("ThisDoesNotExist")
