"""Tests for wren.errors — exception hierarchy and error messages."""

import pytest

from wren import FieldSpec, FormConfiguration, create_form
from wren.errors import (
    CheckerNotInstalledError,
    ConfigurationError,
    RemoteCheckError,
    UnknownFieldError,
    WrenError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [ConfigurationError, UnknownFieldError, CheckerNotInstalledError, RemoteCheckError],
    )
    def test_all_are_wren_errors(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, WrenError)

    def test_unknown_field_is_key_error(self) -> None:
        assert issubclass(UnknownFieldError, KeyError)


class TestUnknownFieldError:
    def test_message_is_not_quoted_twice(self) -> None:
        err = UnknownFieldError("nickname")
        assert str(err) == "Unknown field: 'nickname'"
        assert err.field == "nickname"

    def test_raised_by_container(self) -> None:
        form = create_form(FormConfiguration(email=FieldSpec()))
        with pytest.raises(UnknownFieldError) as excinfo:
            form.set_field_error("emial", "typo")
        assert excinfo.value.field == "emial"


class TestRemoteCheckError:
    def test_carries_context(self) -> None:
        err = RemoteCheckError("https://api.test/exists", 503, "down for maintenance")
        assert err.url == "https://api.test/exists"
        assert err.status == 503
        assert err.detail == "down for maintenance"
        assert "503" in str(err)
        assert "https://api.test/exists" in str(err)
