"""Tests for wren.config — FormOptions frozen dataclass."""

import pytest

from wren.config import FormOptions


class TestFormOptions:
    def test_defaults(self) -> None:
        opts = FormOptions()

        assert opts.debounce_seconds == 0.5
        assert opts.check_timeout == 10.0
        assert opts.block_submit_while_checking is True
        assert opts.revalidate == "form"

    def test_override(self) -> None:
        opts = FormOptions(debounce_seconds=0.2, revalidate="dependents")

        assert opts.debounce_seconds == 0.2
        assert opts.revalidate == "dependents"

    def test_frozen(self) -> None:
        opts = FormOptions()

        with pytest.raises(AttributeError):
            opts.debounce_seconds = 1.0  # type: ignore[misc]

    def test_zero_debounce_allowed(self) -> None:
        assert FormOptions(debounce_seconds=0).debounce_seconds == 0

    def test_equality(self) -> None:
        assert FormOptions(check_timeout=3.0) == FormOptions(check_timeout=3.0)


class TestValidation:
    def test_negative_debounce(self) -> None:
        with pytest.raises(ValueError, match="debounce_seconds"):
            FormOptions(debounce_seconds=-0.1)

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_non_positive_timeout(self, timeout: float) -> None:
        with pytest.raises(ValueError, match="check_timeout"):
            FormOptions(check_timeout=timeout)

    def test_unknown_revalidate_mode(self) -> None:
        with pytest.raises(ValueError, match="revalidate"):
            FormOptions(revalidate="touched")  # type: ignore[arg-type]
