"""Tests for FieldSpec and FormConfiguration."""

import pytest

from wren.errors import ConfigurationError, UnknownFieldError
from wren.forms import AsyncCheck, FieldSpec, FormConfiguration
from wren.validation import equals_field, required, required_if


class TestFieldSpec:
    def test_defaults(self) -> None:
        spec = FieldSpec()
        assert spec.initial == ""
        assert spec.validators == ()
        assert spec.check is None

    def test_list_validators_stored_as_tuple(self) -> None:
        spec = FieldSpec(validators=[required])
        assert spec.validators == (required,)

    def test_reads_merges_explicit_and_advertised(self) -> None:
        spec = FieldSpec(validators=(equals_field("password"),), depends_on=("email",))
        assert spec.reads == frozenset({"password", "email"})

    def test_frozen(self) -> None:
        spec = FieldSpec()
        with pytest.raises(AttributeError):
            spec.initial = "x"  # type: ignore[misc]


class TestAsyncCheck:
    def test_probe_prefers_exists_method(self) -> None:
        class Registry:
            async def exists(self, value):
                return False

        registry = Registry()
        assert AsyncCheck(registry).probe() == registry.exists

    def test_probe_accepts_plain_callable(self) -> None:
        def taken(value):
            return value == "x"

        assert AsyncCheck(taken).probe() is taken


class TestFormConfiguration:
    def test_mapping_interface(self) -> None:
        config = FormConfiguration(a=FieldSpec(), b=FieldSpec())
        assert list(config) == ["a", "b"]
        assert len(config) == 2
        assert "a" in config

    def test_mapping_positional(self) -> None:
        config = FormConfiguration({"first-name": FieldSpec(initial="x")})
        assert config.initial_values() == {"first-name": "x"}

    def test_empty_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            FormConfiguration()

    def test_non_fieldspec_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="FieldSpec"):
            FormConfiguration(a={"initial": ""})  # type: ignore[arg-type]

    def test_undeclared_dependency_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="password"):
            FormConfiguration(confirm=FieldSpec(validators=(equals_field("password"),)))

    def test_unknown_field_lookup(self) -> None:
        config = FormConfiguration(a=FieldSpec())
        with pytest.raises(UnknownFieldError):
            config["nope"]
        assert config.get("nope") is None

    def test_initial_values_are_fresh_copies(self) -> None:
        config = FormConfiguration(tags=FieldSpec(initial=[]))
        first = config.initial_values()
        first["tags"].append("x")
        assert config.initial_values() == {"tags": []}

    def test_dependents_of(self) -> None:
        config = FormConfiguration(
            password=FieldSpec(validators=(required,)),
            confirm=FieldSpec(validators=(required, equals_field("password"))),
        )
        assert config.dependents_of("password") == frozenset({"confirm"})
        assert config.dependents_of("confirm") == frozenset()

    def test_affected_by_is_transitive(self) -> None:
        config = FormConfiguration(
            method=FieldSpec(),
            address=FieldSpec(validators=(required_if("method", "delivery"),)),
            detail=FieldSpec(depends_on=("address",)),
            note=FieldSpec(),
        )
        assert config.affected_by("method") == frozenset({"method", "address", "detail"})
        assert config.affected_by("note") == frozenset({"note"})

    def test_affected_by_survives_cycles(self) -> None:
        config = FormConfiguration(
            a=FieldSpec(validators=(equals_field("b"),)),
            b=FieldSpec(validators=(equals_field("a"),)),
        )
        assert config.affected_by("a") == frozenset({"a", "b"})

    def test_checked_fields(self) -> None:
        config = FormConfiguration(
            name=FieldSpec(),
            email=FieldSpec(check=AsyncCheck(lambda v: False)),
        )
        assert config.checked_fields() == ("email",)
