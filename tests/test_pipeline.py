"""Tests for the attribute rule pipeline without a database."""

import pytest

from has_easy.core import pipeline
from has_easy.core.definition import AttributeDefinition
from has_easy.core.errors import ConfigurationError, ValidationError
from has_easy.core.outcome import TYPE_CHECK_MESSAGE, VALIDATION_MESSAGE
from has_easy.core.schema import CollectionBuilder


class Host:
    def __init__(self, name="ada"):
        self.name = name

    def check_nick(self, value):
        if value == "root":
            raise ValidationError("is reserved")
        if value == "":
            raise ValidationError()
        if value == "x":
            return ["is too short", "needs a vowel"]
        if value == "none":
            return None
        return []

    def signature(self):
        return f"-- {self.name}"


def _bound(name, **options):
    schema = CollectionBuilder("prefs").define(name, **options).build().bind(Host)
    return schema.get(name)


class TestResolveDefault:
    def test_static_default(self):
        definition = AttributeDefinition(name="color", default="red")
        assert pipeline.resolve_default(definition, Host()) == "red"

    def test_static_default_is_copied(self):
        definition = AttributeDefinition(name="tags", default=["a"])
        first = pipeline.resolve_default(definition, Host())
        first.append("b")
        assert pipeline.resolve_default(definition, Host()) == ["a"]

    def test_no_strategy_yields_none(self):
        assert pipeline.resolve_default(AttributeDefinition(name="color"), Host()) is None

    def test_computed_default_sees_current_host_state(self):
        definition = AttributeDefinition(name="greeting", default_dynamic=lambda h: f"hi {h.name}")
        host = Host("ada")
        assert pipeline.resolve_default(definition, host) == "hi ada"
        host.name = "grace"
        assert pipeline.resolve_default(definition, host) == "hi grace"

    def test_owner_method_default(self):
        definition = _bound("signature", default_dynamic="signature")
        assert pipeline.resolve_default(definition, Host("bob")) == "-- bob"

    def test_owner_method_default_requires_binding(self):
        definition = AttributeDefinition(name="signature", default_dynamic="signature")
        with pytest.raises(ConfigurationError):
            pipeline.resolve_default(definition, Host())

    def test_computed_default_errors_propagate(self):
        def boom(host):
            raise RuntimeError("boom")

        definition = AttributeDefinition(name="greeting", default_dynamic=boom)
        with pytest.raises(RuntimeError, match="boom"):
            pipeline.resolve_default(definition, Host())


class TestTypeCheck:
    def test_no_declared_types_accepts_anything(self):
        definition = AttributeDefinition(name="anything")
        assert pipeline.type_check(definition, object())

    def test_membership(self):
        definition = AttributeDefinition(name="dollars", type_check=[int])
        assert pipeline.type_check(definition, 5)
        assert not pipeline.type_check(definition, "hello")

    def test_exact_class_match(self):
        definition = AttributeDefinition(name="dollars", type_check=int)
        assert not pipeline.type_check(definition, True)

    def test_none_tag(self):
        definition = AttributeDefinition(name="maybe", type_check=["str", "none"])
        assert pipeline.type_check(definition, None)
        assert pipeline.type_check(definition, "x")
        assert not pipeline.type_check(definition, 1)


class TestValidate:
    def test_no_validator_always_valid(self):
        assert pipeline.validate(AttributeDefinition(name="a"), "x").ok

    def test_enumerated(self):
        definition = AttributeDefinition(name="color", validate=["red", "blue"])
        assert pipeline.validate(definition, "red").ok
        outcome = pipeline.validate(definition, "pink")
        assert not outcome.ok
        assert outcome.messages == [VALIDATION_MESSAGE]
        assert outcome.failures[0].attribute == "color"

    def test_predicate(self):
        definition = AttributeDefinition(name="age", validate=lambda v: v >= 0)
        assert pipeline.validate(definition, 3).ok
        assert pipeline.validate(definition, -1).messages == [VALIDATION_MESSAGE]

    def test_owner_method_custom_messages_in_order(self):
        definition = _bound("nick", validate="check_nick")
        outcome = pipeline.validate(definition, "x", Host())
        assert outcome.messages == ["is too short", "needs a vowel"]

    def test_owner_method_raising_validation_error(self):
        definition = _bound("nick", validate="check_nick")
        assert pipeline.validate(definition, "root", Host()).messages == ["is reserved"]

    def test_validation_error_without_message_uses_generic(self):
        definition = _bound("nick", validate="check_nick")
        assert pipeline.validate(definition, "", Host()).messages == [VALIDATION_MESSAGE]

    def test_owner_method_falsy_result_is_generic_failure(self):
        definition = _bound("nick", validate="check_nick")
        assert pipeline.validate(definition, "none", Host()).messages == [VALIDATION_MESSAGE]

    def test_owner_method_empty_list_is_success(self):
        definition = _bound("nick", validate="check_nick")
        assert pipeline.validate(definition, "grace", Host()).ok

    def test_other_exceptions_propagate(self):
        def broken(value):
            raise ZeroDivisionError

        definition = AttributeDefinition(name="a", validate=broken)
        with pytest.raises(ZeroDivisionError):
            pipeline.validate(definition, 1)


class TestCheck:
    def test_type_failure_skips_validation(self):
        def never(value):
            raise AssertionError("validator must not run")

        definition = AttributeDefinition(name="dollars", type_check=[int], validate=never)
        outcome = pipeline.check(definition, "hello")
        assert outcome.messages == [TYPE_CHECK_MESSAGE]
        assert outcome.failures[0].kind == "type_check"

    def test_passes_both(self):
        definition = AttributeDefinition(name="color", type_check=str, validate=["red"])
        assert pipeline.check(definition, "red").ok

    def test_failure_converts_to_exception(self):
        definition = AttributeDefinition(name="dollars", type_check=[int])
        failure = pipeline.check(definition, "hello").failures[0]
        exc = failure.to_exception()
        assert "dollars" in str(exc)
        assert "failed type check" in str(exc)


class TestProcessing:
    def test_identity_without_hooks(self):
        definition = AttributeDefinition(name="a")
        assert pipeline.preprocess(definition, " X ") == " X "
        assert pipeline.postprocess(definition, " X ") == " X "

    def test_hooks_applied(self):
        definition = AttributeDefinition(name="a", preprocess=str.strip, postprocess=str.upper)
        assert pipeline.preprocess(definition, " x ") == "x"
        assert pipeline.postprocess(definition, "x") == "X"

    def test_hook_errors_propagate(self):
        definition = AttributeDefinition(name="a", preprocess=str.strip)
        with pytest.raises(AttributeError):
            pipeline.preprocess(definition, 5)
