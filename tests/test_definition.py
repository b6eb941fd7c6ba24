import pytest
from pydantic import ValidationError as PydanticValidationError

from has_easy.core.definition import AttributeDefinition, type_tag


def test_type_tags_are_normalized_to_types():
    definition = AttributeDefinition(name="count", type_check="int")
    assert definition.type_check == (int,)

    mixed = AttributeDefinition(name="payload", type_check=[dict, "none", float])
    assert mixed.type_check == (dict, type(None), float)


def test_unknown_type_tag_rejected():
    with pytest.raises(PydanticValidationError, match="unknown type tag"):
        AttributeDefinition(name="count", type_check=["integer"])


def test_only_one_default_strategy():
    with pytest.raises(PydanticValidationError, match="only one default strategy"):
        AttributeDefinition(name="theme", default="dark", default_through="client")


def test_enumerated_validator_becomes_tuple():
    definition = AttributeDefinition(name="color", validate=["red", "blue"])
    assert definition.validator == ("red", "blue")


def test_validator_must_be_enumeration_callable_or_name():
    with pytest.raises(PydanticValidationError):
        AttributeDefinition(name="color", validate=42)


@pytest.mark.parametrize("name", ["", "1st", "has space", "_private"])
def test_attribute_name_must_be_public_identifier(name):
    with pytest.raises(PydanticValidationError):
        AttributeDefinition(name=name)


def test_static_default_detection():
    assert AttributeDefinition(name="a", default=None).has_static_default
    assert not AttributeDefinition(name="a").has_static_default
    assert AttributeDefinition(name="a", default=0).default_strategy == "static"
    assert AttributeDefinition(name="a", default_through="client").default_strategy == "through"
    assert AttributeDefinition(name="a", default_dynamic=lambda h: 1).default_strategy == "dynamic"
    assert AttributeDefinition(name="a").default_strategy is None


def test_definitions_are_immutable():
    definition = AttributeDefinition(name="color", default="red")
    with pytest.raises(PydanticValidationError):
        definition.default = "blue"


def test_unknown_option_rejected():
    with pytest.raises(PydanticValidationError):
        AttributeDefinition(name="color", defualt="red")


def test_type_tag_names():
    assert type_tag(str) == "str"
    assert type_tag(type(None)) == "none"
    assert type_tag(bytes) == "bytes"
