from has_easy.core.registries.collection_registry import CollectionRegistry
from has_easy.core.registries.validators import SchemaValidator
from has_easy.core.schema import CollectionBuilder


def _registry(*builders):
    registry = CollectionRegistry()
    for builder in builders:
        schema = builder.build()
        registry.register(schema.name, schema)
    return registry


class Host:
    preferences = None
    client = None

    def check(self, value):
        return True


def test_clean_schema_has_no_errors():
    registry = _registry(
        CollectionBuilder("options", aliases=["opts"])
        .define("color", default="red", type_check=str, validate=["red", "blue"])
        .define("check_me", validate="check")
        .define("theme", default_through="client")
    )
    assert SchemaValidator(registry).validate_all() == []
    assert SchemaValidator(registry, Host).validate_all() == []


def test_default_failing_type_check():
    registry = _registry(CollectionBuilder("options").define("dollars", default="ten", type_check=int))
    errors = SchemaValidator(registry).validate_all()
    assert errors == ["Collection options.dollars: default 'ten' fails its own type check"]


def test_default_not_allowed():
    registry = _registry(CollectionBuilder("options").define("color", default="pink", validate=["red"]))
    errors = SchemaValidator(registry).validate_all()
    assert any("not an allowed value" in e for e in errors)


def test_accessor_reused_across_collections():
    registry = _registry(
        CollectionBuilder("options", aliases=["opts"]),
        CollectionBuilder("flags", aliases=["opts"]),
    )
    errors = SchemaValidator(registry).validate_all()
    assert errors == ["Collection flags: accessor 'opts' already used by collection options"]


def test_host_references():
    registry = _registry(
        CollectionBuilder("preferences")
        .define("a", validate="missing_validator")
        .define("b", default_dynamic="missing_default")
        .define("c", default_through="account")
    )
    errors = SchemaValidator(registry, Host).validate_all()
    assert any("clashes with existing attribute on Host" in e for e in errors)
    assert any("validate refers to unknown method Host.missing_validator" in e for e in errors)
    assert any("default_dynamic refers to unknown method Host.missing_default" in e for e in errors)
    assert any("default_through refers to unknown association Host.account" in e for e in errors)
