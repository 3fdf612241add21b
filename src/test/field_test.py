import pytest
from relayq import FieldDefinition, Resolvable, ValidationError
from relayq.gql.alias import String


class NameField(FieldDefinition):
    def args(self):
        return {"name": {"type": String, "rules": ["required"]}}

    def type(self):
        return String

    def resolve(self, root, args, context=None, info=None):
        return args["name"]


class TypelessAttributesField(FieldDefinition):
    def extra_attributes(self):
        return {"type": "X", "description": "from extra attributes"}

    def type(self):
        return String


class NoResolveField(FieldDefinition):
    def type(self):
        return String


class AggregatedRulesField(FieldDefinition):
    def args(self):
        return {
            "a": {"type": String, "rules": ["required"]},
            "b": {"type": String, "rules": lambda *arguments: [] if arguments[1].get("b") else ["required"]},
            "c": {"type": String, "rules": None},
            "d": {"type": String},
            "e": String,
        }

    def rules(self, *arguments):
        return {"f": ["custom"]}

    def type(self):
        return String


class CountingField(FieldDefinition):
    calls = 0

    def args(self):
        return {"name": {"type": String, "rules": "required|min:3"}}

    def type(self):
        return String

    def resolve(self, *arguments):
        CountingField.calls += 1
        return arguments


@pytest.fixture(autouse=True)
def reset_counter():
    CountingField.calls = 0


def test_type_overrides_constructor_and_extra_attributes(container):
    field = container.make(TypelessAttributesField, type="Y", description="from constructor")
    attributes = field.get_attributes()
    assert attributes["type"] is String
    assert attributes["description"] == "from extra attributes"


def test_extra_attributes_override_args(container):
    class OverridingField(NameField):
        def extra_attributes(self):
            return {"args": {}}

    assert container.make(OverridingField).get_attributes()["args"] == {}


def test_attribute_mapping_keys(container):
    field = container.make(NameField, description="The name", deprecation_reason=None)
    attributes = field.get_attributes()
    assert attributes["description"] == "The name"
    assert attributes["args"] == field.args()
    assert callable(attributes["resolve"])
    assert field.to_dict().keys() == attributes.keys()


def test_get_and_contains(container):
    field = container.make(NameField, description="The name")
    assert field.get("description") == "The name"
    assert field.get("missing") is None
    assert field.get("missing", "fallback") == "fallback"
    assert "description" in field
    assert "missing" not in field


def test_rule_aggregation_order(container):
    field = container.make(AggregatedRulesField)
    rules = field.get_rules(None, {"b": 1}, {}, None)
    assert list(rules.items()) == [("a", ["required"]), ("f", ["custom"])]


class ListRulesField(FieldDefinition):
    def args(self):
        return {"a": {"type": String, "rules": ["required"]}}

    def rules(self, *arguments):
        return ["custom"]

    def type(self):
        return String

    def resolve(self, root, args, context=None, info=None):
        return "resolved"


def test_field_rules_as_token_list(container):
    rules = container.make(ListRulesField).get_rules(None, {"b": 1}, {}, None)
    assert list(rules.items()) == [("a", ["required"]), (0, ["custom"])]


def test_field_rules_as_token_list_continue_positions(container):
    class PipeListRulesField(ListRulesField):
        def rules(self, *arguments):
            return "custom|other"

    rules = container.make(PipeListRulesField).get_rules(None, {})
    assert list(rules.values()) == [["required"], ["custom"], ["other"]]
    assert list(rules)[1:] == [0, 1]


def test_resolver_with_token_list_rules(container):
    container.validator.extend("custom", lambda attribute, value, parameters, data: True)
    resolver = container.make(ListRulesField).get_resolver()
    assert resolver(None, {"a": "x"}, {}, None) == "resolved"
    with pytest.raises(ValidationError) as exc:
        resolver(None, {}, {}, None)
    assert exc.value.messages() == {"a": ["The a field is required."]}


def test_dynamic_rule_receives_call_arguments(container):
    field = container.make(AggregatedRulesField)
    rules = field.get_rules(None, {}, {}, None)
    assert rules["b"] == ["required"]


def test_null_and_missing_rules_are_dropped(container):
    rules = container.make(AggregatedRulesField).get_rules(None, {"b": 1})
    assert "c" not in rules
    assert "d" not in rules
    assert "e" not in rules


def test_field_rules_override_argument_rules(container):
    class OverrideField(NameField):
        def rules(self, *arguments):
            return {"name": "string|max:3"}

    assert container.make(OverrideField).get_rules(None, {}) == {"name": ["string", "max:3"]}


def test_field_without_resolve(container):
    field = container.make(NoResolveField)
    assert not isinstance(field, Resolvable)
    assert field.get_resolver() is None
    assert field.get_attributes()["resolve"] is None
    assert "resolve" not in field


def test_validation_short_circuits_resolve(container):
    resolver = container.make(CountingField).get_resolver()
    with pytest.raises(ValidationError) as exc_info:
        resolver(None, {"name": "ab"}, {}, None)
    assert CountingField.calls == 0
    assert exc_info.value.validator.fails()
    assert exc_info.value.messages() == {"name": ["The name must be at least 3 characters."]}
    assert exc_info.value.extensions == {"validation": exc_info.value.messages()}


def test_missing_args_validate_as_empty(container):
    resolver = container.make(CountingField).get_resolver()
    with pytest.raises(ValidationError):
        resolver(None)
    with pytest.raises(ValidationError):
        resolver(None, None)
    assert CountingField.calls == 0


def test_pass_through_without_rules(container):
    class FreeField(CountingField):
        def args(self):
            return {"name": {"type": String}}

    root, args, context, info = object(), {"name": "x"}, {"user": 1}, object()
    result = container.make(FreeField).get_resolver()(root, args, context, info)
    assert result == (root, args, context, info)
    assert CountingField.calls == 1


def test_pass_through_after_successful_validation(container):
    resolver = container.make(CountingField).get_resolver()
    args = {"name": "Ada Lovelace"}
    assert resolver("root", args) == ("root", args)
    assert CountingField.calls == 1


def test_resolve_errors_propagate(container):
    class BrokenField(NoResolveField):
        def resolve(self, root, args, context=None, info=None):
            raise KeyError("boom")

    with pytest.raises(KeyError):
        container.make(BrokenField).get_resolver()(None, {})


def test_scenario_required_name(container):
    resolver = container.make(NameField).get_attributes()["resolve"]
    with pytest.raises(ValidationError):
        resolver(None, {})
    assert resolver(None, {"name": "Ada"}) == "Ada"


def test_validator_receives_args_and_rules(container):
    calls = []

    class RecordingValidator:
        def make(self, data, rules):
            calls.append((data, rules))
            return container.validator.make(data, rules)

    field = NameField(container.graphql, RecordingValidator())
    field.get_resolver()(None, {"name": "Ada"}, {}, None)
    assert calls == [({"name": "Ada"}, {"name": ["required"]})]


def test_global_id_is_available(container):
    field = container.make(NameField)
    assert field.global_id.decode(field.global_id.encode("User", 7)) == ("User", "7")
