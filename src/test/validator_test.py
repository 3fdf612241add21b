import pytest
from relayq.exceptions import InvalidRuleError, UnknownRuleError
from relayq.validation.rules import parse_rule


def test_parse_rule():
    assert parse_rule("required") == ("required", [])
    assert parse_rule("between:1, 5") == ("between", ["1", "5"])
    assert parse_rule("regex:^a:b,c$") == ("regex", ["^a:b,c$"])


def test_passes(validator):
    result = validator.make({"name": "Ada", "age": 36}, {"name": ["required", "string"], "age": "integer|min:18"})
    assert result.passes()
    assert not result.fails()
    assert result.errors() == {}


def test_required(validator):
    result = validator.make({"name": "  ", "tags": []}, {"name": ["required"], "tags": ["required"], "bio": ["required"]})
    assert result.errors() == {
        "name": ["The name field is required."],
        "tags": ["The tags field is required."],
        "bio": ["The bio field is required."],
    }


def test_missing_optional_attribute_is_skipped(validator):
    assert validator.make({}, {"age": ["integer", "min:3"]}).passes()


def test_null_values(validator):
    assert validator.make({"age": None}, {"age": ["nullable", "integer"]}).passes()
    assert validator.make({"age": None}, {"age": ["integer"]}).fails()


def test_required_stops_further_messages(validator):
    result = validator.make({}, {"email": ["required", "email"]})
    assert result.errors() == {"email": ["The email field is required."]}


def test_present(validator):
    assert validator.make({"note": None}, {"note": ["present"]}).passes()
    assert validator.make({}, {"note": ["present"]}).first("note") == "The note field must be present."


@pytest.mark.parametrize(
    "value, rule, passes",
    [
        ("abc", "string", True),
        (3, "string", False),
        ("12", "integer", True),
        (True, "integer", False),
        ("1.5", "numeric", True),
        ("x", "numeric", False),
        ("true", "boolean", True),
        ("yes", "boolean", False),
        ([1], "array", True),
        ("ada@lovelace.org", "email", True),
        ("ada@example", "email", False),
        ("Ada", "alpha", True),
        ("Ada1", "alpha", False),
        ("Ada1", "alpha_num", True),
        ("b", "in:a,b", True),
        ("c", "in:a,b", False),
        ("c", "not_in:a,b", True),
        ("abc", "regex:/^[a-z]+$/", True),
        ("ABC", "regex:^[a-z]+$", False),
        (True, "in:true,false", True),
        (False, "in:true,false", True),
        (True, "not_in:false", True),
        (1, "boolean", True),
        ("Zoë", "alpha", True),
    ],
)
def test_type_rules(validator, value, rule, passes):
    assert validator.make({"value": value}, {"value": [rule]}).passes() is passes


@pytest.mark.parametrize(
    "value, rules, message",
    [
        ("ab", ["min:3"], "The value must be at least 3 characters."),
        (2, ["integer", "min:3"], "The value must be at least 3."),
        ("7", ["numeric", "max:5"], "The value may not be greater than 5."),
        ([1, 2, 3], ["max:2"], "The value may not have more than 2 items."),
        ("abcdef", ["between:1,5"], "The value must be between 1 and 5 characters."),
        ("abc", ["size:2"], "The value must be 2 characters."),
    ],
)
def test_size_rules(validator, value, rules, message):
    assert validator.make({"value": value}, {"value": rules}).first("value") == message


def test_size_rules_pass_within_bounds(validator):
    assert validator.make({"value": "abc"}, {"value": ["min:3", "max:3", "size:3", "between:1,3"]}).passes()


def test_confirmed(validator):
    rules = {"password": ["confirmed"]}
    assert validator.make({"password": "s3cret", "password_confirmation": "s3cret"}, rules).passes()
    assert validator.make({"password": "s3cret"}, rules).first("password") == "The password confirmation does not match."


def test_camel_case_attribute_names_in_messages(validator):
    assert validator.make({}, {"firstName": "required"}).first("firstName") == "The first name field is required."


def test_unknown_rule(validator):
    with pytest.raises(UnknownRuleError):
        validator.make({"value": 1}, {"value": ["shiny"]})


def test_extend(validator):
    validator.extend("even", lambda attribute, value, parameters, data: value % 2 == 0, "The {attribute} must be even.")
    assert validator.make({"count": 2}, {"count": ["even"]}).passes()
    assert validator.make({"count": 3}, {"count": ["even"]}).errors() == {"count": ["The count must be even."]}


@pytest.mark.parametrize("rule", ["between:1", "min:abc", "size:1,x"])
def test_malformed_rule_parameters(validator, rule):
    with pytest.raises(InvalidRuleError) as exc:
        validator.make({"value": 3}, {"value": [rule]})
    assert rule in str(exc.value)


def test_every_failing_rule_is_reported_in_order(validator):
    result = validator.make({"code": "ab1"}, {"code": ["alpha", "min:4", "in:abcd"]})
    assert result.errors() == {
        "code": [
            "The code may only contain letters.",
            "The code must be at least 4 characters.",
            "The selected code is invalid.",
        ]
    }


def test_positional_rule_keys(validator):
    validator.extend("custom", lambda attribute, value, parameters, data: False)
    assert validator.make({}, {0: ["custom"]}).passes()
    assert validator.make({"0": "x"}, {0: ["custom"]}).errors() == {"0": ["The 0 is invalid."]}
