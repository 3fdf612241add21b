"""Built-in validation rules

Rule tokens are parsed with ``parse`` and compiled into pydantic field types.
The validator gathers the compiled types of a rule set into one model, so the
checks themselves run inside pydantic.
"""
import numbers
import re
import typing

from parse import parse
from pydantic import AfterValidator, BeforeValidator, EmailStr, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from relayq.exceptions import InvalidRuleError, UnknownRuleError
from typing_extensions import Annotated, Literal

__all__ = ["IMPLICIT_RULES", "MESSAGES", "SIZE_RULES", "compile_rule", "parse_rule", "size_kind"]

RuleCallback = typing.Callable[[str, typing.Any, typing.List[str], typing.Mapping[str, typing.Any]], bool]

INTEGER_PATTERN = r"^\s*[+-]?\d+\s*$"
NUMERIC_PATTERN = r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$"
ALPHA_PATTERN = r"^[^\W\d_]+$"
ALPHA_NUM_PATTERN = r"^[^\W_]+$"

_re_numeric = re.compile(NUMERIC_PATTERN)

# Rules that run even when the attribute is missing
IMPLICIT_RULES = {"required", "present"}

# Size rules measure numbers by value, strings and collections by length
SIZE_RULES = {"min", "max", "between", "size"}

# Rules whose single parameter may itself contain commas
_UNSPLIT_PARAMETERS = {"regex"}

_PARAMETER_COUNTS = {"min": 1, "max": 1, "size": 1, "between": 2, "regex": 1, "in": 1, "not_in": 1}


def parse_rule(token: str) -> typing.Tuple[str, typing.List[str]]:
    """'between:1,5' -> ('between', ['1', '5'])"""
    match = parse("{name}:{parameters}", token)
    if match is None:
        return token.strip(), []
    name = match.named["name"].strip()
    parameters = match.named["parameters"]
    if name in _UNSPLIT_PARAMETERS:
        return name, [parameters]
    return name, [p.strip() for p in parameters.split(",")]


def is_number(value: typing.Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Number):
        return True
    return isinstance(value, str) and _re_numeric.match(value) is not None


def size_kind(value: typing.Any, numeric: bool) -> str:
    if numeric and is_number(value):
        return "numeric"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple, dict, set)):
        return "array"
    return "numeric"


def search_pattern(pattern: str) -> str:
    """Accept PHP style delimiters, e.g. /^[a-z]+$/, and match anywhere in the value"""
    if len(pattern) > 1 and pattern.startswith("/") and pattern.endswith("/"):
        pattern = pattern[1:-1]
    return f"(?s:.*?)(?:{pattern})"


def as_token(value: typing.Any) -> str:
    """Compare values the way they are written in rule parameters"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _filled(value):
    if value is None:
        raise ValueError("value is null")
    if isinstance(value, str) and not value.strip():
        raise ValueError("value is blank")
    if isinstance(value, (list, tuple, dict, set)) and not value:
        raise ValueError("value is empty")
    return value


def _excluding(parameters: typing.List[str]):
    def check(value):
        if value in parameters:
            raise ValueError(f"{value} is excluded")
        return value

    return check


def _matching(expected: typing.Any):
    def check(value):
        if value != expected:
            raise ValueError("confirmation does not match")
        return value

    return check


def _extension(name: str, callback: RuleCallback, attribute: str, parameters, data):
    def check(value):
        if not callback(attribute, value, parameters, data):
            raise ValueError(f"{name} rule failed")
        return value

    return check


def _bounds(name: str, parameters: typing.List[str], token: str) -> typing.Tuple[typing.Optional[float], ...]:
    try:
        values = [float(p) for p in parameters]
    except ValueError:
        raise InvalidRuleError(f"Validation rule {token} expects numeric parameters") from None
    if name == "min":
        return values[0], None
    if name == "max":
        return None, values[0]
    if name == "size":
        return values[0], values[0]
    return values[0], values[1]


def _length(bound: typing.Optional[float]) -> typing.Optional[int]:
    return None if bound is None else int(bound)


def size_type(kind: str, value: typing.Any, low: typing.Optional[float], high: typing.Optional[float]):
    if kind == "numeric":
        return Annotated[float, Field(ge=low, le=high)]
    if kind == "string":
        return Annotated[str, Field(min_length=_length(low), max_length=_length(high))]
    if isinstance(value, dict):
        return Annotated[typing.Dict[typing.Any, typing.Any], Field(min_length=_length(low), max_length=_length(high))]
    return Annotated[typing.List[typing.Any], Field(min_length=_length(low), max_length=_length(high))]


TYPES: typing.Dict[str, typing.Callable[[typing.List[str], str, typing.Mapping[str, typing.Any]], typing.Any]] = {
    "required": lambda parameters, attribute, data: Annotated[typing.Any, AfterValidator(_filled)],
    "present": lambda parameters, attribute, data: typing.Any,
    "nullable": lambda parameters, attribute, data: None,
    "string": lambda parameters, attribute, data: StrictStr,
    "integer": lambda parameters, attribute, data: typing.Union[
        StrictInt, Annotated[StrictStr, Field(pattern=INTEGER_PATTERN)]
    ],
    "numeric": lambda parameters, attribute, data: typing.Union[
        StrictInt, StrictFloat, Annotated[StrictStr, Field(pattern=NUMERIC_PATTERN)]
    ],
    "boolean": lambda parameters, attribute, data: typing.Union[
        StrictBool, Literal[0, 1, "0", "1", "true", "false"]
    ],
    "array": lambda parameters, attribute, data: typing.Union[
        typing.List[typing.Any], typing.Dict[typing.Any, typing.Any]
    ],
    "email": lambda parameters, attribute, data: EmailStr,
    "alpha": lambda parameters, attribute, data: Annotated[StrictStr, Field(pattern=ALPHA_PATTERN)],
    "alpha_num": lambda parameters, attribute, data: Annotated[StrictStr, Field(pattern=ALPHA_NUM_PATTERN)],
    "in": lambda parameters, attribute, data: Annotated[Literal[tuple(parameters)], BeforeValidator(as_token)],
    "not_in": lambda parameters, attribute, data: Annotated[
        str, BeforeValidator(as_token), AfterValidator(_excluding(parameters))
    ],
    "regex": lambda parameters, attribute, data: Annotated[StrictStr, Field(pattern=search_pattern(parameters[0]))],
    "confirmed": lambda parameters, attribute, data: Annotated[
        typing.Any, AfterValidator(_matching(data.get(f"{attribute}_confirmation")))
    ],
}


def compile_rule(
    token: str,
    attribute: str,
    value: typing.Any,
    data: typing.Mapping[str, typing.Any],
    numeric: bool,
    extensions: typing.Mapping[str, RuleCallback],
) -> typing.Tuple[str, typing.List[str], typing.Any]:
    """Rule token -> (name, parameters, pydantic field type)

    The field type is None for rules that only change how others apply
    (``nullable``).
    """
    name, parameters = parse_rule(token)

    if name in extensions:
        check = _extension(name, extensions[name], attribute, parameters, data)
        return name, parameters, Annotated[typing.Any, AfterValidator(check)]

    expected = _PARAMETER_COUNTS.get(name, 0)
    if len([p for p in parameters if p != ""]) < expected:
        raise InvalidRuleError(f"Validation rule {token} expects {expected} parameter(s)")

    if name in SIZE_RULES:
        low, high = _bounds(name, parameters, token)
        return name, parameters, size_type(size_kind(value, numeric), value, low, high)

    try:
        factory = TYPES[name]
    except KeyError:
        raise UnknownRuleError(f"Validation rule {name} does not exist") from None
    return name, parameters, factory(parameters, attribute, data)


MESSAGES: typing.Dict[str, str] = {
    "required": "The {attribute} field is required.",
    "present": "The {attribute} field must be present.",
    "string": "The {attribute} must be a string.",
    "integer": "The {attribute} must be an integer.",
    "numeric": "The {attribute} must be a number.",
    "boolean": "The {attribute} field must be true or false.",
    "array": "The {attribute} must be an array.",
    "email": "The {attribute} must be a valid email address.",
    "alpha": "The {attribute} may only contain letters.",
    "alpha_num": "The {attribute} may only contain letters and numbers.",
    "in": "The selected {attribute} is invalid.",
    "not_in": "The selected {attribute} is invalid.",
    "regex": "The {attribute} format is invalid.",
    "confirmed": "The {attribute} confirmation does not match.",
    "min.numeric": "The {attribute} must be at least {0}.",
    "min.string": "The {attribute} must be at least {0} characters.",
    "min.array": "The {attribute} must have at least {0} items.",
    "max.numeric": "The {attribute} may not be greater than {0}.",
    "max.string": "The {attribute} may not be greater than {0} characters.",
    "max.array": "The {attribute} may not have more than {0} items.",
    "between.numeric": "The {attribute} must be between {0} and {1}.",
    "between.string": "The {attribute} must be between {0} and {1} characters.",
    "between.array": "The {attribute} must have between {0} and {1} items.",
    "size.numeric": "The {attribute} must be {0}.",
    "size.string": "The {attribute} must be {0} characters.",
    "size.array": "The {attribute} must contain {0} items.",
}
