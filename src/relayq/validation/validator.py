from __future__ import annotations

import logging
import typing

from pydantic import ConfigDict, create_model
from pydantic import ValidationError as PydanticValidationError
from relayq.text_utils import camel_to_snake
from relayq.validation.rules import (
    IMPLICIT_RULES,
    MESSAGES,
    SIZE_RULES,
    RuleCallback,
    compile_rule,
    parse_rule,
    size_kind,
)

__all__ = ["Validator", "ValidationResult"]

log = logging.getLogger(__name__)

_MISSING = object()


class CompiledRule(typing.NamedTuple):
    attribute: str
    name: str
    parameters: typing.List[str]
    value: typing.Any
    numeric: bool
    field_type: typing.Any


def display_name(attribute: str) -> str:
    """firstName -> first name"""
    return camel_to_snake(attribute).replace("_", " ")


class ValidationResult:
    """Outcome of validating one data mapping against a rule set"""

    def __init__(self, data: typing.Mapping[str, typing.Any], rules: typing.Dict[str, typing.List[str]]):
        self.data = data
        self.rules = rules
        self._errors: typing.Dict[str, typing.List[str]] = {}

    def add_error(self, attribute: str, message: str) -> None:
        self._errors.setdefault(attribute, []).append(message)

    def fails(self) -> bool:
        return bool(self._errors)

    def passes(self) -> bool:
        return not self.fails()

    def errors(self) -> typing.Dict[str, typing.List[str]]:
        return {attribute: list(messages) for attribute, messages in self._errors.items()}

    def first(self, attribute: str) -> typing.Optional[str]:
        messages = self._errors.get(attribute)
        return messages[0] if messages else None

    def __repr__(self) -> str:
        return f"ValidationResult(errors={self._errors!r})"


class Validator:
    """Validates a data mapping against rule tokens such as "required" or "max:5"

    Rules for an attribute are a list of tokens or a single pipe delimited
    string. Each token becomes one field of a pydantic model built for the
    rule set; the model's validation errors are reported back per attribute.
    Attributes that are missing are only checked by implicit rules
    (required, present); ``null`` values are skipped when the attribute is
    marked ``nullable``.
    """

    config = ConfigDict(regex_engine="python-re")

    def __init__(self):
        self.extensions: typing.Dict[str, RuleCallback] = {}
        self.extension_messages: typing.Dict[str, str] = {}

    def extend(self, name: str, callback: RuleCallback, message: typing.Optional[str] = None) -> None:
        """Register a custom rule"""
        self.extensions[name] = callback
        self.extension_messages[name] = message or "The {attribute} is invalid."

    def make(
        self,
        data: typing.Optional[typing.Mapping[str, typing.Any]],
        rules: typing.Mapping[typing.Union[str, int], typing.Union[str, typing.Sequence[str]]],
    ) -> ValidationResult:
        data = data or {}
        normalized = {
            str(attribute): [t for t in tokens.split("|") if t] if isinstance(tokens, str) else list(tokens)
            for attribute, tokens in rules.items()
        }
        result = ValidationResult(data, normalized)

        checks: typing.Dict[str, CompiledRule] = {}
        for attribute, tokens in normalized.items():
            self.compile_attribute(checks, data, attribute, tokens)

        if checks:
            self.run(result, checks)

        return result

    def compile_attribute(
        self,
        checks: typing.Dict[str, CompiledRule],
        data: typing.Mapping[str, typing.Any],
        attribute: str,
        tokens: typing.List[str],
    ) -> None:
        names = {parse_rule(token)[0] for token in tokens}
        value = data.get(attribute, _MISSING)
        numeric = bool(names & {"numeric", "integer"})

        for token in tokens:
            name, parameters, field_type = compile_rule(token, attribute, value, data, numeric, self.extensions)

            if field_type is None:
                continue
            if value is _MISSING and name not in IMPLICIT_RULES:
                continue
            if value is None and "nullable" in names and name not in IMPLICIT_RULES:
                continue

            checks[f"rule_{len(checks)}"] = CompiledRule(attribute, name, parameters, value, numeric, field_type)

    def run(self, result: ValidationResult, checks: typing.Dict[str, CompiledRule]) -> None:
        model = create_model(
            "RuleSet",
            __config__=self.config,
            **{field: (check.field_type, ...) for field, check in checks.items()},
        )
        payload = {field: check.value for field, check in checks.items() if check.value is not _MISSING}

        try:
            model.model_validate(payload)
        except PydanticValidationError as exc:
            failed = {error["loc"][0] for error in exc.errors()}
            log.debug("Rule set rejected %s", sorted(failed))
        else:
            return

        halted = set()
        for field, check in checks.items():
            if field not in failed or check.attribute in halted:
                continue
            result.add_error(check.attribute, self.message(check))
            # A missing required value makes every other message noise
            if check.name == "required":
                halted.add(check.attribute)

    def message(self, check: CompiledRule) -> str:
        if check.name in self.extension_messages:
            template = self.extension_messages[check.name]
        elif check.name in SIZE_RULES:
            value = None if check.value is _MISSING else check.value
            template = MESSAGES[f"{check.name}.{size_kind(value, check.numeric)}"]
        else:
            template = MESSAGES.get(check.name, "The {attribute} is invalid.")
        return template.format(*check.parameters, attribute=display_name(check.attribute))
