from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    from relayq.validation.validator import ValidationResult


class RelayQException(Exception):
    """Base exception for relayq package"""


class ValidationError(RelayQException):
    """Arguments passed to a field were rejected by its validation rules

    The validation result is kept on the exception so the execution layer can
    report field-level messages. graphql-core copies ``extensions`` onto the
    GraphQLError it builds around this exception.
    """

    def __init__(self, message: str = "validation", validator: typing.Optional[ValidationResult] = None):
        super().__init__(message)
        self.validator = validator

    def messages(self) -> typing.Dict[str, typing.List[str]]:
        if self.validator is None:
            return {}
        return self.validator.errors()

    @property
    def extensions(self) -> typing.Dict[str, typing.Any]:
        return {"validation": self.messages()}


class UnknownTypeError(RelayQException):
    """A type name was not found in the registry"""


class SchemaBuildError(RelayQException):
    """The registry could not produce a schema"""


class InvalidGlobalId(RelayQException):
    """A global id could not be decoded"""


class UnknownRuleError(RelayQException):
    """A validation rule token has no implementation"""


class InvalidRuleError(RelayQException):
    """A validation rule token carries missing or malformed parameters"""
