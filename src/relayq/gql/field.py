from __future__ import annotations

import functools
import logging
import typing

from relayq.exceptions import ValidationError
from relayq.gql.global_id import GlobalId
from typing_extensions import Protocol, runtime_checkable

if typing.TYPE_CHECKING:
    from relayq.gql.alias import Field
    from relayq.gql.registry import GraphQL
    from relayq.validation.validator import Validator

__all__ = ["FieldDefinition", "Resolvable", "normalize_rules"]

log = logging.getLogger(__name__)

RuleList = typing.List[str]
RuleKey = typing.Union[str, int]
RuleSpec = typing.Union[None, str, RuleList, typing.Callable[..., typing.Any]]
ArgumentSpec = typing.Dict[str, typing.Any]
Resolver = typing.Callable[..., typing.Any]


@runtime_checkable
class Resolvable(Protocol):
    """A field definition able to compute its own value"""

    def resolve(self, root, args=None, context=None, info=None) -> typing.Any:
        ...  # pragma: no cover


def normalize_rules(rules: typing.Any) -> RuleList:
    """None -> [], "required|max:5" -> ["required", "max:5"]"""
    if rules is None:
        return []
    if isinstance(rules, str):
        return [token for token in rules.split("|") if token]
    return list(rules)


def evaluate_rules(spec: RuleSpec, arguments: typing.Sequence[typing.Any]) -> RuleList:
    if callable(spec):
        spec = spec(*arguments)
    return normalize_rules(spec)


class FieldDefinition:
    """Declarative description of a single GraphQL field

    Subclasses override ``args``, ``type``, ``rules`` and ``extra_attributes``
    and may define ``resolve(root, args, context, info)``. When they do, the
    resolver exposed through ``get_attributes()["resolve"]`` validates the
    field arguments against the declared rules before calling it.

    Example:

        class BookField(FieldDefinition):
            def type(self):
                return "Book"

            def args(self):
                return {"id": {"type": "ID!", "rules": ["required"]}}

            def resolve(self, root, args, context=None, info=None):
                return BOOKS[self.global_id.decode_id(args["id"])]
    """

    def __init__(
        self,
        graphql: GraphQL,
        validator: Validator,
        attributes: typing.Optional[typing.Dict[str, typing.Any]] = None,
    ):
        self.graphql = graphql
        self.validator = validator
        self.attributes: typing.Dict[str, typing.Any] = dict(attributes or {})
        self.global_id = GlobalId()

    def args(self) -> typing.Dict[str, typing.Union[ArgumentSpec, typing.Any]]:
        """Arguments this field accepts"""
        return {}

    def extra_attributes(self) -> typing.Dict[str, typing.Any]:
        """Attributes merged over the constructor attributes"""
        return {}

    def type(self) -> typing.Any:
        """Output type, either a graphql-core type or a registered type name"""
        return None

    def rules(self, *arguments) -> typing.Union[typing.Dict[str, RuleSpec], typing.List[str], str]:
        """Field level rules

        Either a mapping of argument name to rules, or a list of rule tokens
        appended under positional keys 0, 1, ... after the argument rules.
        """
        return {}

    def get_attributes(self) -> typing.Dict[str, typing.Any]:
        attributes = {**self.attributes, "args": self.args(), **self.extra_attributes()}
        attributes["type"] = self.type()
        attributes["resolve"] = self.get_resolver()
        return attributes

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return self.get_attributes()

    def get(self, key: str, default: typing.Any = None) -> typing.Any:
        value = self.get_attributes().get(key)
        return default if value is None else value

    def __contains__(self, key: str) -> bool:
        return self.get_attributes().get(key) is not None

    def get_rules(self, *arguments) -> typing.Dict[RuleKey, RuleList]:
        """Rules to validate the field arguments with

        ``arguments`` are the positional arguments the resolver receives. They
        are forwarded to rules declared as callables and to ``rules()``.
        """
        rules: typing.Dict[RuleKey, RuleList] = {}

        for name, arg in self.args().items():
            # Bare types carry no rules
            if isinstance(arg, dict):
                rules[name] = evaluate_rules(arg.get("rules"), arguments)

        field_rules = self.rules(*arguments) or {}
        if isinstance(field_rules, dict):
            for name, spec in field_rules.items():
                rules[name] = evaluate_rules(spec, arguments)
        else:
            # Plain tokens continue the positional keys rather than naming an argument
            position = max((key + 1 for key in rules if isinstance(key, int)), default=0)
            for offset, token in enumerate(normalize_rules(field_rules)):
                rules[position + offset] = normalize_rules(token)

        return {name: tokens for name, tokens in rules.items() if tokens}

    def get_resolver(self) -> typing.Optional[Resolver]:
        if not isinstance(self, Resolvable):
            return None

        resolve = self.resolve

        @functools.wraps(resolve)
        def resolver(*arguments):
            rules = self.get_rules(*arguments)

            if rules:
                args = arguments[1] if len(arguments) > 1 and arguments[1] is not None else {}
                log.debug("Validating %s against %s", type(self).__name__, rules)
                result = self.validator.make(args, rules)

                if result.fails():
                    log.info("Validation failed for %s: %s", type(self).__name__, result.errors())
                    raise ValidationError("validation", validator=result)

            return resolve(*arguments)

        return resolver

    def to_graphql_field(self) -> Field:
        return self.graphql.build_field(self)
