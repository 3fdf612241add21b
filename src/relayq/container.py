from __future__ import annotations

import importlib
import typing

from parse import parse
from relayq.exceptions import RelayQException
from relayq.gql.field import FieldDefinition
from relayq.gql.registry import GraphQL
from relayq.validation import Validator

__all__ = ["Container", "load_container"]

FieldT = typing.TypeVar("FieldT", bound=FieldDefinition)


class Container:
    """Holds the services field definitions depend on"""

    def __init__(self, graphql: typing.Optional[GraphQL] = None, validator: typing.Optional[Validator] = None):
        self.graphql = graphql if graphql is not None else GraphQL()
        self.validator = validator if validator is not None else Validator()

    def make(self, field_cls: typing.Type[FieldT], **attributes) -> FieldT:
        """Instantiate a field definition with the container's services injected"""
        return field_cls(self.graphql, self.validator, attributes)


def load_container(import_path: typing.Optional[str]) -> Container:
    """Import a Container or GraphQL registry from a "module:attribute" path"""
    match = parse("{module}:{attribute}", import_path or "")
    if match is None:
        raise RelayQException(f'Expected an import path like "package.module:container", got {import_path!r}')

    module = importlib.import_module(match.named["module"])
    try:
        target = getattr(module, match.named["attribute"])
    except AttributeError:
        raise RelayQException(f"{import_path} does not exist") from None

    if isinstance(target, Container):
        return target
    if isinstance(target, GraphQL):
        return Container(graphql=target)
    raise RelayQException(f"{import_path} is neither a Container nor a GraphQL registry")
