from __future__ import annotations

import logging
import typing

from graphql.pyutils import Undefined
from relayq.exceptions import SchemaBuildError, UnknownTypeError
from relayq.gql.alias import SCALAR_TYPES, Argument, Field, List, NamedType, NonNull, ObjectType, ResolveInfo, Schema
from relayq.gql.field import FieldDefinition, Resolver

__all__ = ["GraphQL", "graphql_core_resolver"]

log = logging.getLogger(__name__)

FieldLike = typing.Union[FieldDefinition, Field]


def graphql_core_resolver(resolver: Resolver) -> Resolver:
    """Adapt a (root, args, context, info) resolver to graphql-core's (root, info, **args)"""

    def resolve(root, info: ResolveInfo, **kwargs) -> typing.Any:
        return resolver(root, kwargs, info.context, info)

    return resolve


class GraphQL:
    """Registry of named types and root fields

    Field definitions are converted to graphql-core fields when the schema is
    built, so types may be registered in any order.
    """

    def __init__(self):
        self.types: typing.Dict[str, NamedType] = {scalar.name: scalar for scalar in SCALAR_TYPES}
        self.queries: typing.Dict[str, FieldLike] = {}
        self.mutations: typing.Dict[str, FieldLike] = {}

    #########
    # Types #
    #########

    def add_type(self, type_: NamedType, name: typing.Optional[str] = None) -> NamedType:
        name = name or type_.name
        log.debug("Registering type %s", name)
        self.types[name] = type_
        return type_

    def has_type(self, name: str) -> bool:
        return name in self.types

    def type(self, name: str) -> NamedType:
        try:
            return self.types[name]
        except KeyError:
            raise UnknownTypeError(f"Type {name} is not registered") from None

    def resolve_type(self, ref: typing.Any) -> typing.Any:
        """Resolve type references such as "Book", "Book!" and "[Book!]!" """
        if not isinstance(ref, str):
            return ref
        ref = ref.strip()
        if ref.endswith("!"):
            return NonNull(self.resolve_type(ref[:-1]))
        if ref.startswith("[") and ref.endswith("]"):
            return List(self.resolve_type(ref[1:-1]))
        return self.type(ref)

    def object_type(
        self, name: str, fields: typing.Dict[str, FieldLike], description: typing.Optional[str] = None
    ) -> ObjectType:
        """Register an object type whose fields may be FieldDefinitions"""
        object_type = ObjectType(
            name,
            lambda: {field_name: self.build_field(field, field_name) for field_name, field in fields.items()},
            description=description,
        )
        return self.add_type(object_type)

    ###############
    # Root fields #
    ###############

    def add_query(self, name: str, field: FieldLike) -> None:
        log.debug("Registering query %s", name)
        self.queries[name] = field

    def add_mutation(self, name: str, field: FieldLike) -> None:
        log.debug("Registering mutation %s", name)
        self.mutations[name] = field

    ############
    # Building #
    ############

    def build_argument(self, spec: typing.Any) -> Argument:
        if not isinstance(spec, dict):
            return Argument(self.resolve_type(spec))
        return Argument(
            self.resolve_type(spec["type"]),
            default_value=spec.get("default_value", Undefined),
            description=spec.get("description"),
        )

    def build_field(self, field: FieldLike, name: typing.Optional[str] = None) -> Field:
        if isinstance(field, Field):
            return field

        attributes = field.get_attributes()
        name = name or attributes.get("name") or type(field).__name__

        if attributes.get("type") is None:
            raise SchemaBuildError(f"Field {name} does not define a type")

        resolver = attributes.get("resolve")
        return Field(
            self.resolve_type(attributes["type"]),
            args={arg_name: self.build_argument(spec) for arg_name, spec in (attributes.get("args") or {}).items()},
            resolve=graphql_core_resolver(resolver) if resolver is not None else None,
            description=attributes.get("description"),
            deprecation_reason=attributes.get("deprecation_reason"),
        )

    def build_schema(self) -> Schema:
        if not self.queries:
            raise SchemaBuildError("At least one query field must be registered")

        query_fields = {name: self.build_field(field, name) for name, field in self.queries.items()}
        mutation_fields = {name: self.build_field(field, name) for name, field in self.mutations.items()}

        schema_kwargs = {
            "query": ObjectType(name="Query", fields=query_fields),
            "mutation": ObjectType(name="Mutation", fields=mutation_fields),
        }
        # Types only reachable through the registry still belong in the schema
        extra_types = [type_ for type_ in self.types.values() if type_ not in SCALAR_TYPES]
        return Schema(**{k: v for k, v in schema_kwargs.items() if v.fields}, types=extra_types)
