from relayq.container import Container
from relayq.exceptions import ValidationError
from relayq.gql.field import FieldDefinition, Resolvable
from relayq.gql.registry import GraphQL
from relayq.validation import Validator

VERSION = "0.1.0"

__all__ = ["Container", "FieldDefinition", "GraphQL", "Resolvable", "ValidationError", "Validator"]
