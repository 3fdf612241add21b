from __future__ import annotations

import typing

from graphql_relay import from_global_id, to_global_id
from relayq.exceptions import InvalidGlobalId


class GlobalId:
    """Opaque Relay identifiers: base64 of "TypeName:id" """

    @staticmethod
    def encode(type_name: str, id_: typing.Union[str, int]) -> str:
        return to_global_id(type_name, id_)

    @staticmethod
    def decode(global_id: str) -> typing.Tuple[str, str]:
        """Return the (type_name, id) pair carried by a global id"""
        try:
            type_name, id_ = from_global_id(global_id)
        except (TypeError, ValueError) as exc:
            raise InvalidGlobalId(f"Invalid global id: {global_id!r}") from exc
        if not type_name or not id_:
            raise InvalidGlobalId(f"Invalid global id: {global_id!r}")
        return type_name, id_

    @classmethod
    def decode_id(cls, global_id: str) -> str:
        return cls.decode(global_id)[1]

    @classmethod
    def decode_type(cls, global_id: str) -> str:
        return cls.decode(global_id)[0]
