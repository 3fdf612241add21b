# pylint: disable=invalid-name
from graphql.type import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLField,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLResolveInfo,
    GraphQLSchema,
    GraphQLString,
    GraphQLType,
    specified_scalar_types,
)

Type = GraphQLType
NamedType = GraphQLNamedType
List = GraphQLList
NonNull = GraphQLNonNull
Argument = GraphQLArgument
Boolean = GraphQLBoolean
String = GraphQLString
ID = GraphQLID
Int = GraphQLInt
Float = GraphQLFloat
ResolveInfo = GraphQLResolveInfo
Schema = GraphQLSchema
Field = GraphQLField
ObjectType = GraphQLObjectType

# graphql-core 3.2 keys the specified scalars by name, 3.1 lists them
SCALAR_TYPES = tuple(
    specified_scalar_types.values() if isinstance(specified_scalar_types, dict) else specified_scalar_types
)
