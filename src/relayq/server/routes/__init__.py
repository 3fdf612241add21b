from .graphiql import get_graphiql_route
from .graphql import get_graphql_route

__all__ = ["get_graphql_route", "get_graphiql_route"]
