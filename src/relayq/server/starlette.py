import logging

from relayq.container import Container
from relayq.server.exception import http_exception
from relayq.server.routes import get_graphiql_route, get_graphql_route
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

log = logging.getLogger(__name__)


def create_app(container: Container, graphql_path: str = "/", graphiql_path: str = "/graphiql") -> Starlette:
    """Instantiate the Starlette app serving the container's registry"""

    gql_schema = container.graphql.build_schema()
    log.info(
        "Serving %d queries and %d mutations at %s",
        len(container.graphql.queries),
        len(container.graphql.mutations),
        graphql_path,
    )

    graphql_route = get_graphql_route(gql_schema=gql_schema, container=container, path=graphql_path, name="graphql")

    graphiql_route = get_graphiql_route(graphiql_path=graphiql_path, graphql_path=graphql_path, name="graphiql")

    _app = Starlette(
        routes=[graphql_route, graphiql_route],
        middleware=[Middleware(CORSMiddleware, allow_origins=["*"])],
        exception_handlers={HTTPException: http_exception},
    )

    return _app
