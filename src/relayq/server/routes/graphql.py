import logging
from typing import Any, Dict, Optional

from graphql import graphql as graphql_exec
from relayq.container import Container
from relayq.gql.alias import Schema
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

__all__ = ["get_graphql_route"]

log = logging.getLogger(__name__)


def get_graphql_route(
    gql_schema: Schema,
    container: Container,
    path: str = "/",
    name: Optional[str] = None,
) -> Route:
    """Create a Starlette Route to serve GraphQL requests

    **Parameters**

    * **gql_schema**: _Schema_ = A GraphQL-core schema
    * **container**: _Container_ = Services made available to resolvers through the context
    * **path**: _str_ = URL path to serve GraphQL from, e.g. '/'
    * **name**: _str_ = Name of the GraphQL serving Starlette route
    """

    async def graphql_endpoint(request: Request) -> JSONResponse:

        payload = await get_payload(request)
        query = payload.get("query")
        if not query:
            raise HTTPException(400, "query must be provided")

        request_context = {
            "request": request,
            "container": container,
        }
        result = await graphql_exec(
            schema=gql_schema,
            source=query,
            context_value=request_context,
            variable_values=payload.get("variables") or {},
            operation_name=payload.get("operationName"),
        )
        errors = result.errors or []
        for error in errors:
            log.debug("GraphQL error at %s: %s", error.path, error.message)

        result_dict = {
            "data": result.data,
            "errors": [error.formatted for error in errors],
        }
        return JSONResponse(result_dict)

    graphql_route = Route(path=path, endpoint=graphql_endpoint, methods=["POST"], name=name)

    return graphql_route


async def get_payload(request: Request) -> Dict[str, Any]:
    """Retrieve query, variables and operationName from the Starlette Request"""

    content_type = request.headers.get("content-type", "").split(";")[0].strip()
    if content_type == "application/graphql":
        return {"query": (await request.body()).decode("utf-8")}
    if content_type == "application/json":
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "request body must be valid JSON") from None
        if not isinstance(body, dict):
            raise HTTPException(400, "request body must be a JSON object")
        return body
    raise HTTPException(400, "content-type header must be set")
