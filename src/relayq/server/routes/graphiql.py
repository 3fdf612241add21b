from functools import lru_cache

from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Route


def get_graphiql_route(graphiql_path: str = "/graphiql", graphql_path: str = "/", name="graphiql") -> Route:
    """Return a route serving the GraphiQL interactive API explorer

    **Parameters**

    * **graphiql_path**: _str_ = URL path to GraphiQL html page
    * **graphql_path**: _str_ =  URL path to the GraphQL route
    * **name**: _str_ =  Name for the route
    """

    async def graphiql_endpoint(_: Request) -> HTMLResponse:
        """Return the HTMLResponse for GraphiQL GraphQL explorer configured to hit the correct endpoint"""
        return HTMLResponse(build_graphiql_html(graphql_path))

    return Route(graphiql_path, graphiql_endpoint, methods=["GET"], name=name)


@lru_cache()
def build_graphiql_html(graphql_route_path: str) -> str:
    """Return the raw HTML for GraphiQL GraphQL explorer"""
    return GRAPHIQL.replace("{{REQUEST_PATH}}", f'"{graphql_route_path}"')


GRAPHIQL = """<!doctype html>
<html lang="en">
  <head>
    <title>relayq GraphiQL</title>
    <style>body { margin: 0; } #graphiql { height: 100vh; }</style>
    <script crossorigin src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
    <script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
    <script crossorigin src="https://unpkg.com/graphiql@3/graphiql.min.js"></script>
    <link rel="stylesheet" href="https://unpkg.com/graphiql@3/graphiql.min.css" />
  </head>
  <body>
    <div id="graphiql">Loading GraphiQL...</div>
    <script>
      const fetcher = GraphiQL.createFetcher({ url: window.location.origin + {{REQUEST_PATH}} });
      ReactDOM.createRoot(document.getElementById("graphiql")).render(
        React.createElement(GraphiQL, { fetcher: fetcher, defaultEditorToolsVisibility: true })
      );
    </script>
  </body>
</html>
"""
