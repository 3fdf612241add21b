from __future__ import annotations

import click
import uvicorn
from graphql.utilities import print_schema
from relayq import VERSION
from relayq.env import EnvManager


@click.group()
@click.version_option(version=VERSION)
def main(**kwargs):
    pass  # pragma: no cover


@main.command()
@click.option("-a", "--app", "app_path", required=True, help='Container or registry import path e.g. "myapp:container"')
@click.option("-p", "--port", default=5034, help="Web server port")
@click.option("-h", "--host", default="0.0.0.0", help="Host address")
@click.option("-w", "--workers", default=1, help="Number of parallel workers")
@click.option("--graphql-path", default="/", help="URL path serving GraphQL requests")
@click.option("--graphiql-path", default="/graphiql", help="URL path serving GraphiQL")
@click.option("--log-level", default="info", help="Log level name")
@click.option("--reload/--no-reload", default=False, help="Reload if source files change")
def run(app_path, host, port, workers, graphql_path, graphiql_path, log_level, reload):
    """Run the GraphQL Web Server"""
    if reload and workers > 1:
        click.echo("Reload not supported with workers > 1", err=True)
    else:

        with EnvManager(
            RELAYQ_APP=app_path,
            RELAYQ_LOG_LEVEL=log_level,
            RELAYQ_GRAPHQL_PATH=graphql_path,
            RELAYQ_GRAPHIQL_PATH=graphiql_path,
        ):

            uvicorn.run(
                "relayq.server.app:APP", host=host, workers=workers, port=port, log_level=log_level, reload=reload
            )


@main.command()
@click.option("-a", "--app", "app_path", required=True, help='Container or registry import path e.g. "myapp:container"')
@click.option("-o", "--out-file", type=click.File("w"), default=None, help="Output file path")
def dump_schema(app_path, out_file):
    """Dump the GraphQL Schema to stdout or file"""
    from relayq.container import load_container

    container = load_container(app_path)
    schema_str = print_schema(container.graphql.build_schema())
    click.echo(schema_str, file=out_file)
