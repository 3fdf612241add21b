from relayq.config import Config
from relayq.container import load_container
from relayq.log import setup_logging
from relayq.server.starlette import create_app

setup_logging()

APP = create_app(
    load_container(Config.APP),
    graphql_path=Config.GRAPHQL_PATH,
    graphiql_path=Config.GRAPHIQL_PATH,
)
