from relayq.env import EnvManager

ENV = EnvManager.get_environ()


class Config:

    # Import path of the Container (or GraphQL registry) to serve, e.g. "myapp.schema:container"
    APP = ENV.get("RELAYQ_APP")
    LOG_LEVEL = ENV.get("RELAYQ_LOG_LEVEL", "INFO")
    GRAPHQL_PATH = ENV.get("RELAYQ_GRAPHQL_PATH", "/")
    GRAPHIQL_PATH = ENV.get("RELAYQ_GRAPHIQL_PATH", "/graphiql")
