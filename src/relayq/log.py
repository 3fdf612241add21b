"""Logging setup shared by the CLI and the ASGI app"""
import logging
import typing

from relayq.config import Config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: typing.Optional[str] = None, handlers: typing.Optional[typing.List[logging.Handler]] = None):
    """Configure the relayq logger

    **Parameters**

    * **level**: _str_ = Log level name, defaults to RELAYQ_LOG_LEVEL
    * **handlers**: _List[Handler]_ = Custom handlers (defaults to a stream handler)
    """
    level = (level or Config.LOG_LEVEL or "INFO").upper()

    logger = logging.getLogger("relayq")
    logger.handlers.clear()
    logger.setLevel(getattr(logging, level))

    if handlers is None:
        handlers = [logging.StreamHandler()]

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
