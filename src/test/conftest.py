# pylint: disable=redefined-outer-name
from __future__ import annotations

from typing import Callable

import pytest
from graphql import graphql_sync
from graphql.execution.execute import ExecutionResult
from relayq import Container, Validator
from starlette.testclient import TestClient


@pytest.fixture
def validator() -> Validator:
    return Validator()


@pytest.fixture
def container(validator) -> Container:
    """ Empty container with a fresh registry """
    return Container(validator=validator)


@pytest.fixture
def library_container() -> Container:
    """ Container with the book catalogue schema registered """
    from library_schema import container as _container

    return _container


@pytest.fixture
def gql_exec_builder() -> Callable[[Container], Callable[[str], ExecutionResult]]:
    """Return a function that accepts a container
    and returns a graphql executor"""

    def build(container: Container) -> Callable[[str], ExecutionResult]:
        schema = container.graphql.build_schema()
        return lambda source_query, **variables: graphql_sync(
            schema=schema, source=source_query, context_value={"container": container}, variable_values=variables
        )

    return build


@pytest.fixture
def client(library_container) -> TestClient:
    from relayq.server.starlette import create_app

    return TestClient(create_app(library_container))
