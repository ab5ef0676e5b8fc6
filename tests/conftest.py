import pytest

pytest_plugins = [
    "tests.fixtures.artifacts",
    "tests.fixtures.database",
]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"
