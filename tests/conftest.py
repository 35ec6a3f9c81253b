import pytest

from strawberry_neo4j import BuildContext, registry_from_sdl

from .schema import MOVIES_SDL


@pytest.fixture
def registry():
    return registry_from_sdl(MOVIES_SDL)


@pytest.fixture
def ctx(registry):
    return BuildContext.create(registry)
