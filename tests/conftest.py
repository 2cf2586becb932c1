import os

import pytest
from rdflib import Graph

from ldbridge.config import Settings
from ldbridge.documentloader import StaticDocumentLoader

DATA_DIR = os.path.join(os.path.abspath(os.path.dirname(__file__)), 'data')

FARM = 'http://example.org/farm'
FARM_ALIASED = 'http://example.org/farm-aliased'

# context IRI to the file under tests/data serving it
CONTEXTS = {
    FARM: 'farm.jsonld',
    FARM_ALIASED: 'farm-aliased.jsonld',
}

SETTINGS_ENVIRONMENT = (
    'JSONLD_STRICT', 'JSONLD_CONTEXT_PERSIST', 'JSONLD_CONTEXT_MINIMAL',
    'COMPACTION_URI')


def pytest_configure(config):
    # Register custom markers
    config.addinivalue_line(
        "markers", "network: marks tests as requiring network access (may be slow)"
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keeps Settings() independent of the environment running the tests."""
    for name in list(os.environ):
        if (name.upper() in SETTINGS_ENVIRONMENT
                or name.upper().startswith('COMPACTION_PRELOAD_')):
            monkeypatch.delenv(name, raising=False)


def data_path(name):
    return os.path.join(DATA_DIR, name)


def read_data(name):
    with open(data_path(name), encoding='utf-8') as f:
        return f.read()


def graph(nquads):
    """Loads default-graph N-Quads into an rdflib Graph."""
    g = Graph()
    g.parse(data=nquads, format='nt')
    return g


@pytest.fixture
def preload():
    return {iri: data_path(name) for iri, name in CONTEXTS.items()}


@pytest.fixture
def loader(preload):
    loader = StaticDocumentLoader()
    loader.preload(preload)
    return loader


@pytest.fixture
def settings(preload):
    return Settings(default_context=FARM, preload=preload)
