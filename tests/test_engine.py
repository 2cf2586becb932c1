import json

import pytest
from rdflib import Literal, URIRef

from ldbridge.config import Settings
from ldbridge.engine import Engine
from ldbridge.errors import BadRequest, DocumentLoaderError, Fatal

from conftest import FARM, FARM_ALIASED, graph, read_data


def test_preloaded_contexts(settings):
    engine = Engine(settings)
    assert FARM in engine.loader
    assert FARM_ALIASED in engine.loader


def test_translate(settings):
    nquads = Engine(settings).translate(read_data('compact.json'))
    g = graph(nquads)
    assert (URIRef('test:123'), URIRef('http://example.org/farm#name'),
            Literal('bessie')) in g


def test_default_context_for_patch(settings):
    sparql = Engine(settings).to_sparql({'@id': 'test:123', 'name': 'x'})
    assert '?s <http://example.org/farm#name> ?o .\n' in sparql


def test_explicit_context_for_patch(settings):
    sparql = Engine(settings).to_sparql(
        {'id': 'test:123', 'type': 'Barn'}, FARM_ALIASED)
    assert ('?s <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> ?o .\n'
            in sparql)


def test_no_default_context():
    engine = Engine()
    with pytest.raises(BadRequest, match='No context provided'):
        engine.to_sparql({'@id': 'test:123', 'name': 'x'})


def test_default_context_for_compaction(settings):
    compacted = json.loads(
        Engine(settings).compact(read_data('uncompacted.json')))
    assert compacted['@context'] == FARM
    assert compacted['name'] == 'bessie'


def test_modes_are_shared(preload):
    settings = Settings(
        strict=True, persist_context=True, limit_compaction=True,
        preload=preload)
    engine = Engine(settings)
    assert engine.translator.strict
    assert engine.patch_translator.persist_context
    assert engine.compactor.limit_compaction
    assert engine.compactor.loader is engine.loader


def test_offline_unknown_context(settings):
    engine = Engine(settings)
    document = {'@context': 'http://example.org/elsewhere', 'name': 'x'}
    with pytest.raises(DocumentLoaderError):
        engine.loader('http://example.org/elsewhere')
    with pytest.raises(Fatal):
        engine.translate(document)


def test_fallback_used(settings):
    fetched = []

    def fallback(url, options):
        fetched.append(url)
        return {'contentType': 'application/ld+json', 'contextUrl': None,
                'documentUrl': url,
                'document': {'@context': {'label': 'http://example.org/l'}}}

    engine = Engine(settings, fallback=fallback)
    nquads = engine.translate({
        '@context': 'http://example.org/fallback-context',
        '@id': 'test:1', 'label': 'x'})
    assert nquads == '<test:1> <http://example.org/l> "x" .\n'
    assert fetched == ['http://example.org/fallback-context']
