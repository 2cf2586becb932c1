import pytest
from pyld.jsonld import JsonLdError

from ldbridge.context import Context, load_json, resolve_context
from ldbridge.errors import (
    BadRequest, DocumentLoaderError, Fatal, caused_by)

from conftest import FARM, FARM_ALIASED

FARM_NS = 'http://example.org/farm#'
FARM_EXTENDED = 'http://example.org/farm-extended'


class TestResolveContext:
    def test_iri_context(self, loader):
        context = resolve_context({'@context': FARM}, loader)
        assert isinstance(context, Context)
        assert context.iri == FARM
        assert context.terms['name'] == FARM_NS + 'name'
        assert context.terms['barn'] == FARM_NS + 'barn'
        assert context.terms['Cow'] == FARM_NS + 'Cow'
        assert context.predicate_for('healthy') == FARM_NS + 'healthy'
        assert context.predicate_for('color') is None
        assert context.aliases == {}

    def test_inline_context(self, loader):
        document = {'@context': {
            'ex': 'http://example.org/ex#',
            'label': 'ex:label',
            'ident': {'@id': '@id'},
        }}
        context = resolve_context(document, loader)
        assert context.iri is None
        assert context.terms == {
            'ex': 'http://example.org/ex#',
            'label': 'http://example.org/ex#label',
        }
        assert context.aliases == {'ident': '@id'}

    def test_aliases(self, loader):
        context = resolve_context({'@context': FARM_ALIASED}, loader)
        assert context.aliases == {'id': '@id', 'type': '@type'}
        assert 'id' not in context.terms
        assert 'type' not in context.terms
        assert context.keyword('type') == '@type'
        assert context.keyword('@context') == '@context'
        assert context.keyword('name') is None

    def test_aliases_from_nested_context(self, loader):
        loader.add_injected_doc(FARM_EXTENDED, {'@context': [
            FARM_ALIASED, {'weight': 'farm:weight'}]})
        context = resolve_context({'@context': FARM_EXTENDED}, loader)
        assert context.aliases == {'id': '@id', 'type': '@type'}
        assert context.terms['weight'] == FARM_NS + 'weight'
        assert context.terms['name'] == FARM_NS + 'name'
        assert context.keyword('id') == '@id'

    def test_recognizes(self, loader):
        context = resolve_context({'@context': FARM_ALIASED}, loader)
        for name in ('@id', '@type', '@context', 'id', 'type', 'name'):
            assert context.recognizes(name)
        assert not context.recognizes('color')

    def test_no_context(self, loader):
        with pytest.raises(BadRequest, match='No context provided'):
            resolve_context({'name': 'bessie'}, loader)
        with pytest.raises(BadRequest, match='No context provided'):
            resolve_context({'@context': None}, loader)

    @pytest.mark.parametrize('value', [[FARM], 5, True])
    def test_unsupported_context(self, loader, value):
        with pytest.raises(BadRequest):
            resolve_context({'@context': value}, loader)

    def test_not_an_object(self, loader):
        with pytest.raises(BadRequest):
            resolve_context([{'@context': FARM}], loader)

    def test_unloadable_context_is_fatal(self, loader):
        with pytest.raises(Fatal) as exc:
            resolve_context({'@context': 'http://example.org/nowhere'}, loader)
        assert isinstance(exc.value, DocumentLoaderError)

    def test_context_document_without_context(self, loader):
        loader.add_injected_doc('http://example.org/not-a-context', {'a': 1})
        with pytest.raises(BadRequest, match='no @context found'):
            resolve_context(
                {'@context': 'http://example.org/not-a-context'}, loader)

    def test_malformed_context(self, loader):
        with pytest.raises(BadRequest) as exc:
            resolve_context({'@context': {'@vocab': 5}}, loader)
        assert not isinstance(exc.value, Fatal)
        assert isinstance(exc.value.cause, JsonLdError)


class TestLoadJson:
    def test_text(self):
        assert load_json('{"a": [1, null]}') == {'a': [1, None]}
        assert load_json(b'{"a": true}') == {'a': True}

    def test_parsed_values_are_copied(self):
        document = {'a': {'b': 1}}
        loaded = load_json(document)
        loaded['a']['b'] = 2
        assert document == {'a': {'b': 1}}

    def test_invalid(self):
        with pytest.raises(BadRequest, match='Could not parse request'):
            load_json('{"a": ')

    def test_invalid_utf8(self):
        with pytest.raises(BadRequest, match='Could not parse request') as exc:
            load_json(b'{"a": "\xff"}')
        assert isinstance(exc.value.cause, UnicodeDecodeError)


class TestCausedBy:
    def test_cause_attribute(self):
        error = JsonLdError(
            'Could not load', 'jsonld.LoadDocumentError',
            cause=DocumentLoaderError('unreachable'))
        assert caused_by(error, DocumentLoaderError)
        assert caused_by(error, Fatal)
        assert not caused_by(error, BadRequest)

    def test_nested_details_cause(self):
        inner = JsonLdError(
            'Could not load', 'jsonld.LoadDocumentError',
            {'cause': DocumentLoaderError('unreachable')})
        outer = JsonLdError('Could not expand', 'jsonld.ExpandError',
                            cause=inner)
        assert caused_by(outer, DocumentLoaderError)

    def test_exception_chaining(self):
        try:
            try:
                raise DocumentLoaderError('unreachable')
            except DocumentLoaderError as cause:
                raise ValueError('wrapped') from cause
        except ValueError as error:
            assert caused_by(error, DocumentLoaderError)

    def test_unrelated(self):
        assert not caused_by(ValueError('x'), DocumentLoaderError)
