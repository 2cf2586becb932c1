"""
Resolution of a document's ``@context``.

A context is either an IRI, dereferenced through the document loader, or an
inline object. The resolved :class:`Context` carries the term table (term to
predicate IRI) and the alias table (terms standing for ``@id``, ``@type``
or ``@context``).

.. module:: ldbridge.context
  :synopsis: Context resolution into term and alias tables
"""

import copy
import json
import logging

from pyld.jsonld import JsonLdError, JsonLdProcessor

from ldbridge.errors import (
    BadRequest, DocumentLoaderError, Fatal, caused_by, describe)

log = logging.getLogger(__name__)

# keywords that may appear as top-level document fields
RESERVED = ('@id', '@type', '@context')


def load_json(content):
    """
    Parses JSON text, or copies an already parsed JSON value.

    The copy keeps callers' documents untouched when a request-scoped change
    (such as attaching a default context) is made.

    :param content: JSON text, bytes, or a parsed value.

    :return: the parsed value.
    """
    if isinstance(content, (bytes, bytearray, str)):
        try:
            if not isinstance(content, str):
                content = content.decode('utf-8')
            return json.loads(content)
        except ValueError as cause:
            raise BadRequest(
                'Could not parse request: ' + describe(cause), cause=cause)
    return copy.deepcopy(content)


class Context(object):
    """
    A resolved JSON-LD context.

    :param iri: the context IRI, or None for an inline context.
    :param document: the context document, ``{"@context": ...}``.
    :param active: the PyLD active context.
    """

    def __init__(self, iri, document, active):
        self.iri = iri
        self.document = document
        self.active = active
        self.terms = _term_table(active)
        self.aliases = _alias_table(active)

    def keyword(self, name):
        """
        Gets the keyword a field name stands for: the name itself for a
        reserved keyword, the aliased keyword for an alias, else None.
        """
        if name in RESERVED:
            return name
        return self.aliases.get(name)

    def predicate_for(self, name):
        """
        Gets the predicate IRI a term expands to, or None.
        """
        return self.terms.get(name)

    def recognizes(self, name):
        """
        Checks whether a top-level field name is a reserved keyword, a term
        or an alias.
        """
        return name in self.terms or self.keyword(name) is not None

    def __repr__(self):
        return '<Context %s: %d terms>' % (
            self.iri or 'inline', len(self.terms))


def _term_table(active):
    terms = {}
    for term, definition in active['mappings'].items():
        if not definition or term.startswith('@'):
            continue
        iri = definition.get('@id')
        # keyword aliases map to a keyword, not a predicate
        if not isinstance(iri, str) or iri.startswith('@'):
            continue
        terms[term] = iri
    return terms


def _alias_table(active):
    aliases = {}
    for term, definition in active['mappings'].items():
        if not definition or term.startswith('@'):
            continue
        keyword = definition.get('@id')
        if isinstance(keyword, str) and keyword in RESERVED:
            aliases[term] = keyword
    return aliases


def _dereference(iri, loader):
    try:
        remote = loader(iri)
    except Fatal:
        raise
    except Exception as cause:
        raise DocumentLoaderError(
            'Could not load JSON-LD context', {'url': iri}, cause=cause)

    document = remote.get('document')
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except ValueError as cause:
            raise BadRequest(
                'Could not parse context %s' % iri, {'url': iri}, cause=cause)
    if not isinstance(document, dict) or '@context' not in document:
        raise BadRequest(
            'Could not parse context %s: no @context found' % iri,
            {'url': iri})
    return document


def resolve_context(document, loader):
    """
    Resolves the ``@context`` of a document.

    :param document: the parsed JSON-LD document.
    :param loader: the document loader used to dereference context IRIs.

    :return: the resolved Context.
    """
    if not isinstance(document, dict):
        raise BadRequest('Could not parse context: not a JSON object')

    value = document.get('@context')
    if isinstance(value, str):
        iri = value
        local = _dereference(value, loader)
    elif isinstance(value, dict):
        iri = None
        local = {'@context': copy.deepcopy(value)}
    elif value is None:
        raise BadRequest('No context provided')
    else:
        raise BadRequest(
            'Could not parse context: must be an IRI or an object',
            {'@context': value})

    options = {'base': iri or '', 'documentLoader': loader}
    processor = JsonLdProcessor()
    try:
        initial = processor.process_context(None, None, options)
        active = processor.process_context(initial, local, options)
    except JsonLdError as cause:
        if caused_by(cause, DocumentLoaderError):
            raise Fatal(
                'Could not load JSON-LD context', {'@context': value},
                cause=cause)
        raise BadRequest(
            'Could not parse context: ' + describe(cause),
            {'@context': value}, cause=cause)

    context = Context(iri, local, active)
    log.debug('Resolved %r', context)
    return context
