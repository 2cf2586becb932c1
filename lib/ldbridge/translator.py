"""
Translation of JSON-LD documents into N-Quads.

.. module:: ldbridge.translator
  :synopsis: JSON-LD to canonical N-Quads
"""

import logging
import uuid

from pyld import jsonld

from ldbridge.config import Settings
from ldbridge.context import load_json, resolve_context
from ldbridge.errors import (
    BadRequest, DocumentLoaderError, Fatal, caused_by, describe)
from ldbridge.validation import validate

log = logging.getLogger(__name__)

# predicate of the statement recording a resource's context IRI
HAS_CONTEXT = jsonld.LINK_HEADER_REL


def synthetic_base():
    """
    Creates a unique base IRI standing in for "no base".

    PyLD drops statements whose subject or object stays relative, so
    relative identifiers are resolved against this base and the base is
    stripped from the serialized output afterwards.
    """
    return 'http://%s.null-relative.invalid/' % uuid.uuid4().hex


class JsonldTranslator(object):
    """
    Translates JSON-LD documents into N-Quads.

    :param loader: the document loader used to dereference contexts.
    :param [settings]: the Settings; ``strict`` and ``persist_context``
      apply.
    """

    def __init__(self, loader, settings=None):
        settings = settings or Settings()
        self.loader = loader
        self.strict = settings.strict
        self.persist_context = settings.persist_context
        self.base = synthetic_base()

    def translate(self, document, default_graph_only=False):
        """
        Translates a JSON-LD document into N-Quads.

        Relative identifiers, including the empty ``@id`` of a resource being
        created, come out relative (``<>``).

        :param document: JSON-LD text or a parsed JSON-LD value.
        :param [default_graph_only]: reject documents stating anything in a
          named graph.

        :return: the N-Quads text.
        """
        document = load_json(document)
        if not isinstance(document, (dict, list)):
            raise BadRequest(
                'Could not parse jsonld: not a JSON object or array')

        if self.strict:
            validate(document, resolve_context(document, self.loader))

        if self.persist_context:
            document = self._with_persisted_context(document)

        options = {
            'base': self.base,
            'documentLoader': self.loader
        }
        try:
            dataset = jsonld.to_rdf(document, options)
        except (jsonld.JsonLdError, ValueError, TypeError) as cause:
            if caused_by(cause, DocumentLoaderError):
                raise Fatal(
                    'Could not load JSON-LD context', cause=cause)
            raise BadRequest(
                'Could not parse jsonld: ' + describe(cause), cause=cause)

        if default_graph_only:
            named = sorted(
                name for name, triples in dataset.items()
                if name != '@default' and triples)
            if named:
                raise BadRequest(
                    'Named graphs are not supported',
                    {'graphs': [
                        name.replace(self.base, '') for name in named]})

        nquads = jsonld.JsonLdProcessor.to_nquads(dataset)
        return nquads.replace(self.base, '')

    def _with_persisted_context(self, document):
        if not isinstance(document, dict):
            return document
        context = document.get('@context')
        if not isinstance(context, str) or '@graph' in document:
            return document
        log.debug('Persisting context %s', context)
        document[HAS_CONTEXT] = {'@id': context}
        return document
