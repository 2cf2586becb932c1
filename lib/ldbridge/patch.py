"""
Translation of JSON Merge Patch documents into SPARQL Update.

A merge patch names, for the subject in its ``@id``, the predicates to
replace (a value is given) or to remove (the value is ``null``). The
generated update deletes every existing value of each patched predicate
and inserts the statements of the patch itself::

    DELETE {
    ?s <predicate> ?o .
    }
    INSERT {
    <statements of the patch>
    }
    WHERE {?s ?p ?o}

The script is ASCII: other characters are written as escapes.

.. module:: ldbridge.patch
  :synopsis: JSON Merge Patch to SPARQL Update
"""

import logging

from pyld.jsonld import RDF_TYPE

from ldbridge.config import Settings
from ldbridge.context import load_json, resolve_context
from ldbridge.errors import BadRequest
from ldbridge.translator import HAS_CONTEXT, JsonldTranslator

log = logging.getLogger(__name__)


class JsonMergePatchTranslator(object):
    """
    Compiles JSON Merge Patch documents into SPARQL Update scripts.

    :param loader: the document loader used to dereference contexts.
    :param [settings]: the Settings; ``strict`` and ``persist_context``
      apply.
    """

    # fields never treated as predicates to replace
    excluded = ('@context',)

    def __init__(self, loader, settings=None):
        settings = settings or Settings()
        self.loader = loader
        self.persist_context = settings.persist_context
        self.translator = JsonldTranslator(loader, settings)

    def to_sparql(self, patch, default_context=None):
        """
        Translates a merge patch into a SPARQL Update script.

        :param patch: the merge patch, as JSON text or a parsed object.
        :param [default_context]: context IRI to use when the patch has no
          ``@context``.

        :return: the SPARQL Update text.
        """
        patch = load_json(patch)
        if not isinstance(patch, dict):
            raise BadRequest('Could not parse request: not a JSON object')

        if patch.get('@context') is None:
            if default_context is None:
                raise BadRequest('No context provided')
            patch['@context'] = str(default_context)

        predicates = self.predicates(resolve_context(patch, self.loader))

        builder = SparqlBuilder()
        for name in patch:
            if name in self.excluded:
                continue
            predicate = predicates.get(name)
            if predicate is None:
                log.debug('No predicate for patched field %s, skipping', name)
                continue
            builder.delete_with_predicate(predicate)

        if self.persist_context and isinstance(patch['@context'], str):
            builder.delete_with_predicate(HAS_CONTEXT)

        builder.add_statements(
            self.translator.translate(patch, default_graph_only=True))
        return builder.build()

    @staticmethod
    def predicates(context):
        """
        Builds the field name to predicate table of a context: its terms,
        plus ``@type`` and any alias of it mapped to rdf:type.
        """
        predicates = dict(context.terms)
        predicates['@type'] = RDF_TYPE
        for alias, keyword in context.aliases.items():
            if keyword == '@type':
                predicates[alias] = RDF_TYPE
        return predicates


class SparqlBuilder(object):
    """
    Accumulates the DELETE patterns and INSERT statements of an update.
    """

    def __init__(self):
        self.subtractions = []
        self.additions = []

    def delete_with_predicate(self, predicate):
        if predicate and predicate not in self.subtractions:
            self.subtractions.append(predicate)

    def add_statements(self, statements):
        self.additions.append(statements)

    def build(self):
        deletes = ''.join('?s <%s> ?o .\n' % p for p in self.subtractions)
        script = 'DELETE { \n%s}\nINSERT { \n%s}\nWHERE {?s ?p ?o}' % (
            deletes, ''.join(self.additions))
        return escape_unicode(script)


def escape_unicode(text):
    """
    Replaces every non-ASCII character with its ``\\uXXXX`` or
    ``\\UXXXXXXXX`` escape, which SPARQL resolves in IRIs and literals.
    """
    return ''.join(
        c if ord(c) < 0x80 else
        '\\u%04X' % ord(c) if ord(c) <= 0xFFFF else
        '\\U%08X' % ord(c)
        for c in text)
