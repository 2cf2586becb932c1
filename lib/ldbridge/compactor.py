"""
Compaction of repository JSON-LD against a context.

.. module:: ldbridge.compactor
  :synopsis: Context-bound compaction of expanded JSON-LD
"""

import json
import logging
import re

from pyld import jsonld

from ldbridge.config import Settings
from ldbridge.context import load_json, resolve_context
from ldbridge.errors import BridgeError, Fatal
from ldbridge.translator import HAS_CONTEXT, JsonldTranslator

log = logging.getLogger(__name__)

# <subject> <has-context> <context> in N-Quads output
_PERSISTED_CONTEXT = re.compile(
    r'^\S+ <%s> <([^>]+)>' % re.escape(HAS_CONTEXT), re.MULTILINE)


class Compactor(object):
    """
    Compacts expanded JSON-LD against a context.

    :param loader: the document loader used to dereference contexts.
    :param [settings]: the Settings; ``persist_context`` and
      ``limit_compaction`` apply.
    """

    INTERNAL_ATTRS = ('@id', '@type')

    def __init__(self, loader, settings=None):
        settings = settings or Settings()
        self.loader = loader
        self.limit_compaction = settings.limit_compaction
        self.persist_context = settings.persist_context
        # used only to look for a persisted context, never strict
        self.translator = JsonldTranslator(loader)

    def compact(self, jsonld_, context=None):
        """
        Produces a compact representation of the given JSON-LD.

        :param jsonld_: the JSON-LD, as text or a parsed value.
        :param [context]: the context IRI to compact with, unless a
          persisted context is found.

        :return: the compacted JSON-LD, as pretty printed JSON text.
        """
        try:
            document = load_json(jsonld_)
        except BridgeError as cause:
            raise Fatal('Error converting JsonLd', cause=cause)

        if self.persist_context:
            context = self.persisted_context(document) or context
        if context is None:
            raise Fatal('No context to compact with')
        context = str(context)

        try:
            compacted = jsonld.compact(
                document, context, {'documentLoader': self.loader})
        except (jsonld.JsonLdError, ValueError, TypeError) as cause:
            raise Fatal(
                'Error converting JsonLd', {'context': context}, cause=cause)

        if self.limit_compaction:
            compacted = self.limit(compacted, context)

        return json.dumps(compacted, indent=2)

    def persisted_context(self, document):
        """
        Finds the context IRI recorded for any subject of a document.

        :param document: the parsed JSON-LD.

        :return: the persisted context IRI, or None.
        """
        try:
            nquads = self.translator.translate(document)
        except BridgeError as cause:
            raise Fatal('Error converting JsonLd', cause=cause)

        match = _PERSISTED_CONTEXT.search(nquads)
        if match is None:
            return None
        log.debug('Using persisted context %s', match.group(1))
        return match.group(1)

    def limit(self, compacted, context):
        """
        Trims compacted JSON-LD down to the attributes its context defines.

        :param compacted: the compacted JSON-LD object.
        :param context: the context IRI it was compacted with.

        :return: the trimmed object, with ``@context`` set to the IRI.
        """
        try:
            resolved = resolve_context({'@context': context}, self.loader)
        except BridgeError as cause:
            raise Fatal(
                'Could not resolve context for compaction', {
                    'context': context}, cause=cause)

        limited = {'@context': context}
        if '@graph' in compacted:
            limited['@graph'] = [
                self._limit_node(node, resolved)
                for node in compacted['@graph']]
        else:
            limited.update(self._limit_node(compacted, resolved))
        return limited

    def _limit_node(self, node, context):
        limited = {}
        for key, value in node.items():
            keyword = context.keyword(key)
            if keyword == '@context':
                continue
            if keyword == '@type':
                value = self._limit_types(value, context)
                if value is None:
                    continue
            elif keyword not in self.INTERNAL_ATTRS and (
                    key not in context.terms):
                log.info(
                    'Dropping json field %s as it is not in context %s',
                    key, context.iri)
                continue
            limited[key] = value
        return limited

    def _limit_types(self, types, context):
        if not isinstance(types, list):
            return types
        known = [type_ for type_ in types if type_ in context.terms]
        if not known:
            log.info('Dropping types %s not in context %s', types, context.iri)
            return None
        if len(known) == 1:
            return known[0]
        return known
