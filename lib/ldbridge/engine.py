"""
One-stop wiring of the ldbridge components.

.. module:: ldbridge.engine
  :synopsis: Configured translator, patch compiler and compactor
"""

import logging

from ldbridge.compactor import Compactor
from ldbridge.config import Settings
from ldbridge.documentloader import StaticDocumentLoader
from ldbridge.patch import JsonMergePatchTranslator
from ldbridge.translator import JsonldTranslator

log = logging.getLogger(__name__)


class Engine(object):
    """
    Builds a preloaded document loader and the components sharing it.

    :param [settings]: the Settings (default: all modes off, no preload).
    :param [fallback]: loader for context IRIs that were not preloaded,
      e.g. :func:`pyld.jsonld.requests_document_loader`.
    """

    def __init__(self, settings=None, fallback=None):
        self.settings = settings or Settings()
        self.loader = StaticDocumentLoader(fallback=fallback)
        self.loader.preload(self.settings.preload)

        if self.settings.strict:
            log.info('Using strict JSON-LD')
        if self.settings.persist_context:
            log.info('Will persist and use persisted contexts')
        if self.settings.limit_compaction:
            log.info('Limiting compacted output to context attributes')
        if self.settings.default_context:
            log.info(
                "Using default context '%s'", self.settings.default_context)

        self.translator = JsonldTranslator(self.loader, self.settings)
        self.patch_translator = JsonMergePatchTranslator(
            self.loader, self.settings)
        self.compactor = Compactor(self.loader, self.settings)

    def translate(self, document):
        return self.translator.translate(document)

    def to_sparql(self, patch, default_context=None):
        return self.patch_translator.to_sparql(
            patch, default_context or self.settings.default_context)

    def compact(self, jsonld_, context=None):
        return self.compactor.compact(
            jsonld_, context or self.settings.default_context)
