"""
Document loader serving statically injected JSON-LD documents.

Contexts are injected once at startup (usually from the preload table in
:class:`ldbridge.config.Settings`) and then only read, so a single loader
can be shared between threads.

.. module:: ldbridge.documentloader.static
  :synopsis: Preloaded JSON-LD document loader
"""
import copy
import json
import logging
import urllib.parse as urllib_parse

from ldbridge.errors import DocumentLoaderError, Fatal

log = logging.getLogger(__name__)


class StaticDocumentLoader(object):
    """
    A PyLD document loader backed by a table of injected documents.

    :param [fallback]: loader for URLs that were not injected. Without one,
      loading an unknown URL fails. Usually
      :func:`pyld.jsonld.requests_document_loader`, whose failures are
      reported as DocumentLoaderError.
    """

    def __init__(self, fallback=None):
        self.fallback = fallback
        self._injected = {}

    def add_injected_doc(self, iri, content):
        """
        Registers static content for an IRI.

        :param iri: the IRI the content is served for.
        :param content: JSON text, bytes, or an already parsed document.

        :return: this loader.
        """
        if isinstance(content, (bytes, bytearray, str)):
            try:
                if not isinstance(content, str):
                    content = content.decode('utf-8')
                document = json.loads(content)
            except ValueError as cause:
                raise Fatal(
                    'Could not add static jsonld context', {'url': iri},
                    cause=cause)
        else:
            document = copy.deepcopy(content)
        self._injected[iri] = document
        return self

    def preload(self, table):
        """
        Injects every context in a table of context IRI to file path.

        Entries with a malformed IRI or a missing file are skipped with a
        warning.

        :param table: mapping of context IRI to file path.
        """
        for iri, path in table.items():
            pieces = urllib_parse.urlparse(iri)
            if not all([pieces.scheme, pieces.netloc]):
                log.warning(
                    "Bad json-ld context URL for preload: '%s'", iri)
                continue
            try:
                with open(path, 'rb') as f:
                    content = f.read()
            except FileNotFoundError:
                log.warning(
                    "json-ld context file not found at '%s' for '%s'",
                    path, iri)
                continue
            except OSError as cause:
                raise Fatal(
                    'Could not read static jsonld context',
                    {'url': iri, 'file': path}, cause=cause)
            log.info(
                "Loading static context for '%s' from file '%s'", iri, path)
            self.add_injected_doc(iri, content)

    def __contains__(self, iri):
        return iri in self._injected

    def __call__(self, url, options=None):
        """
        Retrieves the document for a URL.

        :param url: the URL to retrieve.
        :param [options]: loader options, passed on to the fallback.

        :return: the RemoteDocument.
        """
        if url in self._injected:
            return {
                'contentType': 'application/ld+json',
                'contextUrl': None,
                'documentUrl': url,
                'document': copy.deepcopy(self._injected[url])
            }
        if self.fallback is None:
            raise DocumentLoaderError(
                'No static document for URL and no remote loader '
                'configured.', {'url': url})
        try:
            return self.fallback(url, options or {})
        except DocumentLoaderError:
            raise
        except Exception as cause:
            raise DocumentLoaderError(
                'Could not retrieve a JSON-LD document from the URL.',
                {'url': url}, cause=cause)

    load_document = __call__
