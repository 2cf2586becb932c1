"""
Strict validation of JSON-LD documents against their context.

.. module:: ldbridge.validation
  :synopsis: Rejects attributes a context does not define
"""

from ldbridge.errors import BadRequest


def validate(document, context):
    """
    Verifies that every top-level field of a document is a reserved keyword
    (``@id``, ``@type``, ``@context``), a term of the context, or an alias of
    a reserved keyword.

    Fields are checked in document order and the first unknown one is
    reported.

    :param document: the parsed JSON-LD document.
    :param context: the document's resolved Context.
    """
    for name in document:
        if not context.recognizes(name):
            raise BadRequest('Unknown attribute ' + name, {'attribute': name})
