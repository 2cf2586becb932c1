"""
Error kinds raised by ldbridge.

Every failure is either a :class:`BadRequest` (the client sent something
that cannot be interpreted, fix the request and try again) or a
:class:`Fatal` (an internal or environmental fault such as a context that
cannot be fetched). Nothing is retried internally.

.. module:: ldbridge.errors
  :synopsis: BadRequest and Fatal error kinds
"""


class BridgeError(Exception):
    """
    Base class for ldbridge errors.
    """

    def __init__(self, message, details=None, cause=None):
        Exception.__init__(self, message)
        self.details = details
        self.cause = cause

    @property
    def message(self):
        return self.args[0]

    def __str__(self):
        rval = self.message
        if self.details:
            rval += '\nDetails: ' + repr(self.details)
        return rval


class BadRequest(BridgeError):
    """
    The request content is unacceptable: a missing or malformed context,
    an unknown attribute in strict mode, or JSON-LD that cannot be parsed.
    """


class Fatal(BridgeError):
    """
    An unrecoverable processing error.
    """


class DocumentLoaderError(Fatal):
    """
    A document loader could not retrieve a document.
    """


def caused_by(exc, type_):
    """
    Checks whether an exception, or anything in its chain of causes, is an
    instance of the given type.

    PyLD wraps loader failures in its own JsonLdError, either through the
    ``cause`` attribute, a ``cause`` entry in ``details``, or implicit
    exception chaining, so all three links are followed.

    :param exc: the exception to inspect.
    :param type_: the exception type to look for.

    :return: True if found, False if not.
    """
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, type_):
            return True
        seen.add(id(exc))
        details = getattr(exc, 'details', None)
        links = [getattr(exc, 'cause', None), exc.__cause__,
                 details.get('cause') if isinstance(details, dict) else None,
                 exc.__context__]
        exc = next(
            (link for link in links if isinstance(link, BaseException)),
            None)
    return False


def describe(exc):
    """
    Gets the short message of an exception, without the causes and
    tracebacks PyLD appends to its string form.
    """
    if exc.args and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc)
