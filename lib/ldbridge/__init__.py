""" ldbridge adapts JSON-LD to and from an RDF repository. """
from .__about__ import (__copyright__, __license__, __version__)
from .compactor import Compactor
from .config import Settings
from .context import Context, resolve_context
from .documentloader import StaticDocumentLoader
from .engine import Engine
from .errors import BadRequest, BridgeError, DocumentLoaderError, Fatal
from .patch import JsonMergePatchTranslator
from .translator import JsonldTranslator
from .validation import validate

__all__ = [
    '__copyright__', '__license__', '__version__',
    'BadRequest', 'BridgeError', 'Compactor', 'Context',
    'DocumentLoaderError', 'Engine', 'Fatal', 'JsonMergePatchTranslator',
    'JsonldTranslator', 'Settings', 'StaticDocumentLoader',
    'resolve_context', 'validate'
]
