""" Document loaders resolving context IRIs for ldbridge. """
from .static import StaticDocumentLoader

__all__ = ['StaticDocumentLoader']
