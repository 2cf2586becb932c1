"""
Configuration for ldbridge components.

Settings are read from environment variables (``JSONLD_STRICT``,
``COMPACTION_URI``, ...) with pydantic-settings into an immutable
:class:`Settings` value which is handed to each component's constructor.
The static context preload table is keyed dynamically, from pairs of
``compaction.preload.uri.<key>`` and ``compaction.preload.file.<key>``
properties (``COMPACTION_PRELOAD_URI_<KEY>`` in the environment).

.. module:: ldbridge.config
  :synopsis: Environment configuration
"""

import logging
import os
from typing import Annotated, Dict, Optional

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)

JSONLD_STRICT = 'jsonld.strict'
JSONLD_PERSIST_CONTEXT = 'jsonld.context.persist'
JSONLD_MINIMAL_CONTEXT = 'jsonld.context.minimal'

COMPACTION_URI = 'compaction.uri'
COMPACTION_PRELOAD_URIS = 'compaction.preload.uri'
COMPACTION_PRELOAD_FILES = 'compaction.preload.file'


def to_prop_name(name):
    """
    Converts a property or environment variable name to a property name.

    ``TEST_PROP_123`` and ``test.prOp.123`` both become ``test.prop.123``.
    """
    return name.lower().replace('_', '.')


def to_env_name(name):
    """
    Converts a property name to its environment variable name.

    ``test.prOp.123`` becomes ``TEST_PROP_123``.
    """
    return name.upper().replace('.', '_')


def remove_prefix(prefix, key):
    """
    Removes a prefix and the separator following it from a key.
    """
    if key == prefix:
        return ''
    return key[len(prefix) + 1:]


def extract(props, prefix):
    """
    Extracts every property under the given prefix.

    :param props: the property table.
    :param prefix: the dotted prefix.

    :return: the matching properties keyed by the remainder of their name;
      a property named exactly ``prefix`` is keyed by ''.
    """
    return {
        remove_prefix(prefix, key): value
        for key, value in props.items()
        if key == prefix or key.startswith(prefix + '.')}


def preload_table(environ=None):
    """
    Builds the static context preload table from the environment.

    :param [environ]: environment mapping (default: os.environ).

    :return: mapping of context IRI to file path.
    """
    if environ is None:
        environ = os.environ
    props = {to_prop_name(key): value for key, value in environ.items()}
    uris = extract(props, COMPACTION_PRELOAD_URIS)
    files = extract(props, COMPACTION_PRELOAD_FILES)
    table = {}
    for key, iri in uris.items():
        if key not in files:
            log.warning(
                'No context file configured for preload uri %s (%s)',
                iri, '.'.join(filter(None, [COMPACTION_PRELOAD_FILES, key])))
            continue
        table[iri] = files[key]
    return table


def _flag(value):
    # present and not "false" means enabled
    if isinstance(value, bool):
        return value
    return value is not None and str(value).lower() != 'false'


Flag = Annotated[bool, BeforeValidator(_flag)]


class Settings(BaseSettings):
    """
    Immutable configuration shared by reference between components.

    :param strict: reject documents with attributes the context does not
      define.
    :param persist_context: record a document's context IRI alongside it,
      and compact against a recorded context when one is found.
    :param limit_compaction: trim compacted output to attributes the
      context defines.
    :param default_context: context IRI used when a request has none.
    :param preload: static contexts, context IRI to file path.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra='ignore',
        frozen=True,
        populate_by_name=True,
    )

    strict: Flag = Field(
        False, validation_alias=to_env_name(JSONLD_STRICT))
    persist_context: Flag = Field(
        False, validation_alias=to_env_name(JSONLD_PERSIST_CONTEXT))
    limit_compaction: Flag = Field(
        False, validation_alias=to_env_name(JSONLD_MINIMAL_CONTEXT))
    default_context: Annotated[
        Optional[str], BeforeValidator(lambda value: value or None)] = Field(
            None, validation_alias=to_env_name(COMPACTION_URI))
    preload: Dict[str, str] = Field(default_factory=preload_table)

    @classmethod
    def load(cls, **overrides):
        """
        Reads settings from the environment; explicit overrides, by field
        name, take precedence.
        """
        settings = cls()
        if overrides:
            settings = settings.model_copy(update=overrides)
        log.debug('Loaded settings: %r', settings)
        return settings
