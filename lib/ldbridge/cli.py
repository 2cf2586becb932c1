#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
ldbridge - CLI script for ldbridge

Translates JSON-LD to N-Quads, JSON Merge Patch to SPARQL Update, or
compacts expanded JSON-LD, using contexts preloaded from files.
"""
import logging
import sys

from pyld import jsonld

from ldbridge.config import Settings
from ldbridge.engine import Engine
from ldbridge.errors import BadRequest, Fatal

log = logging.getLogger()


def read_input(path):
    """
    Reads a file, or standard input for '-'. The raw bytes are returned;
    decoding them is part of parsing the request.

    :param path: path to the input file
    :returns: the file content
    :rtype: bytes
    """
    log.debug('read_input: %r', path)
    if path == '-':
        return sys.stdin.buffer.read()
    with open(path, 'rb') as f:
        return f.read()


def parse_preload(entries):
    """
    Parses IRI=FILE preload arguments.

    :param entries: list of 'IRI=FILE' strings
    :returns: preload table
    :rtype: dict
    """
    table = {}
    for entry in entries or []:
        iri, sep, path = entry.partition('=')
        if not sep or not iri or not path:
            raise ValueError('Preload must be given as IRI=FILE: %s' % entry)
        table[iri] = path
    return table


def main(*argv):
    import argparse

    prs = argparse.ArgumentParser(prog='ldbridge')

    prs.add_argument('--translate',
                     help='TASK: Translate a JSON-LD document to N-Quads',
                     dest='translate',
                     action='store')
    prs.add_argument('--patch',
                     help=('TASK: Translate a JSON Merge Patch to '
                           'SPARQL Update'),
                     dest='patch',
                     action='store')
    prs.add_argument('--compact',
                     help='TASK: Compact expanded JSON-LD',
                     dest='compact',
                     action='store')

    prs.add_argument('--context',
                     help=('Default context IRI [default: compaction.uri '
                           'setting]'),
                     dest='context',
                     action='store')
    prs.add_argument('--preload',
                     help='Serve context IRI from FILE (IRI=FILE)',
                     dest='preload',
                     action='append')
    prs.add_argument('--strict',
                     help='Reject attributes not defined in the context',
                     dest='strict',
                     action='store_true',
                     default=None)
    prs.add_argument('--persist-context',
                     help='Persist and use persisted contexts',
                     dest='persist_context',
                     action='store_true',
                     default=None)
    prs.add_argument('--limit-compaction',
                     help='Drop compacted attributes not in the context',
                     dest='limit_compaction',
                     action='store_true',
                     default=None)
    prs.add_argument('--offline',
                     help='Never fetch contexts that were not preloaded',
                     dest='offline',
                     action='store_true')

    prs.add_argument('-v', '--verbose',
                     dest='verbose',
                     action='store_true',)
    prs.add_argument('-q', '--quiet',
                     dest='quiet',
                     action='store_true',)
    if not argv:
        _argv = sys.argv[1:]
    else:
        _argv = list(argv)
    opts = prs.parse_args(args=_argv)

    if not opts.quiet:
        logging.basicConfig()

        if opts.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    settings = Settings.load()
    overrides = {
        name: getattr(opts, name)
        for name in ('strict', 'persist_context', 'limit_compaction')
        if getattr(opts, name) is not None}
    if opts.context:
        overrides['default_context'] = opts.context
    try:
        preload = parse_preload(opts.preload)
    except ValueError as e:
        prs.error(str(e))
    if preload:
        overrides['preload'] = dict(settings.preload, **preload)
    settings = settings.model_copy(update=overrides)

    fallback = None if opts.offline else jsonld.requests_document_loader()
    engine = Engine(settings, fallback=fallback)

    try:
        if opts.translate:
            output = engine.translate(read_input(opts.translate))
        elif opts.patch:
            output = engine.to_sparql(read_input(opts.patch))
        elif opts.compact:
            output = engine.compact(read_input(opts.compact))
        else:
            prs.print_usage()
            return 0
    except BadRequest as e:
        log.debug('Bad request', exc_info=True)
        print('Bad request: %s' % e.message, file=sys.stderr)
        return 1
    except Fatal as e:
        log.debug('Internal error', exc_info=True)
        print('Internal error: %s' % e.message, file=sys.stderr)
        return 2
    except OSError as e:
        print('Could not read input: %s' % e, file=sys.stderr)
        return 2

    sys.stdout.write(output)
    if not output.endswith('\n'):
        sys.stdout.write('\n')
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]))
