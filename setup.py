# -*- coding: utf-8 -*-
"""
ldbridge
========

ldbridge_ translates JSON-LD to and from an RDF repository: JSON-LD to
N-Quads, JSON Merge Patch to SPARQL Update, and expanded JSON-LD to compact,
context-bound JSON-LD. The JSON-LD algorithms are provided by PyLD_.

.. _ldbridge: http://github.com/ldbridge/ldbridge
.. _PyLD: http://github.com/digitalbazaar/pyld
"""

from setuptools import setup
import os

# get meta data
about = {}
with open(os.path.join(
        os.path.dirname(__file__), 'lib', 'ldbridge', '__about__.py')) as fp:
    exec(fp.read(), about)

with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as fp:
    long_description = fp.read()

setup(
    name='ldbridge',
    version=about['__version__'],
    description='JSON-LD, JSON Merge Patch and compaction adapter for RDF '
                'repositories',
    long_description=long_description,
    long_description_content_type='text/x-rst',
    url='http://github.com/ldbridge/ldbridge',
    packages=['ldbridge', 'ldbridge.documentloader'],
    package_dir={'': 'lib'},
    license='Apache License, Version 2.0',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries',
    ],
    python_requires='>=3.9',
    install_requires=[
        'PyLD[requests]>=2.0.4,<3',
        'requests',
        'pydantic>=2',
        'pydantic-settings>=2.3',
    ],
    extras_require={
        'tests': ['pytest', 'rdflib>=6'],
    },
    entry_points={
        'console_scripts': ['ldbridge=ldbridge.cli:main'],
    },
)
