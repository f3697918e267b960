#!/usr/bin/env python3
#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#

"""
pushok, setuptools based setup module.
See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""

from setuptools import setup
from os import path

here = path.abspath(path.dirname(__file__))

# Get __version without load pushok module
main_ns = {}
version_path = path.join(here, 'pushok', 'version.py')
with open(version_path, encoding='utf-8') as version_file:
    exec(version_file.read(), main_ns)

# Get the long description from the README file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

requires = ['bottle']

# Setup part
setup(
    name='pushok',
    version=main_ns['__version__'],
    description='zigbee device definitions for PushOk Hardware devices',
    long_description=long_description,
    long_description_content_type='text/markdown',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
    ],

    keywords='pushok zigbee python3',
    packages=['pushok'],
    include_package_data=True,

    install_requires=requires,
    extras_require={
        'dev': ['tox'],
        'test': ['pytest'],
    },
    python_requires='>=3.5',
    entry_points={
        'console_scripts': ['pushok=pushok.__main__:main'],
    },
    test_suite='tests',
)
