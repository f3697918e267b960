#!/usr/bin/env python3
#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#

from .devices import (DeviceDescriptor, Registry, DefinitionError,
                      DEFINITIONS, REGISTRY, lookup_device)
from .exposes import ExposeError, AccessError
from .const import *  # noqa
from .version import __version__  # noqa

__all__ = ['DeviceDescriptor', 'Registry', 'DefinitionError',
           'DEFINITIONS', 'REGISTRY', 'lookup_device',
           'ExposeError', 'AccessError']
