#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#

import logging
import json
from enum import Enum
from .const import Access, VENDOR
from .exposes import (Expose, battery, binary, enum_lookup, humidity,
                      ias_zone_alarm, identify, illuminance, numeric, on_off,
                      ota, temperature)

LOGGER = logging.getLogger('pushok')


class DefinitionError(Exception):
    pass


def valve_status(**kwargs):
    '''
    Actual valve status, shared by valves using the same motor board
    '''
    options = {'name': 'status',
               'lookup': {'OFF': 0, 'ON': 1, 'MOVING': 2, 'STUCK': 3},
               'cluster': 'genMultistateInput',
               'attribute': 'presentValue',
               'zigbee_command_options': {},
               'description': 'Actual valve status',
               'access': Access.STATE_GET,
               'reporting': None,
               }
    options.update(kwargs)
    return enum_lookup(**options)


def stall_time(**kwargs):
    '''
    Timeout for valve state transition
    '''
    options = {'name': 'stall_time',
               'cluster': 'genMultistateValue',
               'attribute': 'presentValue',
               'description': 'Timeout for state transition',
               'unit': 's',
               'access': Access.ALL,
               'value_min': 0,
               'value_max': 60,
               'value_step': 1,
               'reporting': None,
               }
    options.update(kwargs)
    return numeric(**options)


class DeviceDescriptor(object):
    def __init__(self, zigbee_model, model, description, extend, vendor=VENDOR):
        if isinstance(zigbee_model, str):
            zigbee_model = [zigbee_model]
        self.model_identifiers = frozenset(zigbee_model)
        if not self.model_identifiers:
            raise DefinitionError('Device {} has no model identifier'.format(model))
        self.model = model
        self.vendor = vendor
        self.description = description
        self.capabilities = tuple(extend)
        for capability in self.capabilities:
            if not isinstance(capability, Expose):
                raise DefinitionError('Device {}: {!r} is not a capability'.format(model, capability))
        self._check_bindings()

    def _check_bindings(self):
        bindings = {}
        for capability in self.capabilities:
            for cluster, attribute, access in capability.bindings():
                previous = bindings.setdefault((cluster, attribute), access)
                if previous != access:
                    raise DefinitionError('Device {}: {}.{} bound as {} and {}'.format(self.model,
                                                                                     cluster,
                                                                                     attribute,
                                                                                     previous.value,
                                                                                     access.value))

    def __str__(self):
        return '{} {} ({})'.format(self.vendor, self.model, self.description)

    def __repr__(self):
        return '<{}>'.format(self.__str__())

    def get_capability(self, name):
        '''
        return capability matching name, unnamed capabilities (battery, ota,
        identify) are only reachable with get_capabilities(kind)
        '''
        if name is None:
            return None
        for capability in self.capabilities:
            if capability.name == name:
                return capability

    def get_capabilities(self, kind):
        return [capability for capability in self.capabilities if capability.kind == kind]

    def has_capability(self, name):
        return self.get_capability(name) is not None

    def to_json(self):
        return {'zigbee_model': sorted(self.model_identifiers),
                'model': self.model,
                'vendor': self.vendor,
                'description': self.description,
                'exposes': [capability.to_json() for capability in self.capabilities]
                }


class Registry(object):
    '''
    Read only table of device descriptors, indexed by model identifier
    '''
    def __init__(self, definitions):
        self._definitions = tuple(definitions)
        self._by_identifier = {}
        models = set()
        for definition in self._definitions:
            if definition.model in models:
                raise DefinitionError('Duplicated model {}'.format(definition.model))
            models.add(definition.model)
            for identifier in definition.model_identifiers:
                if identifier in self._by_identifier:
                    raise DefinitionError('Model identifier {} claimed by {} and {}'.format(
                        identifier, self._by_identifier[identifier].model, definition.model))
                self._by_identifier[identifier] = definition
        LOGGER.debug('Registry loaded with {} definitions'.format(len(self._definitions)))

    def lookup(self, model_identifier):
        '''
        return descriptor claiming model_identifier or None
        '''
        definition = None
        if isinstance(model_identifier, str):
            definition = self._by_identifier.get(model_identifier)
        if definition is None:
            LOGGER.debug('No definition found for {}'.format(model_identifier))
        return definition

    def identifiers(self):
        return sorted(self._by_identifier)

    def __iter__(self):
        return iter(self._definitions)

    def __len__(self):
        return len(self._definitions)

    def __contains__(self, model_identifier):
        return isinstance(model_identifier, str) and model_identifier in self._by_identifier

    def to_json(self):
        return [definition.to_json() for definition in self._definitions]


class DeviceEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, (DeviceDescriptor, Expose, Registry)):
            return obj.to_json()
        elif isinstance(obj, Enum):
            return obj.value
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj)
        elif isinstance(obj, type):
            return obj.__name__
        return json.JSONEncoder.default(self, obj)


DEFINITIONS = (
    DeviceDescriptor(
        zigbee_model=['POK001'],
        model='POK001',
        description='Battery powered retrofit valve',
        extend=[
            on_off(power_on_behavior=False, configure_reporting=False),
            battery(percentage=True, voltage=True, low_status=True, percentage_reporting=False),
            valve_status(),
            identify(is_sleepy=True),
            enum_lookup(name='kamikaze',
                        lookup={'OFF': 0, 'ON': 1},
                        cluster='genBinaryValue',
                        attribute='presentValue',
                        zigbee_command_options={},
                        description='Allow operation on low battery (can destroy battery)',
                        access=Access.ALL,
                        reporting=None),
            stall_time(),
            enum_lookup(name='battery_type',
                        lookup={'LIION': 0, 'ALKALINE': 1, 'NIMH': 2},
                        cluster='genMultistateOutput',
                        attribute='presentValue',
                        zigbee_command_options={},
                        description='Battery type',
                        access=Access.ALL,
                        reporting=None),
            numeric(name='end_lag',
                    cluster='genAnalogValue',
                    attribute='presentValue',
                    description='Endstop lag angle (wrong value can cause damage)',
                    unit='°',
                    access=Access.ALL,
                    value_min=0,
                    value_max=15,
                    value_step=1,
                    reporting=None),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK002', 'POK007'],
        model='POK002_POK007',
        description='Soil moisture and temperature sensor',
        extend=[
            humidity(reporting=None),
            temperature(reporting=None),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK003'],
        model='POK003',
        description='Water level and temperature sensor',
        extend=[
            binary(name='contact',
                   value_on=('ON', 0x01),
                   value_off=('OFF', 0x00),
                   cluster='genBinaryInput',
                   attribute='presentValue',
                   description='Indicates if the contact is closed (= true) or open (= false)',
                   access=Access.STATE_GET,
                   reporting=None),
            temperature(reporting=None),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK004'],
        model='POK004',
        description='Solar powered zigbee router and illuminance sensor',
        extend=[
            illuminance(reporting=None),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK005'],
        model='POK005',
        description='Temperature and Humidity sensor',
        extend=[
            humidity(reporting=None),
            temperature(reporting=None),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK006'],
        model='POK006',
        description='Battery powered garden valve',
        extend=[
            on_off(power_on_behavior=False, configure_reporting=False),
            battery(percentage=True, voltage=True, low_status=True, percentage_reporting=False),
            valve_status(),
            identify(is_sleepy=True),
            stall_time(),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK008'],
        model='POK008',
        description='Battery powered thermostat relay',
        extend=[
            on_off(power_on_behavior=False, configure_reporting=False),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            temperature(reporting=None),
            numeric(name='tgt_temperature',
                    cluster='genAnalogOutput',
                    attribute='presentValue',
                    description='Target temperature',
                    unit='C',
                    access=Access.ALL,
                    value_min=-45,
                    value_max=125,
                    value_step=1,
                    reporting=None),
            numeric(name='hysteresis',
                    cluster='genAnalogValue',
                    attribute='presentValue',
                    description='Temperature hysteresis',
                    unit='C',
                    access=Access.ALL,
                    value_min=0.1,
                    value_max=40,
                    value_step=0.1,
                    reporting=None),
            enum_lookup(name='set_op_mode',
                        lookup={'Monitor': 0, 'Heater': 1, 'Cooler': 2},
                        cluster='genMultistateOutput',
                        attribute='presentValue',
                        zigbee_command_options={},
                        description='Operation mode',
                        access=Access.ALL,
                        reporting=None),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK009'],
        model='POK009',
        description='Voltage monitor',
        extend=[
            numeric(name='ext_voltage',
                    cluster='genAnalogInput',
                    attribute='presentValue',
                    description='Mains voltage',
                    unit='V',
                    precision=1,
                    access=Access.STATE_GET,
                    reporting=None),
            binary(name='comp_state',
                   value_on=('NORMAL', 0x01),
                   value_off=('LOW', 0x00),
                   cluster='genBinaryInput',
                   attribute='presentValue',
                   description='Voltage status',
                   access=Access.STATE_GET,
                   reporting=None),
            numeric(name='tgt_voltage',
                    cluster='genMultistateValue',
                    attribute='presentValue',
                    description='Voltage threshold',
                    unit='V',
                    access=Access.ALL,
                    value_min=4,
                    value_max=340,
                    value_step=1,
                    reporting=None),
            enum_lookup(name='voltage_type',
                        lookup={'AC': 0, 'DC': 1},
                        cluster='genMultistateOutput',
                        attribute='presentValue',
                        zigbee_command_options={},
                        description='Mode',
                        access=Access.ALL,
                        reporting=None),
            identify(is_sleepy=True),
            battery(percentage=True, voltage=True, low_status=True, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK010'],
        model='POK010',
        description='Water level and temperature sensor',
        extend=[
            binary(name='contact',
                   value_on=('ON', 0x01),
                   value_off=('OFF', 0x00),
                   cluster='genBinaryInput',
                   attribute='presentValue',
                   description='Indicates if the contact is closed (= true) or open (= false)',
                   access=Access.STATE_GET,
                   reporting=None),
            temperature(reporting=None),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK011'],
        model='POK011',
        description='Illuminance sensor',
        extend=[
            illuminance(reporting=None),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
    DeviceDescriptor(
        zigbee_model=['POK012'],
        model='POK012',
        description='20 dBm Zigbee router with battery backup for indoor/outdoor use',
        extend=[
            enum_lookup(name='battery_state',
                        lookup={'missing': 0, 'charging': 1, 'full': 2, 'discharging': 3},
                        cluster='genMultistateInput',
                        attribute='presentValue',
                        zigbee_command_options={},
                        description='Battery state',
                        access=Access.STATE_GET,
                        reporting=None),
            ias_zone_alarm(zone_type='generic',
                           zone_attributes=['ac_status', 'battery_defect'],
                           alarm_timeout=False),
            battery(percentage=True, voltage=True, low_status=False, percentage_reporting=False),
            ota(),
        ]),
)

REGISTRY = Registry(DEFINITIONS)


def lookup_device(model_identifier):
    '''
    return device descriptor for model identifier reported by the device
    (genBasic modelId) or None if no descriptor claims it
    '''
    return REGISTRY.lookup(model_identifier)
