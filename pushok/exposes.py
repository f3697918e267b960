#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#
'''
Capability declarations ("exposes") of a zigbee device

Each capability binds one user facing feature to a cluster/attribute pair.
The builders at the bottom of this module (on_off, battery, numeric, ...)
are the only way device definitions create them.
'''

import logging
import math
from types import MappingProxyType
from .clusters import get_cluster
from .const import (Access, ON, OFF, IAS_ZONE_TYPES, IAS_ZONE_BITS,
                    KIND_ON_OFF, KIND_BATTERY, KIND_ENUM, KIND_NUMERIC,
                    KIND_BINARY, KIND_HUMIDITY, KIND_TEMPERATURE,
                    KIND_ILLUMINANCE, KIND_IDENTIFY, KIND_OTA,
                    KIND_IAS_ZONE_ALARM)

LOGGER = logging.getLogger('pushok')

# default reporting used by measurement builders when none is given
DEFAULT_REPORTING = {'min': 10, 'max': 3600, 'change': 100}


class ExposeError(ValueError):
    pass


class AccessError(ExposeError):
    pass


def _check_reporting(reporting):
    if reporting is None:
        return None
    if not isinstance(reporting, dict) or set(reporting) != {'min', 'max', 'change'}:
        raise ExposeError('Reporting must be None or a dict with min, max and change, '
                          'got {!r}'.format(reporting))
    if reporting['min'] > reporting['max']:
        raise ExposeError('Reporting min interval {min} greater than max {max}'.format(**reporting))
    return MappingProxyType(dict(reporting))


class Expose(object):
    kind = None

    def __init__(self, name, cluster, attribute, access=Access.STATE_GET,
                 description='', unit=None, reporting=None):
        cls_cluster = get_cluster(cluster)
        self.name = name
        self.cluster = cls_cluster.name
        self.cluster_id = cls_cluster.cluster_id
        self.attribute = attribute
        self.attribute_id = cls_cluster.get_attribute_id(attribute)
        try:
            self.access = Access(access)
        except ValueError:
            raise ExposeError('Unknown access {!r}'.format(access))
        self.description = description
        self.unit = unit
        self.reporting = _check_reporting(reporting)

    def __str__(self):
        return '{} {} ({}.{})'.format(self.kind, self.name or '', self.cluster, self.attribute)

    def __repr__(self):
        return '<{}>'.format(self.__str__())

    @property
    def writable(self):
        return self.access == Access.ALL

    def bindings(self):
        '''
        return list of (cluster, attribute, access) used by this capability
        '''
        return [(self.cluster, self.attribute, self.access)]

    def to_json(self):
        data = {'type': self.kind,
                'name': self.name,
                'cluster': self.cluster,
                'cluster_id': self.cluster_id,
                'attribute': self.attribute,
                'attribute_id': self.attribute_id,
                'access': self.access.value,
                'description': self.description,
                'reporting': None if self.reporting is None else dict(self.reporting),
                }
        if self.unit is not None:
            data['unit'] = self.unit
        return data

    def decode(self, data):
        '''
        convert raw attribute value to state value,
        return None if value cannot be converted
        '''
        if data is None:
            return None
        try:
            return self._decode(data)
        except (ValueError, TypeError, KeyError):
            LOGGER.warning('Failed to decode {!r} for {}'.format(data, self))
            return None

    def _decode(self, data):
        return data

    def encode(self, value):
        '''
        convert state value to raw attribute value for a write
        '''
        if not self.writable:
            raise AccessError('{} is read only'.format(self))
        return self._encode(value)

    def _encode(self, value):
        return value


class OnOff(Expose):
    kind = KIND_ON_OFF

    def __init__(self, power_on_behavior=True, configure_reporting=True,
                 description='On/off state of the switch'):
        Expose.__init__(self, 'state', 'genOnOff', 'onOff', Access.ALL, description)
        self.power_on_behavior = power_on_behavior
        self.configure_reporting = configure_reporting

    def bindings(self):
        bindings = Expose.bindings(self)
        if self.power_on_behavior:
            bindings.append((self.cluster, 'startUpOnOff', Access.ALL))
        return bindings

    def to_json(self):
        data = Expose.to_json(self)
        data['value_on'] = ON
        data['value_off'] = OFF
        data['power_on_behavior'] = self.power_on_behavior
        data['configure_reporting'] = self.configure_reporting
        return data

    def _decode(self, data):
        return ON if data else OFF

    def _encode(self, value):
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, str) and value.upper() in (ON, OFF):
            return int(value.upper() == ON)
        raise ExposeError('Invalid state {!r}, expected ON or OFF'.format(value))


class Battery(Expose):
    '''
    Battery of the device, exposes up to three properties:
    battery (%), voltage (mV) and battery_low
    '''
    kind = KIND_BATTERY
    ATTRIBUTES = (('percentage', 'batteryPercentageRemaining', 'battery'),
                  ('voltage', 'batteryVoltage', 'voltage'),
                  ('low_status', 'batteryAlarmState', 'battery_low'))
    # battery source 1, 2 and 3 alarm bits of batteryAlarmState
    LOW_STATUS_MASK = 0x00f03c0f

    def __init__(self, percentage=True, voltage=False, low_status=False,
                 percentage_reporting=True, voltage_reporting=False):
        self.percentage = percentage
        self.voltage = voltage
        self.low_status = low_status
        attributes = self._enabled()
        if not attributes:
            raise ExposeError('Battery needs at least one of percentage, voltage or low_status')
        Expose.__init__(self, None, 'genPowerCfg', attributes[0][0],
                        description='Remaining battery')
        self.percentage_reporting = percentage_reporting
        self.voltage_reporting = voltage_reporting

    def _enabled(self):
        return [(attribute, prop) for flag, attribute, prop in self.ATTRIBUTES
                if getattr(self, flag)]

    def bindings(self):
        return [(self.cluster, attribute, self.access) for attribute, _ in self._enabled()]

    def to_json(self):
        data = Expose.to_json(self)
        data['properties'] = [prop for _, prop in self._enabled()]
        for flag in ('percentage', 'voltage', 'low_status',
                     'percentage_reporting', 'voltage_reporting'):
            data[flag] = getattr(self, flag)
        return data

    def decode(self, data):
        '''
        data is a dict attribute name: raw value, as read from genPowerCfg
        '''
        state = {}
        if data is None:
            return state
        if not isinstance(data, dict):
            LOGGER.warning('Failed to decode {!r} for {}'.format(data, self))
            return state
        for attribute, prop in self._enabled():
            raw = data.get(attribute)
            if raw is None:
                continue
            try:
                state[prop] = self._decode_attribute(attribute, raw)
            except (ValueError, TypeError, KeyError):
                LOGGER.warning('Failed to decode {} {!r} for {}'.format(attribute, raw, self))
                state[prop] = None
        return state

    def _decode_attribute(self, attribute, raw):
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError('not an integer')
        if attribute == 'batteryPercentageRemaining':
            # half percent unit, 0xff is invalid
            return None if raw == 0xff else min(100, round(raw / 2))
        elif attribute == 'batteryVoltage':
            # 100 mV unit
            return None if raw == 0xff else raw * 100
        return bool(raw & self.LOW_STATUS_MASK)


class EnumLookup(Expose):
    kind = KIND_ENUM

    def __init__(self, name, lookup, cluster, attribute, access=Access.STATE_GET,
                 description='', reporting=None, zigbee_command_options=None):
        Expose.__init__(self, name, cluster, attribute, access, description,
                        reporting=reporting)
        if not lookup:
            raise ExposeError('Enum {} has an empty lookup'.format(name))
        codes = list(lookup.values())
        if len(set(codes)) != len(codes):
            raise ExposeError('Enum {} has duplicated codes {}'.format(name, codes))
        self.lookup = MappingProxyType(dict(lookup))
        self._reverse = {code: key for key, code in self.lookup.items()}
        self.zigbee_command_options = MappingProxyType(dict(zigbee_command_options or {}))

    @property
    def values(self):
        return list(self.lookup)

    def to_json(self):
        data = Expose.to_json(self)
        data['values'] = self.values
        data['lookup'] = dict(self.lookup)
        return data

    def _decode(self, data):
        return self._reverse[data]

    def _encode(self, value):
        if value not in self.lookup:
            raise ExposeError('Invalid value {!r} for {}, expected one of {}'.format(value,
                                                                                    self.name,
                                                                                    self.values))
        return self.lookup[value]


class Numeric(Expose):
    kind = KIND_NUMERIC

    def __init__(self, name, cluster, attribute, access=Access.STATE_GET,
                 description='', unit=None, value_min=None, value_max=None,
                 value_step=None, precision=None, reporting=None):
        Expose.__init__(self, name, cluster, attribute, access, description,
                        unit, reporting)
        if value_min is not None and value_max is not None and value_min > value_max:
            raise ExposeError('Numeric {}: value_min {} greater than value_max {}'.format(name,
                                                                                        value_min,
                                                                                        value_max))
        if value_step is not None and value_step <= 0:
            raise ExposeError('Numeric {}: value_step must be positive, got {}'.format(name,
                                                                                     value_step))
        if precision is not None and (not isinstance(precision, int) or precision < 0):
            raise ExposeError('Numeric {}: invalid precision {!r}'.format(name, precision))
        self.value_min = value_min
        self.value_max = value_max
        self.value_step = value_step
        self.precision = precision

    def to_json(self):
        data = Expose.to_json(self)
        for key in ('value_min', 'value_max', 'value_step', 'precision'):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def _decode(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise TypeError('not a number')
        if self.precision is not None:
            return round(data, self.precision)
        return data

    def _encode(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ExposeError('Invalid value {!r} for {}, expected a number'.format(value, self.name))
        if self.value_min is not None and value < self.value_min:
            raise ExposeError('{} below minimum {} for {}'.format(value, self.value_min, self.name))
        if self.value_max is not None and value > self.value_max:
            raise ExposeError('{} above maximum {} for {}'.format(value, self.value_max, self.name))
        if self.value_step is not None:
            base = self.value_min or 0
            steps = (value - base) / self.value_step
            if not math.isclose(steps, round(steps), abs_tol=1e-6):
                raise ExposeError('{} is not a multiple of step {} for {}'.format(value,
                                                                                  self.value_step,
                                                                                  self.name))
        return value


class Binary(Expose):
    kind = KIND_BINARY

    def __init__(self, name, value_on, value_off, cluster, attribute,
                 access=Access.STATE_GET, description='', reporting=None):
        Expose.__init__(self, name, cluster, attribute, access, description,
                        reporting=reporting)
        value_on = tuple(value_on)
        value_off = tuple(value_off)
        if len(value_on) != 2 or len(value_off) != 2:
            raise ExposeError('Binary {}: value_on and value_off must be (label, code)'.format(name))
        if value_on[0] == value_off[0] or value_on[1] == value_off[1]:
            raise ExposeError('Binary {}: on {} and off {} must differ'.format(name,
                                                                             value_on,
                                                                             value_off))
        self.value_on = value_on
        self.value_off = value_off

    def to_json(self):
        data = Expose.to_json(self)
        data['value_on'] = self.value_on[0]
        data['value_off'] = self.value_off[0]
        return data

    def _decode(self, data):
        # presentValue of binary clusters may be reported as bool
        if data == self.value_on[1]:
            return self.value_on[0]
        if data == self.value_off[1]:
            return self.value_off[0]
        raise ValueError(data)

    def _encode(self, value):
        if value == self.value_on[0]:
            return self.value_on[1]
        if value == self.value_off[0]:
            return self.value_off[1]
        raise ExposeError('Invalid value {!r} for {}, expected {} or {}'.format(value,
                                                                               self.name,
                                                                               self.value_on[0],
                                                                               self.value_off[0]))


class Measurement(Expose):
    measure_cluster = None
    divisor = 100.
    default_unit = None
    default_description = ''
    # value sent by the device when measure is not available
    invalid = None

    def __init__(self, reporting=DEFAULT_REPORTING, description=None, unit=None):
        Expose.__init__(self, self.kind, self.measure_cluster, 'measuredValue',
                        Access.STATE_GET, description or self.default_description,
                        unit or self.default_unit, reporting)

    def _decode(self, data):
        if data == self.invalid:
            return None
        return round(data / self.divisor, 2)


class Humidity(Measurement):
    kind = KIND_HUMIDITY
    measure_cluster = 'msRelativeHumidity'
    default_unit = '%'
    default_description = 'Measured relative humidity'
    invalid = 0xffff


class Temperature(Measurement):
    kind = KIND_TEMPERATURE
    measure_cluster = 'msTemperatureMeasurement'
    default_unit = '°C'
    default_description = 'Measured temperature value'
    invalid = -0x8000


class Illuminance(Measurement):
    kind = KIND_ILLUMINANCE
    measure_cluster = 'msIlluminanceMeasurement'
    default_unit = 'lx'
    default_description = 'Measured illuminance'
    invalid = 0xffff

    def _decode(self, data):
        if data == self.invalid:
            return None
        if data == 0:
            return 0
        # measuredValue = 10000 x log10(lux) + 1
        return round(10 ** ((data - 1) / 10000.))


class Identify(Expose):
    kind = KIND_IDENTIFY

    def __init__(self, is_sleepy=False):
        Expose.__init__(self, None, 'genIdentify', 'identifyTime', Access.ALL,
                        'Initiate device identification')
        self.is_sleepy = is_sleepy

    def to_json(self):
        data = Expose.to_json(self)
        data['is_sleepy'] = self.is_sleepy
        return data

    def _encode(self, value):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xffff:
            raise ExposeError('Invalid identify time {!r}'.format(value))
        return value


class OTA(Expose):
    kind = KIND_OTA

    def __init__(self):
        Expose.__init__(self, None, 'genOta', 'currentFileVersion', Access.STATE_GET,
                        'Installed firmware version')

    def _decode(self, data):
        return int(data)


class IasZoneAlarm(Expose):
    kind = KIND_IAS_ZONE_ALARM

    def __init__(self, zone_type, zone_attributes, alarm_timeout=False,
                 description='IAS zone status'):
        if zone_type not in IAS_ZONE_TYPES:
            raise ExposeError('Unknown zone type {!r}'.format(zone_type))
        unknown = [a for a in zone_attributes if a not in IAS_ZONE_BITS]
        if unknown:
            raise ExposeError('Unknown zone attributes {}'.format(unknown))
        name = 'alarm' if zone_type == 'generic' else zone_type
        Expose.__init__(self, name, 'ssIasZone', 'zoneStatus', Access.STATE_GET,
                        description)
        self.zone_type = zone_type
        self.zone_attributes = tuple(zone_attributes)
        self.alarm_timeout = alarm_timeout

    def to_json(self):
        data = Expose.to_json(self)
        data['zone_type'] = self.zone_type
        data['zone_attributes'] = list(self.zone_attributes)
        data['alarm_timeout'] = self.alarm_timeout
        return data

    def _decode(self, data):
        '''
        data is the 16 bits zone status bitmap
        '''
        zone_status = int(data)
        state = {self.name: bool(zone_status & 0x03)}
        for attribute in self.zone_attributes:
            state[attribute] = bool(zone_status & (1 << IAS_ZONE_BITS.index(attribute)))
        return state


def on_off(power_on_behavior=True, configure_reporting=True, **kwargs):
    return OnOff(power_on_behavior=power_on_behavior,
                 configure_reporting=configure_reporting, **kwargs)


def battery(percentage=True, voltage=False, low_status=False,
            percentage_reporting=True, voltage_reporting=False):
    return Battery(percentage=percentage, voltage=voltage, low_status=low_status,
                   percentage_reporting=percentage_reporting,
                   voltage_reporting=voltage_reporting)


def enum_lookup(**kwargs):
    return EnumLookup(**kwargs)


def numeric(**kwargs):
    return Numeric(**kwargs)


def binary(**kwargs):
    return Binary(**kwargs)


def humidity(**kwargs):
    return Humidity(**kwargs)


def temperature(**kwargs):
    return Temperature(**kwargs)


def illuminance(**kwargs):
    return Illuminance(**kwargs)


def identify(is_sleepy=False):
    return Identify(is_sleepy=is_sleepy)


def ota():
    return OTA()


def ias_zone_alarm(zone_type, zone_attributes, alarm_timeout=False):
    return IasZoneAlarm(zone_type, zone_attributes, alarm_timeout)
