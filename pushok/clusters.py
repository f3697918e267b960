#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#

CLUSTERS = {}
CLUSTERS_BY_NAME = {}


class UnknownClusterError(KeyError):
    pass


class UnknownAttributeError(KeyError):
    pass


def register_cluster(o):
    CLUSTERS[o.cluster_id] = o
    CLUSTERS_BY_NAME[o.name] = o
    return o


def get_cluster(cluster):
    '''
    return cluster class from its name (eg genOnOff) or its id (eg 0x0006)
    '''
    if isinstance(cluster, str):
        cls_cluster = CLUSTERS_BY_NAME.get(cluster)
    else:
        cls_cluster = CLUSTERS.get(cluster)
    if cls_cluster is None:
        raise UnknownClusterError('Unknown cluster {!r}'.format(cluster))
    return cls_cluster


class Cluster(object):
    cluster_id = None
    name = None
    type = 'Unknown cluster'
    attributes_def = {}

    @classmethod
    def get_attribute_id(cls, name):
        '''
        return attribute id matching name
        '''
        for attribute_id, attribute in cls.attributes_def.items():
            if attribute['name'] == name:
                return attribute_id
        raise UnknownAttributeError('Cluster {} has no attribute {!r}'.format(cls.name, name))

    @classmethod
    def get_attribute(cls, attribute_id):
        return cls.attributes_def.get(attribute_id, {})

    @classmethod
    def has_attribute(cls, name):
        return any(attribute['name'] == name for attribute in cls.attributes_def.values())

    @classmethod
    def to_json(cls):
        return {'cluster': cls.cluster_id,
                'name': cls.name,
                'attributes': [dict(attribute, attribute=attribute_id)
                               for attribute_id, attribute in sorted(cls.attributes_def.items())]
                }


@register_cluster
class C0000(Cluster):
    cluster_id = 0x0000
    name = 'genBasic'
    type = 'General: Basic'
    attributes_def = {0x0000: {'name': 'zclVersion', 'type': int},
                      0x0001: {'name': 'appVersion', 'type': int},
                      0x0002: {'name': 'stackVersion', 'type': int},
                      0x0003: {'name': 'hwVersion', 'type': int},
                      0x0004: {'name': 'manufacturerName', 'type': str},
                      0x0005: {'name': 'modelId', 'type': str},
                      0x0006: {'name': 'dateCode', 'type': str},
                      0x0007: {'name': 'powerSource', 'type': int},
                      0x4000: {'name': 'swBuildId', 'type': str},
                      }


@register_cluster
class C0001(Cluster):
    cluster_id = 0x0001
    name = 'genPowerCfg'
    type = 'General: Power Config'
    attributes_def = {0x0000: {'name': 'mainsVoltage', 'type': int},
                      0x0020: {'name': 'batteryVoltage', 'type': int},
                      0x0021: {'name': 'batteryPercentageRemaining', 'type': int},
                      0x0031: {'name': 'batterySize', 'type': int},
                      0x0033: {'name': 'batteryQuantity', 'type': int},
                      0x0035: {'name': 'batteryAlarmMask', 'type': int},
                      0x003e: {'name': 'batteryAlarmState', 'type': int},
                      }


@register_cluster
class C0003(Cluster):
    cluster_id = 0x0003
    name = 'genIdentify'
    type = 'General: Identify'
    attributes_def = {0x0000: {'name': 'identifyTime', 'type': int},
                      }


@register_cluster
class C0006(Cluster):
    cluster_id = 0x0006
    name = 'genOnOff'
    type = 'General: On/Off'
    attributes_def = {0x0000: {'name': 'onOff', 'type': bool},
                      0x4003: {'name': 'startUpOnOff', 'type': int},
                      }


# analog, binary and multistate clusters share the BACnet style layout
_ANALOG = {0x001c: {'name': 'description', 'type': str},
           0x0041: {'name': 'maxPresentValue', 'type': float},
           0x0045: {'name': 'minPresentValue', 'type': float},
           0x0051: {'name': 'outOfService', 'type': bool},
           0x0055: {'name': 'presentValue', 'type': float},
           0x0067: {'name': 'reliability', 'type': int},
           0x006a: {'name': 'resolution', 'type': float},
           0x006f: {'name': 'statusFlags', 'type': int},
           0x0075: {'name': 'engineeringUnits', 'type': int},
           0x0100: {'name': 'applicationType', 'type': int},
           }

_BINARY = {0x0004: {'name': 'activeText', 'type': str},
           0x001c: {'name': 'description', 'type': str},
           0x002e: {'name': 'inactiveText', 'type': str},
           0x0051: {'name': 'outOfService', 'type': bool},
           0x0054: {'name': 'polarity', 'type': int},
           0x0055: {'name': 'presentValue', 'type': bool},
           0x0067: {'name': 'reliability', 'type': int},
           0x006f: {'name': 'statusFlags', 'type': int},
           0x0100: {'name': 'applicationType', 'type': int},
           }

_MULTISTATE = {0x000e: {'name': 'stateText', 'type': list},
               0x001c: {'name': 'description', 'type': str},
               0x004a: {'name': 'numberOfStates', 'type': int},
               0x0051: {'name': 'outOfService', 'type': bool},
               0x0055: {'name': 'presentValue', 'type': int},
               0x0067: {'name': 'reliability', 'type': int},
               0x006f: {'name': 'statusFlags', 'type': int},
               0x0100: {'name': 'applicationType', 'type': int},
               }


@register_cluster
class C000C(Cluster):
    cluster_id = 0x000C
    name = 'genAnalogInput'
    type = 'Analog input'
    attributes_def = _ANALOG


@register_cluster
class C000D(Cluster):
    cluster_id = 0x000D
    name = 'genAnalogOutput'
    type = 'Analog output'
    attributes_def = _ANALOG


@register_cluster
class C000E(Cluster):
    cluster_id = 0x000E
    name = 'genAnalogValue'
    type = 'Analog value'
    attributes_def = _ANALOG


@register_cluster
class C000F(Cluster):
    cluster_id = 0x000F
    name = 'genBinaryInput'
    type = 'Binary Input (Basic)'
    attributes_def = _BINARY


@register_cluster
class C0010(Cluster):
    cluster_id = 0x0010
    name = 'genBinaryOutput'
    type = 'Binary Output (Basic)'
    attributes_def = _BINARY


@register_cluster
class C0011(Cluster):
    cluster_id = 0x0011
    name = 'genBinaryValue'
    type = 'Binary Value (Basic)'
    attributes_def = _BINARY


@register_cluster
class C0012(Cluster):
    cluster_id = 0x0012
    name = 'genMultistateInput'
    type = 'Multistate input'
    attributes_def = _MULTISTATE


@register_cluster
class C0013(Cluster):
    cluster_id = 0x0013
    name = 'genMultistateOutput'
    type = 'Multistate output'
    attributes_def = _MULTISTATE


@register_cluster
class C0014(Cluster):
    cluster_id = 0x0014
    name = 'genMultistateValue'
    type = 'Multistate value'
    attributes_def = _MULTISTATE


@register_cluster
class C0019(Cluster):
    cluster_id = 0x0019
    name = 'genOta'
    type = 'General: OTA'
    attributes_def = {0x0000: {'name': 'upgradeServerId', 'type': str},
                      0x0001: {'name': 'fileOffset', 'type': int},
                      0x0002: {'name': 'currentFileVersion', 'type': int},
                      0x0006: {'name': 'imageUpgradeStatus', 'type': int},
                      0x0007: {'name': 'manufacturerId', 'type': int},
                      0x0008: {'name': 'imageTypeId', 'type': int},
                      }


_MEASUREMENT = {0x0000: {'name': 'measuredValue', 'type': int},
                0x0001: {'name': 'minMeasuredValue', 'type': int},
                0x0002: {'name': 'maxMeasuredValue', 'type': int},
                0x0003: {'name': 'tolerance', 'type': int},
                }


@register_cluster
class C0400(Cluster):
    cluster_id = 0x0400
    name = 'msIlluminanceMeasurement'
    type = 'Measurement: Illuminance'
    attributes_def = _MEASUREMENT


@register_cluster
class C0402(Cluster):
    cluster_id = 0x0402
    name = 'msTemperatureMeasurement'
    type = 'Measurement: Temperature'
    attributes_def = _MEASUREMENT


@register_cluster
class C0405(Cluster):
    cluster_id = 0x0405
    name = 'msRelativeHumidity'
    type = 'Measurement: Humidity'
    attributes_def = _MEASUREMENT


@register_cluster
class C0500(Cluster):
    cluster_id = 0x0500
    name = 'ssIasZone'
    type = 'Security & Safety: IAS Zone'
    attributes_def = {0x0000: {'name': 'zoneState', 'type': int},
                      0x0001: {'name': 'zoneType', 'type': int},
                      0x0002: {'name': 'zoneStatus', 'type': int},
                      0x0010: {'name': 'iasCieAddr', 'type': str},
                      0x0011: {'name': 'zoneId', 'type': int},
                      }
# b16ZoneStatus is a 16-bit bitmap, one bit per notification trigger:
# 0 Alarm1, 1 Alarm2, 2 Tamper, 3 Battery low, 4 Supervision reports,
# 5 Restore reports, 6 Trouble, 7 AC (mains) fault, 8 Test mode,
# 9 Battery defect, 10-15 reserved
