#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#
from enum import Enum

VENDOR = 'PushOk Hardware'


class Access(Enum):
    STATE_GET = 'STATE_GET'  # read-only state
    ALL = 'ALL'  # read and write


ON = 'ON'
OFF = 'OFF'

# capability kinds
KIND_ON_OFF = 'on_off'
KIND_BATTERY = 'battery'
KIND_ENUM = 'enum'
KIND_NUMERIC = 'numeric'
KIND_BINARY = 'binary'
KIND_HUMIDITY = 'humidity'
KIND_TEMPERATURE = 'temperature'
KIND_ILLUMINANCE = 'illuminance'
KIND_IDENTIFY = 'identify'
KIND_OTA = 'ota'
KIND_IAS_ZONE_ALARM = 'ias_zone_alarm'

IAS_ZONE_TYPES = ('generic', 'occupancy', 'contact', 'smoke', 'water_leak',
                  'carbon_monoxide', 'sos', 'vibration', 'alarm', 'gas')

# zone status bitmap, bit index in ZCL order
IAS_ZONE_BITS = ('alarm_1',
                 'alarm_2',
                 'tamper',
                 'battery_low',
                 'supervision_reports',
                 'restore_reports',
                 'trouble',
                 'ac_status',
                 'test',
                 'battery_defect'
                 )

ADMINPANEL_PORT = 9998
ADMINPANEL_HOST = "0.0.0.0"
