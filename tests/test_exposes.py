'''
PushOk exposes Tests
-------------------------
'''

import unittest
from pushok import exposes
from pushok.const import Access


class TestBuilders(unittest.TestCase):
    def test_numeric_bounds(self):
        self.assertRaises(exposes.ExposeError, exposes.numeric,
                          name='n', cluster='genAnalogValue', attribute='presentValue',
                          value_min=10, value_max=1)
        self.assertRaises(exposes.ExposeError, exposes.numeric,
                          name='n', cluster='genAnalogValue', attribute='presentValue',
                          value_min=0, value_max=1, value_step=0)
        self.assertRaises(exposes.ExposeError, exposes.numeric,
                          name='n', cluster='genAnalogValue', attribute='presentValue',
                          precision=-1)
        n = exposes.numeric(name='n', cluster='genAnalogValue', attribute='presentValue',
                            value_min=5, value_max=5)
        self.assertEqual(n.value_min, n.value_max)

    def test_enum_duplicated_code(self):
        self.assertRaises(exposes.ExposeError, exposes.enum_lookup,
                          name='mode', lookup={'A': 0, 'B': 0},
                          cluster='genMultistateOutput', attribute='presentValue')
        self.assertRaises(exposes.ExposeError, exposes.enum_lookup,
                          name='mode', lookup={},
                          cluster='genMultistateOutput', attribute='presentValue')

    def test_binary_same_code(self):
        self.assertRaises(exposes.ExposeError, exposes.binary,
                          name='contact', value_on=('ON', 1), value_off=('OFF', 1),
                          cluster='genBinaryInput', attribute='presentValue')
        self.assertRaises(exposes.ExposeError, exposes.binary,
                          name='contact', value_on=('ON', 1), value_off=('ON', 0),
                          cluster='genBinaryInput', attribute='presentValue')
        self.assertRaises(exposes.ExposeError, exposes.binary,
                          name='contact', value_on=('ON',), value_off=('OFF', 0),
                          cluster='genBinaryInput', attribute='presentValue')

    def test_unknown_binding(self):
        self.assertRaises(KeyError, exposes.numeric,
                          name='n', cluster='genFoo', attribute='presentValue')
        self.assertRaises(KeyError, exposes.numeric,
                          name='n', cluster='genOnOff', attribute='presentValue')

    def test_access(self):
        e = exposes.enum_lookup(name='mode', lookup={'A': 0, 'B': 1},
                                cluster='genMultistateOutput', attribute='presentValue',
                                access='ALL')
        self.assertEqual(e.access, Access.ALL)
        self.assertTrue(e.writable)
        self.assertRaises(exposes.ExposeError, exposes.enum_lookup,
                          name='mode', lookup={'A': 0},
                          cluster='genMultistateOutput', attribute='presentValue',
                          access='WRITE')

    def test_reporting(self):
        self.assertEqual(exposes.temperature().reporting, exposes.DEFAULT_REPORTING)
        self.assertIsNone(exposes.temperature(reporting=None).reporting)
        self.assertRaises(exposes.ExposeError, exposes.humidity, reporting={'min': 10})
        self.assertRaises(exposes.ExposeError, exposes.humidity,
                          reporting={'min': 10, 'max': 1, 'change': 1})

    def test_battery(self):
        b = exposes.battery(percentage=True, voltage=True, low_status=False)
        self.assertIsNone(b.name)
        self.assertEqual(b.cluster, 'genPowerCfg')
        self.assertEqual(b.attribute, 'batteryPercentageRemaining')
        self.assertEqual(b.bindings(),
                         [('genPowerCfg', 'batteryPercentageRemaining', Access.STATE_GET),
                          ('genPowerCfg', 'batteryVoltage', Access.STATE_GET)])
        self.assertEqual(b.to_json()['properties'], ['battery', 'voltage'])
        b = exposes.battery(percentage=False, voltage=False, low_status=True)
        self.assertEqual(b.attribute, 'batteryAlarmState')
        self.assertRaises(exposes.ExposeError, exposes.battery,
                          percentage=False, voltage=False, low_status=False)

    def test_ias_zone_alarm(self):
        self.assertRaises(exposes.ExposeError, exposes.ias_zone_alarm, 'doorbell', [])
        self.assertRaises(exposes.ExposeError, exposes.ias_zone_alarm, 'generic', ['ac_fault'])
        z = exposes.ias_zone_alarm('contact', ['tamper'])
        self.assertEqual(z.name, 'contact')
        self.assertEqual(z.to_json()['zone_attributes'], ['tamper'])

    def test_on_off_json(self):
        o = exposes.on_off(power_on_behavior=False, configure_reporting=False)
        self.assertEqual(o.to_json(),
                         {'type': 'on_off', 'name': 'state', 'cluster': 'genOnOff',
                          'cluster_id': 6, 'attribute': 'onOff', 'attribute_id': 0,
                          'access': 'ALL', 'description': 'On/off state of the switch',
                          'reporting': None, 'value_on': 'ON', 'value_off': 'OFF',
                          'power_on_behavior': False, 'configure_reporting': False})
        self.assertEqual(len(o.bindings()), 1)
        self.assertEqual(len(exposes.on_off().bindings()), 2)


class TestConversion(unittest.TestCase):
    def setUp(self):
        self.status = exposes.enum_lookup(name='status',
                                          lookup={'OFF': 0, 'ON': 1, 'MOVING': 2, 'STUCK': 3},
                                          cluster='genMultistateInput',
                                          attribute='presentValue')
        self.hysteresis = exposes.numeric(name='hysteresis',
                                          cluster='genAnalogValue',
                                          attribute='presentValue',
                                          access=Access.ALL,
                                          value_min=0.1,
                                          value_max=40,
                                          value_step=0.1)

    def test_enum(self):
        self.assertEqual(self.status.decode(2), 'MOVING')
        self.assertIsNone(self.status.decode(None))
        with self.assertLogs('pushok', 'WARNING'):
            self.assertIsNone(self.status.decode(9))
        self.assertRaises(exposes.AccessError, self.status.encode, 'ON')
        mode = exposes.enum_lookup(name='mode', lookup={'AC': 0, 'DC': 1},
                                   cluster='genMultistateOutput', attribute='presentValue',
                                   access=Access.ALL)
        self.assertEqual(mode.encode('DC'), 1)
        self.assertRaises(exposes.ExposeError, mode.encode, 'DC2')

    def test_numeric(self):
        self.assertEqual(self.hysteresis.encode(0.3), 0.3)
        self.assertEqual(self.hysteresis.encode(40), 40)
        self.assertRaises(exposes.ExposeError, self.hysteresis.encode, 0.35)
        self.assertRaises(exposes.ExposeError, self.hysteresis.encode, 0)
        self.assertRaises(exposes.ExposeError, self.hysteresis.encode, 41)
        self.assertRaises(exposes.ExposeError, self.hysteresis.encode, '1')
        self.assertRaises(exposes.ExposeError, self.hysteresis.encode, True)
        voltage = exposes.numeric(name='ext_voltage', cluster='genAnalogInput',
                                  attribute='presentValue', unit='V', precision=1)
        self.assertEqual(voltage.decode(230.44), 230.4)
        self.assertEqual(voltage.to_json()['precision'], 1)
        self.assertNotIn('value_min', voltage.to_json())
        self.assertRaises(exposes.AccessError, voltage.encode, 230)
        with self.assertLogs('pushok', 'WARNING'):
            self.assertIsNone(voltage.decode('abc'))

    def test_binary(self):
        b = exposes.binary(name='comp_state', value_on=['NORMAL', 1], value_off=['LOW', 0],
                           cluster='genBinaryInput', attribute='presentValue',
                           access=Access.ALL)
        self.assertEqual(b.decode(True), 'NORMAL')
        self.assertEqual(b.decode(0), 'LOW')
        self.assertEqual(b.encode('LOW'), 0)
        self.assertRaises(exposes.ExposeError, b.encode, 'HIGH')

    def test_on_off(self):
        o = exposes.on_off()
        self.assertEqual(o.decode(True), 'ON')
        self.assertEqual(o.decode(0), 'OFF')
        self.assertEqual(o.encode('on'), 1)
        self.assertEqual(o.encode(False), 0)
        self.assertRaises(exposes.ExposeError, o.encode, 'TOGGLE')

    def test_measurements(self):
        self.assertEqual(exposes.temperature().decode(2150), 21.5)
        self.assertEqual(exposes.temperature().decode(-550), -5.5)
        self.assertIsNone(exposes.temperature().decode(-0x8000))
        self.assertEqual(exposes.humidity().decode(4567), 45.67)
        self.assertEqual(exposes.humidity().unit, '%')
        lux = exposes.illuminance()
        self.assertEqual(lux.decode(0), 0)
        self.assertEqual(lux.decode(1), 1)
        self.assertEqual(lux.decode(20001), 100)
        self.assertIsNone(lux.decode(0xffff))

    def test_battery(self):
        b = exposes.battery(percentage=True, voltage=True, low_status=True)
        self.assertEqual(b.decode({'batteryPercentageRemaining': 200,
                                   'batteryVoltage': 30,
                                   'batteryAlarmState': 1}),
                         {'battery': 100, 'voltage': 3000, 'battery_low': True})
        self.assertEqual(b.decode({'batteryPercentageRemaining': 101}), {'battery': 50})
        self.assertEqual(b.decode({'batteryAlarmState': 0x10}), {'battery_low': False})
        b = exposes.battery(percentage=True, voltage=True, low_status=False)
        self.assertEqual(b.decode({'batteryAlarmState': 1}), {})
        self.assertRaises(exposes.AccessError, b.encode, 50)

    def test_battery_bad_data(self):
        b = exposes.battery(percentage=True, voltage=True, low_status=False)
        self.assertEqual(b.decode(None), {})
        with self.assertLogs('pushok', 'WARNING'):
            self.assertEqual(b.decode({'batteryPercentageRemaining': 'x'}), {'battery': None})
        with self.assertLogs('pushok', 'WARNING'):
            self.assertEqual(b.decode({'batteryPercentageRemaining': 150, 'batteryVoltage': 2.5}),
                             {'battery': 75, 'voltage': None})
        with self.assertLogs('pushok', 'WARNING'):
            self.assertEqual(b.decode('abc'), {})
        with self.assertLogs('pushok', 'WARNING'):
            self.assertEqual(b.decode(42), {})

    def test_identify_ota(self):
        i = exposes.identify(is_sleepy=True)
        self.assertEqual(i.encode(3), 3)
        self.assertRaises(exposes.ExposeError, i.encode, -1)
        self.assertTrue(i.to_json()['is_sleepy'])
        o = exposes.ota()
        self.assertEqual(o.decode(0x01020304), 0x01020304)
        self.assertRaises(exposes.AccessError, o.encode, 1)

    def test_ias_zone(self):
        z = exposes.ias_zone_alarm('generic', ['ac_status', 'battery_defect'])
        self.assertEqual(z.decode(1 << 7),
                         {'alarm': False, 'ac_status': True, 'battery_defect': False})
        self.assertEqual(z.decode(0x0201),
                         {'alarm': True, 'ac_status': False, 'battery_defect': True})


if __name__ == '__main__':
    unittest.main()
