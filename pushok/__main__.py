#!/usr/bin/env python3
#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#
import logging
import argparse
import json
import sys
import time
from pushok.devices import REGISTRY, DeviceEncoder
from pushok.adminpanel import start_adminpanel
from pushok.const import ADMINPANEL_PORT, ADMINPANEL_HOST


def main(argv=None):
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(prog='pushok')
    parser.add_argument('-d', '--debug', help='Debug',
                        default=False, action='store_true')
    parser.add_argument('--model', help='Print definition of model identifier as json',
                        default=None)
    parser.add_argument('--admin_panel', help='Enable Admin panel', default=False, action='store_true')
    parser.add_argument('--admin_panel_port', help='Admin panel port', default=ADMINPANEL_PORT)
    parser.add_argument('--admin_panel_host', help='Admin panel host', default=ADMINPANEL_HOST)
    parser.add_argument('--admin_panel_mount', help='Admin panel url mount point', default=None)
    args = parser.parse_args(argv)
    if args.debug:
        logging.root.setLevel(logging.DEBUG)

    if args.admin_panel:
        if args.admin_panel_mount:
            logging.root.info('Mount point is %s', args.admin_panel_mount)
        start_adminpanel(REGISTRY, port=int(args.admin_panel_port), host=args.admin_panel_host,
                         mount=args.admin_panel_mount, debug=args.debug)
        print('Press Ctrl+C to quit')
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            print('Interrupted by user')
        return 0

    if args.model:
        definition = REGISTRY.lookup(args.model)
        if definition is None:
            logging.root.error('Unknown model %s', args.model)
            return 1
        print(json.dumps(definition, cls=DeviceEncoder, indent=2, ensure_ascii=False))
        return 0

    for definition in REGISTRY:
        print('{:<16} {}'.format(', '.join(sorted(definition.model_identifiers)),
                                 definition.description))
    return 0


if __name__ == '__main__':
    sys.exit(main())
