#
# Copyright (c) 2018 Sébastien RAMAGE
#
# For the full copyright and license information, please view the LICENSE
# file that was distributed with this source code.
#

import logging
import threading
import bottle
from json import dumps
from .version import __version__
from .devices import REGISTRY, DeviceEncoder
from .const import ADMINPANEL_PORT, ADMINPANEL_HOST

LOGGER = logging.getLogger('pushok')


def start_adminpanel(registry=REGISTRY, host=ADMINPANEL_HOST, port=ADMINPANEL_PORT, mount=None,
                     autostart=True, daemon=True, quiet=True, debug=False):
    '''
    Read only view of the device registry
    mount: url prefix used to mount bottle application
    '''
    app = bottle.Bottle()
    app.install(bottle.JSONPlugin(json_dumps=lambda s: dumps(s, cls=DeviceEncoder)))
    app.registry = registry

    @app.route('/', name='index')
    def index():
        rows = ''
        for identifier in registry.identifiers():
            definition = registry.lookup(identifier)
            rows += '<li><a href="api/devices/{0}">{0}</a> {1}</li>'.format(identifier,
                                                                           definition.description)
        return '<html><h1>PushOk devices</h1><p>{}</p><ul>{}</ul></html>'.format(__version__, rows)

    @app.route('/api/devices', name='api_devices')
    def devices():
        return {'devices': list(registry)}

    @app.route('/api/devices/<model>', name='api_device')
    def device(model):
        definition = registry.lookup(model)
        if definition is None:
            bottle.response.status = 404
            return {'error': 'Unknown model {}'.format(model)}
        return definition.to_json()

    kwargs = {'host': host, 'port': port,
              'quiet': quiet, 'debug': debug}

    if autostart:
        r_app = app
        if mount:
            root_app = bottle.Bottle()
            root_app.mount(mount, app)
            r_app = root_app
        LOGGER.info('Starting Admin Panel on %s:%s', host, port)
        if daemon:
            t = threading.Thread(target=r_app.run,
                                 kwargs=kwargs,
                                 daemon=True)
            t.start()
        else:
            r_app.run(**kwargs)
    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    start_adminpanel(daemon=False, quiet=False, debug=True)
