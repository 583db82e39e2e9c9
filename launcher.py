#!/usr/bin/env python3
"""
Network Parameters Launcher
Show a network's parameters, validate the registry or start the web API
"""

import argparse
import json
import logging
import os
import sys

from netparams.config import DEFAULT_NETWORK, LOG_FORMAT, LOG_LEVEL, NETWORK_ENV_VAR, WEB_HOST, WEB_PORT
from netparams.exceptions import NetParamsError

logger = logging.getLogger("launcher")


def show_network(name):
    """Print the parameter summary and deployments of a network"""
    from netparams.registry import params_for_network

    params = params_for_network(name)
    summary = params.to_dict()
    summary['deployments'] = {
        str(version): [deployment.to_dict() for deployment in deployments]
        for version, deployments in params.deployments.items()
    }
    print(json.dumps(summary, indent=2))


def validate_registry():
    """Importing the registry validates every network; report what was loaded"""
    from netparams.registry import NETWORKS

    for name, params in NETWORKS.items():
        print(f"{name}: ok (magic {params.net:#010x}, port {params.default_port})")


def launch_web_ui(host, port):
    from web_ui import app

    logger.info("Serving network parameters on http://%s:%d", host, port)
    app.run(host=host, port=port)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Consensus network parameters')
    subparsers = parser.add_subparsers(dest='command', required=True)

    show = subparsers.add_parser('show', help='Show the parameters of a network')
    show.add_argument('network', nargs='?',
                      default=os.environ.get(NETWORK_ENV_VAR, DEFAULT_NETWORK),
                      help=f'Network name (default: ${NETWORK_ENV_VAR} or {DEFAULT_NETWORK})')

    subparsers.add_parser('validate', help='Validate every registered network')

    web = subparsers.add_parser('web', help='Start the read-only web API')
    web.add_argument('--host', default=WEB_HOST)
    web.add_argument('--port', type=int, default=WEB_PORT)

    args = parser.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    try:
        if args.command == 'show':
            show_network(args.network)
        elif args.command == 'validate':
            validate_registry()
        elif args.command == 'web':
            launch_web_ui(args.host, args.port)
    except NetParamsError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
