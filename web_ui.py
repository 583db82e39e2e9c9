#!/usr/bin/env python3
"""
Read-only Web API for network parameters
Lets wallets, explorers and RPC tooling inspect the consensus parameters
of every registered network as JSON
"""

import logging

from flask import Flask, jsonify, request

from netparams.config import WEB_HOST, WEB_PORT
from netparams.exceptions import UnknownNetworkError
from netparams.registry import network_names, params_for_network

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.errorhandler(UnknownNetworkError)
def unknown_network(error):
    logger.warning("Rejected lookup: %s", error)
    return jsonify({'error': str(error)}), 404


@app.route('/api/networks')
def list_networks():
    """List registered network names"""
    return jsonify(list(network_names()))


@app.route('/api/networks/<name>')
def network_info(name):
    """Get the parameter summary of a network"""
    return jsonify(params_for_network(name).to_dict())


@app.route('/api/networks/<name>/deployments/<int:version>')
def network_deployments(name, version):
    """
    Get the deployments of a rule change version

    With ?time=<unix seconds> only the votes open at that time are returned.
    """
    params = params_for_network(name)
    timestamp = request.args.get('time', type=int)
    if timestamp is None and 'time' in request.args:
        return jsonify({'error': f"Invalid time {request.args['time']!r}, expected Unix seconds"}), 400
    if timestamp is None:
        deployments = params.deployments_for_version(version)
        return jsonify({
            'version': version,
            'deployments': [deployment.to_dict() for deployment in deployments],
        })

    votes = params.active_votes(version, timestamp)
    return jsonify({
        'version': version,
        'time': timestamp,
        'votes': [vote.to_dict() for vote in votes],
    })


@app.route('/api/networks/<name>/checkpoints/<int:height>')
def network_checkpoint(name, height):
    """Get the checkpoint hash at a height (null when there is none)"""
    params = params_for_network(name)
    return jsonify({'height': height, 'hash': params.checkpoint_at(height)})


@app.route('/api/networks/<name>/subsidy/<int:height>')
def network_subsidy(name, height):
    """Get the subsidy at a height and how it is split"""
    params = params_for_network(name)
    voters = request.args.get('voters', default=params.tickets_per_block, type=int)
    try:
        return jsonify({
            'height': height,
            'voters': voters,
            'subsidy': params.subsidy_at(height),
            'block_subsidy': params.block_subsidy_at(height),
            'work': params.work_subsidy_at(height, voters),
            'stake_per_vote': params.stake_vote_subsidy_at(height),
            'treasury': params.treasury_subsidy_at(height, voters),
        })
    except ValueError as e:
        return jsonify({'error': str(e)}), 400


@app.route('/api/networks/<name>/magics')
def network_magics(name):
    """Get the address and key magic table"""
    params = params_for_network(name)
    return jsonify({
        'network_address_prefix': params.network_address_prefix,
        'magics': params.address_magics.as_dict(),
        'slip0044_coin_type': params.slip0044_coin_type,
        'legacy_coin_type': params.legacy_coin_type,
    })


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(host=WEB_HOST, port=WEB_PORT)
