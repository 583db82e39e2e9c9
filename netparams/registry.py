#!/usr/bin/env python3
"""
Registry Module - Process-wide network parameter registry
========================================================

A node selects its ParameterSet by network name (or by wire magic) at
startup and reads from it for the rest of the process. The registry is
built and validated once, when this module is imported: an inconsistent
parameter set raises ConfigurationError and the import fails, so a node
can never start with a broken registry.

Example Usage:
    from netparams.registry import params_for_network
    params = params_for_network("regnet")
    params.subsidy_at(1000)
"""

import logging
from types import MappingProxyType
from typing import Mapping, Tuple

from .exceptions import ConfigurationError, UnknownNetworkError
from .mainnet import MAINNET_PARAMS
from .params import ParameterSet
from .regnet import REGNET_PARAMS
from .simnet import SIMNET_PARAMS
from .testnet import TESTNET3_PARAMS

logger = logging.getLogger(__name__)

# Alternate spellings accepted by params_for_network
ALIASES = {
    "testnet": "testnet3",
}


def _build_registry(*param_sets: ParameterSet) -> Mapping[str, ParameterSet]:
    registry = {}
    nets = {}
    for params in param_sets:
        try:
            params.validate()
        except ConfigurationError:
            logger.error("Parameter set for %s failed validation", params.name)
            raise
        if params.name in registry:
            raise ConfigurationError(f"Network {params.name!r} registered twice")
        if params.net in nets:
            raise ConfigurationError(
                f"Networks {nets[params.net]!r} and {params.name!r} share wire magic {params.net:#010x}"
            )
        registry[params.name] = params
        nets[params.net] = params.name
        logger.debug("Validated parameters for %s (magic %#010x)", params.name, params.net)
    return MappingProxyType(registry)


NETWORKS = _build_registry(MAINNET_PARAMS, TESTNET3_PARAMS, SIMNET_PARAMS, REGNET_PARAMS)


def network_names() -> Tuple[str, ...]:
    return tuple(NETWORKS)


def params_for_network(name: str) -> ParameterSet:
    """
    Look up the parameter set of a network by name

    Raises:
    - UnknownNetworkError: the name is not registered
    """
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    try:
        return NETWORKS[key]
    except KeyError:
        raise UnknownNetworkError(
            f"Unknown network {name!r}, expected one of: {', '.join(NETWORKS)}"
        ) from None


def params_for_net(net: int) -> ParameterSet:
    """Look up the parameter set whose wire magic equals net"""
    for params in NETWORKS.values():
        if params.net == net:
            return params
    raise UnknownNetworkError(f"Unknown network magic {net:#010x}")
