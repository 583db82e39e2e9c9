#!/usr/bin/env python3
"""
Exception Module - Network parameter errors
===========================================

This module defines the exceptions raised by the parameter registry.
Every operation in this package is a pure lookup or arithmetic derivation,
so there are no transient failures: an error is either a broken registry
(fatal at startup) or a caller asking for something that does not exist.

Exception hierarchy:
- NetParamsError: Base exception for all parameter registry errors
- ConfigurationError: A parameter set violates a consistency rule
- GenesisMismatchError: Genesis block does not hash to the recorded genesis hash
- UnknownNetworkError: Lookup of a network that is not registered
"""


class NetParamsError(Exception):
    """
    Base exception for parameter registry operations

    Parent class for all registry-related errors. Catch this to handle
    any failure raised by the netparams package.
    """
    pass


class ConfigurationError(NetParamsError):
    """
    Raised when a parameter set is internally inconsistent

    These errors are never recoverable: a node that would run with a
    malformed registry could follow different consensus rules than its
    peers, so startup must be aborted instead.

    Example:
    - Two choices of one vote share a bit
    - Checkpoint heights are not strictly increasing
    - TargetTimespan differs from TargetTimePerBlock * WorkDiffWindowSize
    - Work, stake and tax proportions do not add up to the total weight
    """
    pass


class GenesisMismatchError(ConfigurationError):
    """
    Raised when a genesis block disagrees with the recorded genesis identity

    Example:
    - Hashing the serialized genesis header yields a different hash
    - Genesis header timestamp or difficulty bits differ from the record
    """
    pass


class UnknownNetworkError(NetParamsError, KeyError):
    """
    Raised when looking up a network that is not registered

    This is a caller error (usually a bad --network flag) and is surfaced
    immediately rather than retried.
    """

    def __str__(self):
        # KeyError wraps its message in quotes
        return str(self.args[0]) if self.args else ""
