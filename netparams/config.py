#!/usr/bin/env python3
"""
Configuration Module - Global constants and settings
==================================================

This module contains the constants shared by every network definition and
the small amount of runtime configuration used by the launcher and web UI.
The per-network consensus values themselves live in the network modules
(mainnet.py, testnet.py, simnet.py, regnet.py).

Constants defined here:
- Time units used to express block intervals
- The "never expires" timestamp used by consensus deployments
- Coin/atom conversion and subsidy proportion weight
- Default network selection
- Logging and web UI settings
"""

# Time Units (seconds)
# ====================
SECOND = 1
MINUTE = 60 * SECOND

# Largest representable Unix time, used as ExpireTime for votes that never end
MAX_TIME = 2**63 - 1

# Currency Units
# ==============
ATOMS_PER_COIN = 100_000_000

# Work + stake + tax proportions of every network must add up to this weight
SUBSIDY_PROPORTION_TOTAL = 10

# Network Selection
# =================
DEFAULT_NETWORK = "mainnet"
NETWORK_ENV_VAR = "NETPARAMS_NETWORK"

# Logging Configuration
# =====================
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL = "INFO"

# Web UI Configuration
# ====================
WEB_HOST = "127.0.0.1"
WEB_PORT = 5000
