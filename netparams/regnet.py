#!/usr/bin/env python3
"""
Regnet Module - Regression test network parameters
=================================================

The regression test network is primarily for unit tests and RPC server
tests. It should not be confused with the public test network or the
simulation test network, which is intended for full integration tests
between wallets, voting service providers, mining pools, block explorers
and other services.

Since this network is only intended for unit testing, its values are
subject to change even if it would cause a hard fork.
"""

from datetime import timedelta

from .addrmagic import AddressMagics
from .config import ATOMS_PER_COIN, SECOND
from .deployments import (
    LN_FEATURES_VOTE,
    MAX_BLOCK_SIZE_VOTE,
    SDIFF_ALGORITHM_VOTE,
    ConsensusDeployment,
)
from .genesis import SHARED_GENESIS_MERKLE_ROOT, BlockHeader, GenesisBlock, GenesisInfo
from .params import ParameterSet

REGNET_MAGIC = 0xDAB500FA

# Attached by the wire layer with with_genesis_block once it can hash headers
REGNET_GENESIS_BLOCK = GenesisBlock(header=BlockHeader(
    version=1,
    merkle_root=SHARED_GENESIS_MERKLE_ROOT,
    bits=0x207FFFFF,
    timestamp=1538524800,
))

REGNET_PARAMS = ParameterSet(
    name="regnet",
    net=REGNET_MAGIC,
    default_port="10319",
    dns_seeds=(),  # There must NOT be any seeds

    # Chain parameters
    genesis=GenesisInfo(
        hash="2ced94b4ae95bba344cfa043268732d230649c640f92dce2d9518823d3057cb0",
        timestamp=1538524800,  # 2018-10-03 00:00:00 UTC
        bits=0x207FFFFF,
        sbits=0,
    ),
    pow_limit=2**255 - 1,
    pow_limit_bits=0x207FFFFF,
    reduce_min_difficulty=False,
    min_diff_reduction_time=timedelta(0),  # Does not apply since reduce_min_difficulty is False
    generate_supported=True,
    maximum_block_sizes=(1000000, 1310720),
    max_tx_size=1000000,
    target_time_per_block=timedelta(seconds=SECOND),
    work_diff_alpha=1,
    work_diff_window_size=8,
    work_diff_windows=4,
    target_timespan=timedelta(seconds=SECOND * 8),  # TimePerBlock * WindowSize
    retarget_adjustment_factor=4,

    # Subsidy parameters
    base_subsidy=50000000000,
    mul_subsidy=100,
    div_subsidy=101,
    subsidy_reduction_interval=128,
    work_reward_proportion=6,
    stake_reward_proportion=3,
    block_tax_proportion=1,

    # Checkpoints ordered from oldest to newest
    checkpoints=(),

    # Consensus rule change deployments
    rule_change_activation_quorum=160,  # 10 % of RuleChangeActivationInterval * TicketsPerBlock
    rule_change_activation_multiplier=3,  # 75%
    rule_change_activation_divisor=4,
    rule_change_activation_interval=320,  # Full ticket pool -- 320 seconds
    deployments={
        4: (ConsensusDeployment(MAX_BLOCK_SIZE_VOTE),),
        5: (ConsensusDeployment(SDIFF_ALGORITHM_VOTE),),
        6: (ConsensusDeployment(LN_FEATURES_VOTE),),
    },

    # Enforce current block version once 51% of the network has upgraded,
    # reject previous block versions once 75% has
    block_enforce_num_required=51,
    block_reject_num_required=75,
    block_upgrade_num_to_check=100,

    accept_non_std_txs=True,

    # Address encoding magics
    network_address_prefix="XCC",
    address_magics=AddressMagics(
        pubkey_addr_id=bytes.fromhex("25e5"),       # starts with Rk
        pubkey_hash_addr_id=bytes.fromhex("0e00"),  # starts with Rs
        pkh_edwards_addr_id=bytes.fromhex("0de0"),  # starts with Re
        pkh_schnorr_addr_id=bytes.fromhex("0dc2"),  # starts with RS
        script_hash_addr_id=bytes.fromhex("0ddb"),  # starts with Rc
        private_key_id=bytes.fromhex("22fe"),       # starts with Pr
        hd_private_key_id=bytes.fromhex("eab40448"),  # starts with rprv
        hd_public_key_id=bytes.fromhex("eab4f987"),   # starts with rpub
    ),
    slip0044_coin_type=1,  # SLIP0044, Testnet (all coins)
    legacy_coin_type=1,

    # PoS parameters
    minimum_stake_diff=20000,
    ticket_pool_size=64,
    tickets_per_block=5,
    ticket_maturity=16,
    ticket_expiry=384,  # 6*TicketPoolSize
    coinbase_maturity=16,
    sstx_change_maturity=1,
    ticket_pool_size_weight=4,
    stake_diff_alpha=1,
    stake_diff_window_size=8,
    stake_diff_windows=8,
    stake_version_interval=8 * 2 * 7,
    max_fresh_stake_per_block=20,  # 4*TicketsPerBlock
    stake_enabled_height=16 + 16,  # CoinbaseMaturity + TicketMaturity
    stake_validation_height=16 + (64 * 2),  # CoinbaseMaturity + TicketPoolSize*2
    stake_base_sig_script=bytes.fromhex("7357"),
    stake_majority_multiplier=3,
    stake_majority_divisor=4,

    # Organization related parameters
    #
    # The treasury is a 3-of-3 P2SH whose wallet (all-zero seed) also owns
    # the three block one ledger outputs. Organization address is
    # RcQR65gasxuzf7mUeBXeAux6Z37joPuUwUN
    organization_pk_script=bytes.fromhex("a9146913bcc838bd0087fb3f6b3c868423d5e300078d87"),
    organization_pk_script_version=0,
    block_one_subsidy_total=300000 * ATOMS_PER_COIN,
)
