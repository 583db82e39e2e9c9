#!/usr/bin/env python3
"""
Simnet Module - Simulation test network parameters
=================================================

The simulation network is similar to the public test network except it is
intended for private use within a group of individuals doing simulation
testing and full integration tests between applications such as wallets,
voting service providers, mining pools and block explorers.

Only nodes specifically specified are used to create the network rather
than following normal discovery rules, so there are no DNS seeds.
"""

from datetime import timedelta

from .addrmagic import AddressMagics
from .config import ATOMS_PER_COIN, SECOND
from .deployments import (
    FIX_LN_SEQ_LOCKS_VOTE,
    LN_FEATURES_VOTE,
    LN_SUPPORT_VOTE,
    MAX_BLOCK_SIZE_VOTE,
    SDIFF_ALGORITHM_VOTE,
    ConsensusDeployment,
)
from .genesis import SHARED_GENESIS_MERKLE_ROOT, BlockHeader, GenesisBlock, GenesisInfo
from .params import ParameterSet

SIMNET_MAGIC = 0x12141C16

SIMNET_GENESIS_BLOCK = GenesisBlock(header=BlockHeader(
    version=1,
    merkle_root=SHARED_GENESIS_MERKLE_ROOT,
    bits=0x207FFFFF,
    timestamp=1401292357,
))

# Every simnet vote is always open and never expires
SIMNET_PARAMS = ParameterSet(
    name="simnet",
    net=SIMNET_MAGIC,
    default_port="18555",
    dns_seeds=(),

    genesis=GenesisInfo(
        hash="5bec7567af40504e0994db3b573c186fffcc4edefe096ff2e58d00523bd7e8a6",
        timestamp=1401292357,  # 2014-05-28 15:52:37 UTC
        bits=0x207FFFFF,
        sbits=0,
    ),
    pow_limit=2**255 - 1,
    pow_limit_bits=0x207FFFFF,
    reduce_min_difficulty=False,
    min_diff_reduction_time=timedelta(0),
    generate_supported=False,
    maximum_block_sizes=(1000000, 1310720),
    max_tx_size=1000000,
    target_time_per_block=timedelta(seconds=SECOND),
    work_diff_alpha=1,
    work_diff_window_size=8,
    work_diff_windows=4,
    target_timespan=timedelta(seconds=SECOND * 8),  # TimePerBlock * WindowSize
    retarget_adjustment_factor=4,

    base_subsidy=50000000000,
    mul_subsidy=100,
    div_subsidy=101,
    subsidy_reduction_interval=128,
    work_reward_proportion=6,
    stake_reward_proportion=3,
    block_tax_proportion=1,

    checkpoints=(),

    rule_change_activation_quorum=160,  # 10 % of RuleChangeActivationInterval * TicketsPerBlock
    rule_change_activation_multiplier=3,  # 75%
    rule_change_activation_divisor=4,
    rule_change_activation_interval=320,  # 320 seconds
    deployments={
        4: (ConsensusDeployment(MAX_BLOCK_SIZE_VOTE),),
        5: (
            ConsensusDeployment(SDIFF_ALGORITHM_VOTE),
            ConsensusDeployment(LN_SUPPORT_VOTE),
        ),
        6: (ConsensusDeployment(LN_FEATURES_VOTE),),
        7: (ConsensusDeployment(FIX_LN_SEQ_LOCKS_VOTE),),
    },

    block_enforce_num_required=51,
    block_reject_num_required=75,
    block_upgrade_num_to_check=100,

    accept_non_std_txs=True,

    network_address_prefix="S",
    address_magics=AddressMagics(
        pubkey_addr_id=bytes.fromhex("276f"),       # starts with Sk
        pubkey_hash_addr_id=bytes.fromhex("0e91"),  # starts with Ss
        pkh_edwards_addr_id=bytes.fromhex("0e71"),  # starts with Se
        pkh_schnorr_addr_id=bytes.fromhex("0e53"),  # starts with SS
        script_hash_addr_id=bytes.fromhex("0e6c"),  # starts with Sc
        private_key_id=bytes.fromhex("2307"),       # starts with Ps
        hd_private_key_id=bytes.fromhex("0420b903"),  # starts with sprv
        hd_public_key_id=bytes.fromhex("0420bd3d"),   # starts with spub
    ),
    slip0044_coin_type=1,  # SLIP0044, Testnet (all coins)
    legacy_coin_type=115,  # ASCII for s

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
    stake_base_sig_script=bytes.fromhex("deadbeef"),
    stake_majority_multiplier=3,
    stake_majority_divisor=4,

    # Organization address is ScuQxvveKGfpG1ypt6u27F99Anf7EW3cqhq
    organization_pk_script=bytes.fromhex("a914cbb08d6ca783b533b2c7d24a51fbca92d937bf9987"),
    organization_pk_script_version=0,
    block_one_subsidy_total=300000 * ATOMS_PER_COIN,
)
