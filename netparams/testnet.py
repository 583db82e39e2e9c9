#!/usr/bin/env python3
"""
Testnet Module - Public test network (version 3) parameters
==========================================================

testnet3 was restarted from a fresh genesis block in August 2018. Unlike
mainnet it permits minimum difficulty blocks after ten minutes without a
block, and its stake validation height is a historical value rather than
the CoinbaseMaturity + 2*TicketPoolSize formula.
"""

from datetime import timedelta

from .addrmagic import AddressMagics
from .config import ATOMS_PER_COIN, MINUTE
from .deployments import FIX_LN_SEQ_LOCKS_VOTE, ConsensusDeployment
from .genesis import GenesisInfo
from .params import DNSSeed, ParameterSet

TESTNET3_MAGIC = 0xB194AA75

TESTNET3_PARAMS = ParameterSet(
    name="testnet3",
    net=TESTNET3_MAGIC,
    default_port="19108",
    dns_seeds=(
        DNSSeed("testnet-seed.decred.mindcry.org", True),
        DNSSeed("testnet-seed.decred.netpurgatory.com", True),
        DNSSeed("testnet-seed.decred.org", True),
    ),

    genesis=GenesisInfo(
        hash="a649dce53918caf422e9c711c858837e08d626ecfcd198969b24f7b634a49bac",
        timestamp=1533513600,  # 2018-08-06 00:00:00 UTC
        bits=0x1E00FFFF,
        sbits=20000000,
    ),
    pow_limit=2**232 - 1,
    pow_limit_bits=0x1E00FFFF,
    reduce_min_difficulty=True,
    min_diff_reduction_time=timedelta(seconds=MINUTE * 10),  # ~99.3% chance to be mined before reduction
    generate_supported=True,
    maximum_block_sizes=(1310720,),
    max_tx_size=1000000,
    target_time_per_block=timedelta(seconds=MINUTE * 2),
    work_diff_alpha=1,
    work_diff_window_size=144,
    work_diff_windows=20,
    target_timespan=timedelta(seconds=MINUTE * 2 * 144),  # TimePerBlock * WindowSize
    retarget_adjustment_factor=4,

    base_subsidy=2500000000,  # 25 Coin
    mul_subsidy=100,
    div_subsidy=101,
    subsidy_reduction_interval=2048,
    work_reward_proportion=6,
    stake_reward_proportion=3,
    block_tax_proportion=1,

    checkpoints=(),

    rule_change_activation_quorum=2520,  # 10 % of RuleChangeActivationInterval * TicketsPerBlock
    rule_change_activation_multiplier=3,  # 75%
    rule_change_activation_divisor=4,
    rule_change_activation_interval=5040,  # 1 week
    deployments={
        7: (ConsensusDeployment(
            FIX_LN_SEQ_LOCKS_VOTE,
            start_time=1548633600,  # Jan 28th, 2019
            expire_time=1580169600,  # Jan 28th, 2020
        ),),
    },

    block_enforce_num_required=51,
    block_reject_num_required=75,
    block_upgrade_num_to_check=100,

    accept_non_std_txs=True,

    network_address_prefix="T",
    address_magics=AddressMagics(
        pubkey_addr_id=bytes.fromhex("28f7"),       # starts with Tk
        pubkey_hash_addr_id=bytes.fromhex("0f21"),  # starts with Ts
        pkh_edwards_addr_id=bytes.fromhex("0f01"),  # starts with Te
        pkh_schnorr_addr_id=bytes.fromhex("0ee3"),  # starts with TS
        script_hash_addr_id=bytes.fromhex("0efc"),  # starts with Tc
        private_key_id=bytes.fromhex("230e"),       # starts with Pt
        hd_private_key_id=bytes.fromhex("04358397"),  # starts with tprv
        hd_public_key_id=bytes.fromhex("043587d1"),   # starts with tpub
    ),
    slip0044_coin_type=1,  # SLIP0044, Testnet (all coins)
    legacy_coin_type=11,

    minimum_stake_diff=20000000,  # 0.2 Coin
    ticket_pool_size=1024,
    tickets_per_block=5,
    ticket_maturity=16,
    ticket_expiry=6144,  # 6*TicketPoolSize
    coinbase_maturity=16,
    sstx_change_maturity=1,
    ticket_pool_size_weight=4,
    stake_diff_alpha=1,
    stake_diff_window_size=144,
    stake_diff_windows=20,
    stake_version_interval=144 * 2 * 7,  # ~1 week
    max_fresh_stake_per_block=20,  # 4*TicketsPerBlock
    stake_enabled_height=16 + 16,  # CoinbaseMaturity + TicketMaturity
    stake_validation_height=768,  # Arbitrary
    stake_base_sig_script=bytes.fromhex("0000"),
    stake_majority_multiplier=3,
    stake_majority_divisor=4,

    # Organization address is TcrypGAcGCRVXrES7hWqVZb5oLJKCZEtoL1
    organization_pk_script=bytes.fromhex("a914d585cd7426d25b4ea5faf1e6987aacfeda3db94287"),
    organization_pk_script_version=0,
    block_one_subsidy_total=100000 * ATOMS_PER_COIN,
)
