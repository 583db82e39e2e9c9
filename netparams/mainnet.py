#!/usr/bin/env python3
"""
Mainnet Module - Main network parameters
=======================================

Values here must never change: every mainnet node has to agree on them
bit for bit. Note that the stake validation height (4096, about 14 days)
predates the CoinbaseMaturity + 2*TicketPoolSize formula used by the test
networks and is kept as is.
"""

from datetime import timedelta

from .addrmagic import AddressMagics
from .checkpoints import Checkpoint
from .config import ATOMS_PER_COIN, MINUTE
from .deployments import (
    FIX_LN_SEQ_LOCKS_VOTE,
    LN_FEATURES_VOTE,
    LN_SUPPORT_VOTE,
    MAX_BLOCK_SIZE_VOTE,
    SDIFF_ALGORITHM_VOTE,
    ConsensusDeployment,
)
from .genesis import SHARED_GENESIS_MERKLE_ROOT, BlockHeader, GenesisBlock, GenesisInfo
from .params import DNSSeed, ParameterSet

MAINNET_MAGIC = 0xD9B400F9

MAINNET_GENESIS_BLOCK = GenesisBlock(header=BlockHeader(
    version=1,
    merkle_root=SHARED_GENESIS_MERKLE_ROOT,
    bits=0x1B01FFFF,
    sbits=2 * ATOMS_PER_COIN,
    timestamp=1454954400,
))

MAINNET_PARAMS = ParameterSet(
    name="mainnet",
    net=MAINNET_MAGIC,
    default_port="9108",
    dns_seeds=(
        DNSSeed("mainnet-seed.decred.mindcry.org", True),
        DNSSeed("mainnet-seed.decred.netpurgatory.com", True),
        DNSSeed("mainnet-seed.decred.org", True),
    ),

    genesis=GenesisInfo(
        hash="298e5cc3d985bfe7f81dc135f360abe089edd4396b86d2de66b0cef42b21d980",
        timestamp=1454954400,  # 2016-02-08 18:00:00 UTC
        bits=0x1B01FFFF,
        sbits=2 * ATOMS_PER_COIN,
    ),
    pow_limit=2**224 - 1,
    pow_limit_bits=0x1D00FFFF,
    reduce_min_difficulty=False,
    min_diff_reduction_time=timedelta(0),  # Does not apply since reduce_min_difficulty is False
    generate_supported=False,
    maximum_block_sizes=(393216,),
    max_tx_size=393216,
    target_time_per_block=timedelta(seconds=MINUTE * 5),
    work_diff_alpha=1,
    work_diff_window_size=144,
    work_diff_windows=20,
    target_timespan=timedelta(seconds=MINUTE * 5 * 144),  # TimePerBlock * WindowSize
    retarget_adjustment_factor=4,

    base_subsidy=3119582664,  # 21m
    mul_subsidy=100,
    div_subsidy=101,
    subsidy_reduction_interval=6144,
    work_reward_proportion=6,
    stake_reward_proportion=3,
    block_tax_proportion=1,

    # Checkpoints ordered from oldest to newest
    checkpoints=(
        Checkpoint(440, "0000000000002203eb2c95ee96906730bb56b2985e174518f90eb4db29232d93"),
        Checkpoint(24480, "0000000000000c9d4239c4ef7ef3fb5aaeed940244bc69c57c8c5e1f071b28a6"),
        Checkpoint(48590, "0000000000000d5e0de21a96d3c965f5f2db2c82612acd7389c140c9afe92ba7"),
        Checkpoint(54770, "00000000000009293d067b1126b7de07fc9b2b94ee50dfe0d48c239a7adb072c"),
        Checkpoint(60720, "0000000000000a64475d68ffb9ad89a3d147c0f5138db26b40da9d19d0004117"),
        Checkpoint(65270, "0000000000000021f107601962789b201f0a0cbb98ac5f8c12b93d94e795b441"),
        Checkpoint(75380, "0000000000000e7d13cfc85806aa720fe3670980f5b7d33253e4f41985558372"),
        Checkpoint(85410, "00000000000013ec928074bea6eac9754aa614c7acb20edf300f18b0cd122692"),
        Checkpoint(99880, "0000000000000cb2a9a9ded647b9f78aae51ace32dd8913701d420ead272913c"),
        Checkpoint(123080, "000000000000009ea6e02d0f0424f445ed50686f9ae4aecdf3b268e981114477"),
        Checkpoint(135960, "00000000000001d2f9bbca9177972c0ba45acb40836b72945a75d73b99079498"),
        Checkpoint(139740, "00000000000001397179ae1aff156fb1aea228938d06b83e43b78b1c44527b5b"),
        Checkpoint(155900, "000000000000008557e37fb05177fc5a54e693de20689753639135f85a2dcb2e"),
        Checkpoint(164300, "000000000000009ed067ff51cd5e15f3c786222a5183b20a991a80ce535907a9"),
        Checkpoint(181020, "00000000000000b77d832cb2cbed02908d69323862a53e56345400ad81a6fb8f"),
        Checkpoint(189950, "000000000000007341d8ae2ea7e41f25cee00e1a70a4a3dc1cb055d14ecb2e11"),
        Checkpoint(214672, "0000000000000021d5cbeead55cb7fd659f07e8127358929ffc34cd362209758"),
        Checkpoint(259810, "0000000000000000ee0fbf469a9f32477ffbb46ebd7a280a53c842ab4243f97c"),
        Checkpoint(295940, "0000000000000000148852c8a919addf4043f9f267b13c08df051d359f1622ca"),
    ),

    # The miner confirmation window is defined as:
    #   target proof of work timespan / target proof of work spacing
    rule_change_activation_quorum=4032,  # 10 % of RuleChangeActivationInterval * TicketsPerBlock
    rule_change_activation_multiplier=3,  # 75%
    rule_change_activation_divisor=4,
    rule_change_activation_interval=2016 * 4,  # 4 weeks
    deployments={
        4: (ConsensusDeployment(
            MAX_BLOCK_SIZE_VOTE,
            start_time=1493164800,  # Apr 26th, 2017
            expire_time=1508976000,  # Oct 26th, 2017
        ),),
        5: (
            ConsensusDeployment(
                SDIFF_ALGORITHM_VOTE,
                start_time=1493164800,  # Apr 26th, 2017
                expire_time=1524700800,  # Apr 26th, 2018
            ),
            ConsensusDeployment(
                LN_SUPPORT_VOTE,
                start_time=1493164800,  # Apr 26th, 2017
                expire_time=1508976000,  # Oct 26th, 2017
            ),
        ),
        6: (ConsensusDeployment(
            LN_FEATURES_VOTE,
            start_time=1505260800,  # Sep 13th, 2017
            expire_time=1536796800,  # Sep 13th, 2018
        ),),
        7: (ConsensusDeployment(
            FIX_LN_SEQ_LOCKS_VOTE,
            start_time=1548633600,  # Jan 28th, 2019
            expire_time=1580169600,  # Jan 28th, 2020
        ),),
    },

    # Enforce current block version once 75% (750 / 1000) of the network
    # has upgraded, reject previous block versions at 95% (950 / 1000)
    block_enforce_num_required=750,
    block_reject_num_required=950,
    block_upgrade_num_to_check=1000,

    accept_non_std_txs=False,

    network_address_prefix="D",
    address_magics=AddressMagics(
        pubkey_addr_id=bytes.fromhex("1386"),       # starts with Dk
        pubkey_hash_addr_id=bytes.fromhex("073f"),  # starts with Ds
        pkh_edwards_addr_id=bytes.fromhex("071f"),  # starts with De
        pkh_schnorr_addr_id=bytes.fromhex("0701"),  # starts with DS
        script_hash_addr_id=bytes.fromhex("071a"),  # starts with Dc
        private_key_id=bytes.fromhex("22de"),       # starts with Pm
        hd_private_key_id=bytes.fromhex("02fda4e8"),  # starts with dprv
        hd_public_key_id=bytes.fromhex("02fda926"),   # starts with dpub
    ),
    slip0044_coin_type=42,  # SLIP0044, Decred
    legacy_coin_type=20,

    minimum_stake_diff=2 * ATOMS_PER_COIN,  # 2 Coin
    ticket_pool_size=8192,
    tickets_per_block=5,
    ticket_maturity=256,
    ticket_expiry=40960,  # 5*TicketPoolSize
    coinbase_maturity=256,
    sstx_change_maturity=1,
    ticket_pool_size_weight=4,
    stake_diff_alpha=1,  # Minimal
    stake_diff_window_size=144,
    stake_diff_windows=20,
    stake_version_interval=144 * 2 * 7,  # ~1 week
    max_fresh_stake_per_block=20,  # 4*TicketsPerBlock
    stake_enabled_height=256 + 256,  # CoinbaseMaturity + TicketMaturity
    stake_validation_height=4096,  # ~14 days
    stake_base_sig_script=bytes.fromhex("0000"),
    stake_majority_multiplier=3,
    stake_majority_divisor=4,

    organization_pk_script=bytes.fromhex("a914f5916158e3e2c4551c1796708db8367207ed13bb87"),
    organization_pk_script_version=0,
    block_one_subsidy_total=1680000 * ATOMS_PER_COIN,
)
