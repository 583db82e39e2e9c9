#!/usr/bin/env python3
"""
Params Module - Consensus parameter set of one network
=====================================================

This module contains the ParameterSet record that every other subsystem
reads its consensus constants from. One instance exists per network and it
is never modified after construction; all helpers are pure functions of
the stored values.

Parameter groups:
- Identity: name, wire magic, default port, DNS seeds
- Genesis: recorded genesis identity, optional full genesis block
- Proof of work: limits, retarget window shape, target block interval
- Block limits: governed maximum block sizes, maximum transaction size
- Subsidy: base amount, geometric decay, work/stake/treasury split
- Stake: ticket pool, maturity, stake difficulty window, activation heights
- Governance: block version upgrade thresholds, rule change voting
- Deployments and checkpoints
- Address/key magics and the organization (treasury) payout

Consistency rules are checked by validate(), which the registry runs once
for every network at startup. A violation raises ConfigurationError and the
node must not start.
"""

import dataclasses
import string
from dataclasses import dataclass
from datetime import timedelta
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .addrmagic import AddressKind, AddressMagics
from .checkpoints import Checkpoint, checkpoint_at, validate_checkpoints
from .config import SUBSIDY_PROPORTION_TOTAL
from .deployments import (
    VOTE_ID_MAX_BLOCK_SIZE,
    ConsensusDeployment,
    Vote,
    open_votes,
    validate_deployments,
)
from .exceptions import ConfigurationError
from .genesis import GenesisBlock, GenesisInfo, HashFunc, verify_genesis_block


@dataclass(frozen=True)
class DNSSeed:
    host: str
    has_filtering: bool = True


@dataclass(frozen=True)
class TokenPayout:
    """One premine output paid in block one"""
    script: bytes
    amount: int


def compact_to_big(compact: int) -> int:
    """
    Decode a compact difficulty encoding into the target it represents

    Compact format: 1 byte exponent, 1 sign bit, 23 bit mantissa.
    target = mantissa * 256^(exponent - 3)
    """
    mantissa = compact & 0x007FFFFF
    negative = compact & 0x00800000
    exponent = compact >> 24
    if exponent <= 3:
        value = mantissa >> (8 * (3 - exponent))
    else:
        value = mantissa << (8 * (exponent - 3))
    return -value if negative else value


@dataclass(frozen=True)
class ParameterSet:
    """
    Immutable consensus parameters of a single network

    Construct with keyword arguments. Sequences are stored as tuples and
    deployments as a read-only mapping, so a ParameterSet can be shared
    between any number of readers without locking.
    """
    # Identity
    name: str
    net: int
    default_port: str

    # Genesis
    genesis: GenesisInfo

    # Proof of work
    pow_limit: int
    pow_limit_bits: int
    reduce_min_difficulty: bool
    min_diff_reduction_time: timedelta
    generate_supported: bool
    target_time_per_block: timedelta
    work_diff_alpha: int
    work_diff_window_size: int
    work_diff_windows: int
    target_timespan: timedelta
    retarget_adjustment_factor: int

    # Block limits
    maximum_block_sizes: Tuple[int, ...]
    max_tx_size: int

    # Subsidy
    base_subsidy: int
    mul_subsidy: int
    div_subsidy: int
    subsidy_reduction_interval: int
    work_reward_proportion: int
    stake_reward_proportion: int
    block_tax_proportion: int

    # Rule change governance
    rule_change_activation_quorum: int
    rule_change_activation_multiplier: int
    rule_change_activation_divisor: int
    rule_change_activation_interval: int

    # Block version upgrade thresholds
    block_enforce_num_required: int
    block_reject_num_required: int
    block_upgrade_num_to_check: int

    # Mempool policy
    accept_non_std_txs: bool

    # Address encoding magics
    network_address_prefix: str
    address_magics: AddressMagics
    slip0044_coin_type: int
    legacy_coin_type: int

    # Stake system
    minimum_stake_diff: int
    ticket_pool_size: int
    tickets_per_block: int
    ticket_maturity: int
    ticket_expiry: int
    coinbase_maturity: int
    sstx_change_maturity: int
    ticket_pool_size_weight: int
    stake_diff_alpha: int
    stake_diff_window_size: int
    stake_diff_windows: int
    stake_version_interval: int
    max_fresh_stake_per_block: int
    stake_enabled_height: int
    stake_validation_height: int
    stake_base_sig_script: bytes
    stake_majority_multiplier: int
    stake_majority_divisor: int

    # Organization
    organization_pk_script: bytes
    organization_pk_script_version: int

    dns_seeds: Tuple[DNSSeed, ...] = ()
    deployments: Mapping[int, Tuple[ConsensusDeployment, ...]] = dataclasses.field(
        default_factory=dict)
    checkpoints: Tuple[Checkpoint, ...] = ()
    block_one_ledger: Tuple[TokenPayout, ...] = ()
    block_one_subsidy_total: int = 0
    genesis_block: Optional[GenesisBlock] = None

    def __post_init__(self):
        freeze = object.__setattr__
        freeze(self, "dns_seeds", tuple(self.dns_seeds))
        freeze(self, "maximum_block_sizes", tuple(self.maximum_block_sizes))
        freeze(self, "checkpoints", tuple(self.checkpoints))
        freeze(self, "block_one_ledger", tuple(self.block_one_ledger))
        freeze(self, "deployments", MappingProxyType(
            {version: tuple(deps) for version, deps in sorted(self.deployments.items())}
        ))

    # -------------------- Subsidy --------------------
    @property
    def total_subsidy_proportions(self) -> int:
        return self.work_reward_proportion + self.stake_reward_proportion + self.block_tax_proportion

    def subsidy_at(self, height: int) -> int:
        """
        Full block subsidy before it is split between work, stake and treasury

        Starts at base_subsidy and is multiplied by mul_subsidy/div_subsidy
        once per completed subsidy_reduction_interval. Integer division
        drives it to zero eventually, after which it stays zero.
        """
        if height < 0:
            raise ValueError(f"Height must not be negative, got {height}")
        subsidy = self.base_subsidy
        for _ in range(height // self.subsidy_reduction_interval):
            subsidy = subsidy * self.mul_subsidy // self.div_subsidy
            if subsidy == 0:
                break
        return subsidy

    def block_subsidy_at(self, height: int) -> int:
        """Subsidy as seen by a chain: nothing for genesis, the premine at block one"""
        if height == 0:
            return 0
        if height == 1:
            return self.block_one_subsidy()
        return self.subsidy_at(height)

    def block_one_subsidy(self) -> int:
        if self.block_one_ledger:
            return sum(payout.amount for payout in self.block_one_ledger)
        return self.block_one_subsidy_total

    def _check_voters(self, voters: int) -> None:
        if not 0 <= voters <= self.tickets_per_block:
            raise ValueError(
                f"Voters must be between 0 and {self.tickets_per_block}, got {voters}"
            )

    def work_subsidy_at(self, height: int, voters: int) -> int:
        """PoW share of the subsidy, reduced by missing votes once votes are required"""
        self._check_voters(voters)
        subsidy = self.subsidy_at(height) * self.work_reward_proportion // self.total_subsidy_proportions
        if not self.is_stake_validation_height(height):
            return subsidy
        return subsidy * voters // self.tickets_per_block

    def stake_vote_subsidy_at(self, height: int) -> int:
        """Subsidy paid to each individual vote"""
        return (self.subsidy_at(height) * self.stake_reward_proportion
                // (self.total_subsidy_proportions * self.tickets_per_block))

    def treasury_subsidy_at(self, height: int, voters: int) -> int:
        self._check_voters(voters)
        subsidy = self.subsidy_at(height) * self.block_tax_proportion // self.total_subsidy_proportions
        if not self.is_stake_validation_height(height):
            return subsidy
        return subsidy * voters // self.tickets_per_block

    # -------------------- Stake --------------------
    def is_stake_enabled_height(self, height: int) -> bool:
        return height >= self.stake_enabled_height

    def is_stake_validation_height(self, height: int) -> bool:
        return height >= self.stake_validation_height

    def expected_stake_enabled_height(self) -> int:
        return self.coinbase_maturity + self.ticket_maturity

    def expected_stake_validation_height(self) -> int:
        # Reference formula only; some networks use historical values instead
        return self.coinbase_maturity + self.ticket_pool_size * 2

    def stake_majority_fraction(self) -> Fraction:
        return Fraction(self.stake_majority_multiplier, self.stake_majority_divisor)

    # -------------------- Proof of work and block size --------------------
    def pow_limit_from_bits(self) -> int:
        return compact_to_big(self.pow_limit_bits)

    def block_max_size_for_version(self, version: int) -> int:
        """
        Maximum block size permitted for a block version

        Each deployment version carrying a max block size vote, up to and
        including the given version, moves one entry further along
        maximum_block_sizes. Versions past the end of the table use its
        last entry.
        """
        steps = sum(
            1 for dep_version, deployments in self.deployments.items()
            if dep_version <= version
            and any(d.vote.id == VOTE_ID_MAX_BLOCK_SIZE for d in deployments)
        )
        return self.maximum_block_sizes[min(steps, len(self.maximum_block_sizes) - 1)]

    # -------------------- Rule change governance --------------------
    def max_votes_per_interval(self) -> int:
        return self.rule_change_activation_interval * self.tickets_per_block

    def rule_change_supermajority(self) -> Fraction:
        return Fraction(self.rule_change_activation_multiplier, self.rule_change_activation_divisor)

    def quorum_fraction(self) -> Fraction:
        return Fraction(self.rule_change_activation_quorum, self.max_votes_per_interval())

    def deployments_for_version(self, version: int) -> Tuple[ConsensusDeployment, ...]:
        # A version without deployments takes part in no vote
        return self.deployments.get(version, ())

    def active_votes(self, version: int, timestamp: int) -> Tuple[Vote, ...]:
        return open_votes(self.deployments_for_version(version), timestamp)

    # -------------------- Checkpoints --------------------
    def checkpoint_at(self, height: int) -> Optional[str]:
        return checkpoint_at(self.checkpoints, height)

    def latest_checkpoint(self) -> Optional[Checkpoint]:
        return self.checkpoints[-1] if self.checkpoints else None

    # -------------------- Address magics --------------------
    def magic_for(self, kind: AddressKind) -> bytes:
        return self.address_magics.magic_for(kind)

    # -------------------- Genesis --------------------
    def with_genesis_block(self, block: GenesisBlock, hash_func: HashFunc) -> "ParameterSet":
        """
        Attach the wire-layer genesis block after checking it

        Raises:
        - GenesisMismatchError: the block does not match the recorded genesis
        """
        verify_genesis_block(block, self.genesis, hash_func)
        return dataclasses.replace(self, genesis_block=block)

    # -------------------- Validation --------------------
    def validate(self) -> None:
        """
        Check every cross-field consistency rule

        Raises:
        - ConfigurationError describing the first violated rule
        """
        def require(condition: bool, message: str) -> None:
            if not condition:
                raise ConfigurationError(f"{self.name}: {message}")

        require(bool(self.name), "network name is empty")
        require(self.default_port.isdigit(), f"default port {self.default_port!r} is not numeric")
        require(0 <= self.net <= 0xFFFFFFFF, "wire magic must fit in 4 bytes")
        require(len(self.genesis.hash) == 64 and all(c in string.hexdigits for c in self.genesis.hash),
                "genesis hash must be 64 hex characters")

        # Proof of work
        require(self.pow_limit > 0, "pow limit must be positive")
        require(0 < self.pow_limit_from_bits() <= self.pow_limit,
                f"pow limit bits {self.pow_limit_bits:#010x} exceed the pow limit")
        require(self.target_time_per_block > timedelta(0), "target time per block must be positive")
        require(self.work_diff_alpha > 0, "work difficulty alpha must be positive")
        require(self.work_diff_window_size > 0 and self.work_diff_windows > 0,
                "work difficulty windows must be positive")
        require(self.target_timespan == self.target_time_per_block * self.work_diff_window_size,
                "target timespan must equal target time per block * work diff window size")
        require(self.retarget_adjustment_factor > 1, "retarget adjustment factor must exceed 1")
        if self.reduce_min_difficulty:
            require(self.min_diff_reduction_time > timedelta(0),
                    "min difficulty reduction time must be positive when enabled")

        # Block limits
        require(len(self.maximum_block_sizes) > 0, "maximum block sizes are empty")
        require(all(size > 0 for size in self.maximum_block_sizes), "block sizes must be positive")
        require(all(a <= b for a, b in zip(self.maximum_block_sizes, self.maximum_block_sizes[1:])),
                "maximum block sizes must never shrink")
        require(0 < self.max_tx_size <= self.maximum_block_sizes[-1],
                "max transaction size must fit in a block")
        governed = sum(
            1 for deployments in self.deployments.values()
            if any(d.vote.id == VOTE_ID_MAX_BLOCK_SIZE for d in deployments)
        )
        require(len(self.maximum_block_sizes) <= governed + 1,
                f"maximum block sizes has {len(self.maximum_block_sizes)} entries but only "
                f"{governed} max block size vote(s) can move along it")

        # Subsidy
        require(self.base_subsidy > 0, "base subsidy must be positive")
        require(0 < self.mul_subsidy < self.div_subsidy, "subsidy must shrink at every reduction interval")
        require(self.subsidy_reduction_interval > 0, "subsidy reduction interval must be positive")
        require(min(self.work_reward_proportion, self.stake_reward_proportion,
                    self.block_tax_proportion) >= 0, "subsidy proportions must not be negative")
        require(self.total_subsidy_proportions == SUBSIDY_PROPORTION_TOTAL,
                f"work, stake and tax proportions must add up to {SUBSIDY_PROPORTION_TOTAL}")
        require(all(payout.amount > 0 for payout in self.block_one_ledger),
                "block one ledger amounts must be positive")

        # Stake
        require(self.tickets_per_block > 0, "tickets per block must be positive")
        require(self.ticket_pool_size > 0, "ticket pool size must be positive")
        require(self.ticket_expiry > self.ticket_maturity, "tickets must mature before they expire")
        require(self.stake_diff_window_size > 0 and self.stake_diff_windows > 0,
                "stake difficulty windows must be positive")
        require(self.stake_enabled_height == self.expected_stake_enabled_height(),
                "stake enabled height must equal coinbase maturity + ticket maturity")
        require(self.stake_validation_height >= self.stake_enabled_height,
                "stake validation cannot start before stake is enabled")
        require(0 < self.stake_majority_fraction() <= 1, "stake majority must be in (0, 1]")

        # Governance
        require(0 < self.block_enforce_num_required <= self.block_reject_num_required
                <= self.block_upgrade_num_to_check,
                "block upgrade thresholds must satisfy enforce <= reject <= window")
        require(self.rule_change_activation_interval > 0, "activation interval must be positive")
        require(self.rule_change_activation_divisor > 0, "activation divisor must be positive")
        require(0 < self.rule_change_supermajority() <= 1, "activation supermajority must be in (0, 1]")
        require(0 < self.rule_change_activation_quorum <= self.max_votes_per_interval(),
                "activation quorum must be reachable within one interval")
        validate_deployments(self.deployments)
        validate_checkpoints(self.checkpoints)

        # Organization
        require(len(self.organization_pk_script) > 0, "organization script is empty")

    # -------------------- Serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-compatible dictionary

        Bytes become hex strings, durations become seconds, large integers
        (pow limit) become hex strings.
        """
        return {
            'name': self.name,
            'net': f"{self.net:#010x}",
            'default_port': self.default_port,
            'dns_seeds': [seed.host for seed in self.dns_seeds],
            'genesis_hash': self.genesis.hash,
            'genesis_timestamp': self.genesis.timestamp,
            'pow_limit': f"{self.pow_limit:#x}",
            'pow_limit_bits': f"{self.pow_limit_bits:#010x}",
            'reduce_min_difficulty': self.reduce_min_difficulty,
            'min_diff_reduction_time': int(self.min_diff_reduction_time.total_seconds()),
            'target_time_per_block': int(self.target_time_per_block.total_seconds()),
            'work_diff_window_size': self.work_diff_window_size,
            'work_diff_windows': self.work_diff_windows,
            'target_timespan': int(self.target_timespan.total_seconds()),
            'retarget_adjustment_factor': self.retarget_adjustment_factor,
            'maximum_block_sizes': list(self.maximum_block_sizes),
            'max_tx_size': self.max_tx_size,
            'base_subsidy': self.base_subsidy,
            'mul_subsidy': self.mul_subsidy,
            'div_subsidy': self.div_subsidy,
            'subsidy_reduction_interval': self.subsidy_reduction_interval,
            'work_reward_proportion': self.work_reward_proportion,
            'stake_reward_proportion': self.stake_reward_proportion,
            'block_tax_proportion': self.block_tax_proportion,
            'rule_change_activation_quorum': self.rule_change_activation_quorum,
            'rule_change_activation_multiplier': self.rule_change_activation_multiplier,
            'rule_change_activation_divisor': self.rule_change_activation_divisor,
            'rule_change_activation_interval': self.rule_change_activation_interval,
            'deployment_versions': list(self.deployments),
            'checkpoints': len(self.checkpoints),
            'ticket_pool_size': self.ticket_pool_size,
            'tickets_per_block': self.tickets_per_block,
            'ticket_maturity': self.ticket_maturity,
            'ticket_expiry': self.ticket_expiry,
            'coinbase_maturity': self.coinbase_maturity,
            'stake_enabled_height': self.stake_enabled_height,
            'stake_validation_height': self.stake_validation_height,
            'network_address_prefix': self.network_address_prefix,
            'slip0044_coin_type': self.slip0044_coin_type,
            'legacy_coin_type': self.legacy_coin_type,
            'organization_pk_script': self.organization_pk_script.hex(),
            'organization_pk_script_version': self.organization_pk_script_version,
            'block_one_subsidy': self.block_one_subsidy(),
        }
