#!/usr/bin/env python3
"""
Deployments Module - Vote-gated consensus rule changes
=====================================================

This module defines the records describing on-chain votes used to
activate new consensus rules:
- Choice: one possible answer of a vote and the version bits encoding it
- Vote: an identifier, a bit mask over the block vote-bits field and its choices
- ConsensusDeployment: a vote plus the time window during which it is open

A network maps a rule-change version to the deployments introduced at that
version. Tallying the vote bits of individual blocks is the job of the
validation engine; this module only supplies the authoritative definitions
and checks their bit encodings when they are constructed.

Vote bits layout (example mask 0x0006):
    bit 0       reserved (block is valid)
    bits 1-2    this vote: 00 abstain, 01 no, 10 yes
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .config import MAX_TIME
from .exceptions import ConfigurationError

# Vote identifiers
VOTE_ID_MAX_BLOCK_SIZE = "maxblocksize"
VOTE_ID_SDIFF_ALGORITHM = "sdiffalgorithm"
VOTE_ID_LN_SUPPORT = "lnsupport"
VOTE_ID_LN_FEATURES = "lnfeatures"
VOTE_ID_FIX_LN_SEQ_LOCKS = "fixlnseqlocks"


@dataclass(frozen=True)
class Choice:
    """One possible answer of a vote"""
    id: str
    description: str
    bits: int
    is_abstain: bool = False
    is_no: bool = False

    def __post_init__(self):
        if self.bits < 0:
            raise ConfigurationError(f"Choice {self.id!r} has negative bits")
        if self.is_abstain and self.is_no:
            raise ConfigurationError(f"Choice {self.id!r} cannot be both abstain and no")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'description': self.description,
            'bits': self.bits,
            'is_abstain': self.is_abstain,
            'is_no': self.is_no,
        }


@dataclass(frozen=True)
class Vote:
    """
    A single on-chain vote

    The mask selects the bits of a block's vote-bits field read by this
    vote. Construction enforces the bit layout:
    - every choice is a subset of the mask
    - exactly one abstain choice, and its bits are zero
    - every other choice has non-zero bits and no two choices share a value
    """
    id: str
    description: str
    mask: int
    choices: Tuple[Choice, ...]

    def __post_init__(self):
        # Accept any iterable of choices but store an immutable tuple
        object.__setattr__(self, "choices", tuple(self.choices))

        if self.mask <= 0:
            raise ConfigurationError(f"Vote {self.id!r} has an empty mask")

        abstains = [choice for choice in self.choices if choice.is_abstain]
        if len(abstains) != 1:
            raise ConfigurationError(
                f"Vote {self.id!r} must have exactly one abstain choice, found {len(abstains)}"
            )
        if abstains[0].bits != 0:
            raise ConfigurationError(f"Vote {self.id!r} abstain choice must have zero bits")

        seen_ids = set()
        seen_bits = set()
        for choice in self.choices:
            if choice.id in seen_ids:
                raise ConfigurationError(f"Vote {self.id!r} repeats choice id {choice.id!r}")
            seen_ids.add(choice.id)

            if choice.bits & ~self.mask:
                raise ConfigurationError(
                    f"Vote {self.id!r} choice {choice.id!r} bits {choice.bits:#06x} "
                    f"fall outside mask {self.mask:#06x}"
                )
            if choice.is_abstain:
                continue
            masked = choice.bits & self.mask
            if masked == 0:
                raise ConfigurationError(
                    f"Vote {self.id!r} choice {choice.id!r} uses the abstain encoding"
                )
            if masked in seen_bits:
                raise ConfigurationError(
                    f"Vote {self.id!r} choice {choice.id!r} bits {masked:#06x} collide"
                )
            seen_bits.add(masked)

    @property
    def abstain_choice(self) -> Choice:
        return next(choice for choice in self.choices if choice.is_abstain)

    def choice_by_id(self, choice_id: str) -> Optional[Choice]:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    def choice_for_bits(self, vote_bits: int) -> Optional[Choice]:
        """
        Interpret a block's vote-bits field for this vote

        Only the bits selected by the mask are considered. All-zero masked
        bits mean abstain when the vote defines an abstain choice, otherwise
        there is no data. A non-zero value that matches no choice is also
        reported as no data (None), never as an explicit "no".
        """
        masked = vote_bits & self.mask
        if masked == 0:
            for choice in self.choices:
                if choice.is_abstain:
                    return choice
            return None
        for choice in self.choices:
            if not choice.is_abstain and choice.bits & self.mask == masked:
                return choice
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'description': self.description,
            'mask': self.mask,
            'choices': [choice.to_dict() for choice in self.choices],
        }


@dataclass(frozen=True)
class ConsensusDeployment:
    """A vote together with the [start_time, expire_time) window it is open for"""
    vote: Vote
    start_time: int = 0
    expire_time: int = MAX_TIME

    def __post_init__(self):
        if self.start_time < 0:
            raise ConfigurationError(f"Deployment {self.vote.id!r} starts before the epoch")
        if self.start_time >= self.expire_time:
            raise ConfigurationError(
                f"Deployment {self.vote.id!r} expires before it starts"
            )

    def is_open(self, timestamp: int) -> bool:
        return self.start_time <= timestamp < self.expire_time

    @property
    def never_expires(self) -> bool:
        return self.expire_time == MAX_TIME

    def to_dict(self) -> Dict[str, Any]:
        return {
            'vote': self.vote.to_dict(),
            'start_time': self.start_time,
            'expire_time': self.expire_time,
        }


def yes_no_vote(vote_id: str, description: str, mask: int,
                no_description: str, yes_description: str,
                abstain_description: str = "abstain voting for change") -> Vote:
    """
    Build the common abstain/no/yes vote over a two-bit mask

    The lower set bit of the mask encodes "no" and the next one "yes",
    so mask 0x0006 gives no=0x0002 and yes=0x0004.
    """
    no_bits = mask & -mask
    yes_bits = (mask & ~no_bits) & -(mask & ~no_bits)
    return Vote(
        id=vote_id,
        description=description,
        mask=mask,
        choices=(
            Choice("abstain", abstain_description, 0x0000, is_abstain=True),
            Choice("no", no_description, no_bits, is_no=True),
            Choice("yes", yes_description, yes_bits),
        ),
    )


# Votes shared by every network; networks differ only in when they are open
MAX_BLOCK_SIZE_VOTE = yes_no_vote(
    VOTE_ID_MAX_BLOCK_SIZE,
    "Change maximum allowed block size from 1MiB to 1.25MB",
    0x0006,  # Bits 1 and 2
    no_description="reject changing max allowed block size",
    yes_description="accept changing max allowed block size",
)

SDIFF_ALGORITHM_VOTE = yes_no_vote(
    VOTE_ID_SDIFF_ALGORITHM,
    "Change stake difficulty algorithm as defined in DCP0001",
    0x0006,  # Bits 1 and 2
    no_description="keep the existing algorithm",
    yes_description="change to the new algorithm",
)

LN_SUPPORT_VOTE = yes_no_vote(
    VOTE_ID_LN_SUPPORT,
    "Request developers begin work on Lightning Network (LN) integration",
    0x0018,  # Bits 3 and 4
    no_description="no, do not work on integrating LN support",
    yes_description="yes, begin work on integrating LN support",
    abstain_description="abstain from voting",
)

LN_FEATURES_VOTE = yes_no_vote(
    VOTE_ID_LN_FEATURES,
    "Enable features defined in DCP0002 and DCP0003 necessary to support Lightning Network (LN)",
    0x0006,  # Bits 1 and 2
    no_description="keep the existing consensus rules",
    yes_description="change to the new consensus rules",
)

FIX_LN_SEQ_LOCKS_VOTE = yes_no_vote(
    VOTE_ID_FIX_LN_SEQ_LOCKS,
    "Modify sequence lock handling as defined in DCP0004",
    0x0006,  # Bits 1 and 2
    no_description="keep the existing consensus rules",
    yes_description="change to the new consensus rules",
)


def validate_deployments(deployments: Dict[int, Tuple[ConsensusDeployment, ...]]) -> None:
    """
    Check cross-vote rules that single records cannot check on their own

    - votes introduced at the same version read disjoint masks
    - a vote id is used by only one deployment
    """
    seen_ids: Dict[str, int] = {}
    for version, version_deployments in deployments.items():
        if version < 0:
            raise ConfigurationError(f"Deployment version {version} is negative")
        used_mask = 0
        for deployment in version_deployments:
            vote = deployment.vote
            if vote.mask & used_mask:
                raise ConfigurationError(
                    f"Version {version} vote {vote.id!r} mask {vote.mask:#06x} "
                    f"overlaps another vote"
                )
            used_mask |= vote.mask
            if vote.id in seen_ids:
                raise ConfigurationError(
                    f"Vote id {vote.id!r} used at versions {seen_ids[vote.id]} and {version}"
                )
            seen_ids[vote.id] = version


def find_vote(deployments: Dict[int, Tuple[ConsensusDeployment, ...]],
              vote_id: str) -> Optional[Tuple[int, ConsensusDeployment]]:
    """Return (version, deployment) for a vote id, or None"""
    for version in sorted(deployments):
        for deployment in deployments[version]:
            if deployment.vote.id == vote_id:
                return version, deployment
    return None


def open_votes(deployments: Iterable[ConsensusDeployment], timestamp: int) -> Tuple[Vote, ...]:
    return tuple(d.vote for d in deployments if d.is_open(timestamp))
