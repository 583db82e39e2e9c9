#!/usr/bin/env python3
"""
Test suite for the network parameter registry
Covers the parameter invariants of every network, the regression test
network scenario, deployments, checkpoints, address magics and genesis checks
"""

import dataclasses
import hashlib
import unittest
from datetime import timedelta
from fractions import Fraction

import base58
from blake256 import blake256
import ecdsa

from netparams.addrmagic import AddressKind, AddressMagics, kind_for_encoded
from netparams.checkpoints import Checkpoint, checkpoint_at, validate_checkpoints
from netparams.config import MAX_TIME, SUBSIDY_PROPORTION_TOTAL
from netparams.deployments import (
    VOTE_ID_LN_SUPPORT,
    VOTE_ID_MAX_BLOCK_SIZE,
    Choice,
    ConsensusDeployment,
    Vote,
    find_vote,
    validate_deployments,
    yes_no_vote,
)
from netparams.exceptions import ConfigurationError, GenesisMismatchError, UnknownNetworkError
from netparams.genesis import HEADER_SIZE, BlockHeader, GenesisBlock, GenesisInfo, header_hash_hex
from netparams.mainnet import MAINNET_GENESIS_BLOCK
from netparams.regnet import REGNET_GENESIS_BLOCK
from netparams.simnet import SIMNET_GENESIS_BLOCK
from netparams.params import TokenPayout, compact_to_big
from netparams.registry import NETWORKS, _build_registry, network_names, params_for_net, params_for_network

MAINNET = params_for_network("mainnet")
TESTNET = params_for_network("testnet3")
SIMNET = params_for_network("simnet")
REGNET = params_for_network("regnet")


def double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


class TestRegistry(unittest.TestCase):
    """Lookup of parameter sets by name and wire magic"""

    def test_registered_networks(self):
        self.assertEqual(network_names(), ("mainnet", "testnet3", "simnet", "regnet"))
        for name in network_names():
            self.assertEqual(params_for_network(name).name, name)

    def test_lookup_normalizes_name(self):
        self.assertIs(params_for_network("testnet"), TESTNET)
        self.assertIs(params_for_network(" RegNet "), REGNET)

    def test_unknown_network_fails_fast(self):
        with self.assertRaises(UnknownNetworkError):
            params_for_network("bogusnet")
        # Callers treating the registry as a mapping can catch KeyError
        with self.assertRaises(KeyError):
            params_for_network("bogusnet")

    def test_lookup_by_wire_magic(self):
        self.assertIs(params_for_net(0xDAB500FA), REGNET)
        self.assertIs(params_for_net(0xD9B400F9), MAINNET)
        with self.assertRaisesRegex(UnknownNetworkError, "0x00000001"):
            params_for_net(1)

    def test_registry_is_read_only(self):
        with self.assertRaises(TypeError):
            NETWORKS["devnet"] = REGNET  # type: ignore[index]
        with self.assertRaises(dataclasses.FrozenInstanceError):
            REGNET.base_subsidy = 1  # type: ignore[misc]
        with self.assertRaises(TypeError):
            REGNET.deployments[9] = ()  # type: ignore[index]

    def test_registry_rejects_shared_magic(self):
        clone = dataclasses.replace(SIMNET, name="simnet2", net=REGNET.net)
        with self.assertRaisesRegex(ConfigurationError, "wire magic"):
            _build_registry(REGNET, clone)

    def test_registry_rejects_invalid_network(self):
        broken = dataclasses.replace(REGNET, target_timespan=timedelta(seconds=9))
        with self.assertLogs("netparams.registry", level="ERROR"):
            with self.assertRaises(ConfigurationError):
                _build_registry(broken)


class TestNetworkInvariants(unittest.TestCase):
    """Cross-field consistency rules that must hold on every network"""

    def test_every_network_validates(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                params.validate()

    def test_target_timespan(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                self.assertEqual(params.target_timespan,
                                 params.target_time_per_block * params.work_diff_window_size)

    def test_stake_enabled_height(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                self.assertEqual(params.stake_enabled_height,
                                 params.coinbase_maturity + params.ticket_maturity)

    def test_stake_validation_height_literals(self):
        """Literal values are kept even where they differ from the formula"""
        expected = {"mainnet": 4096, "testnet3": 768, "simnet": 144, "regnet": 144}
        for name, height in expected.items():
            with self.subTest(network=name):
                self.assertEqual(params_for_network(name).stake_validation_height, height)
        self.assertEqual(REGNET.expected_stake_validation_height(), 144)
        self.assertNotEqual(MAINNET.expected_stake_validation_height(), MAINNET.stake_validation_height)

    def test_subsidy_proportions_sum(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                total = (params.work_reward_proportion + params.stake_reward_proportion
                         + params.block_tax_proportion)
                self.assertEqual(total, SUBSIDY_PROPORTION_TOTAL)

    def test_quorum_is_ten_percent_of_possible_votes(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                self.assertEqual(params.rule_change_activation_quorum * 10,
                                 params.max_votes_per_interval())
                self.assertEqual(params.rule_change_supermajority(), Fraction(3, 4))

    def test_vote_choice_bits(self):
        for params in NETWORKS.values():
            for version, deployments in params.deployments.items():
                for deployment in deployments:
                    vote = deployment.vote
                    with self.subTest(network=params.name, version=version, vote=vote.id):
                        abstains = [c for c in vote.choices if c.is_abstain]
                        self.assertEqual(len(abstains), 1)
                        self.assertEqual(abstains[0].bits, 0)
                        masked = [c.bits & vote.mask for c in vote.choices if not c.is_abstain]
                        self.assertEqual(len(masked), len(set(masked)))
                        self.assertNotIn(0, masked)

    def test_checkpoints_strictly_increase(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                heights = [checkpoint.height for checkpoint in params.checkpoints]
                self.assertEqual(heights, sorted(set(heights)))

    def test_pow_limit_bits_within_limit(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                self.assertLessEqual(params.pow_limit_from_bits(), params.pow_limit)

    def test_compact_to_big(self):
        self.assertEqual(compact_to_big(0x1D00FFFF), 0xFFFF << 208)
        self.assertEqual(compact_to_big(0x207FFFFF), 0x7FFFFF << 232)
        self.assertEqual(compact_to_big(0x03123456), 0x123456)
        self.assertEqual(compact_to_big(0x01123456), 0x12)
        self.assertEqual(compact_to_big(0x04923456), -0x12345600)


class TestRegnetScenario(unittest.TestCase):
    """Worked example of the regression test network"""

    def test_retarget_window(self):
        self.assertEqual(REGNET.target_time_per_block, timedelta(seconds=1))
        self.assertEqual(REGNET.work_diff_window_size, 8)
        self.assertEqual(REGNET.target_timespan, timedelta(seconds=8))

    def test_rule_change_quorum(self):
        self.assertEqual(REGNET.rule_change_activation_interval, 320)
        self.assertEqual(REGNET.tickets_per_block, 5)
        self.assertEqual(REGNET.rule_change_activation_quorum, 160)
        self.assertEqual(REGNET.quorum_fraction(), Fraction(1, 10))

    def test_stake_heights(self):
        self.assertEqual(REGNET.stake_enabled_height, 32)
        self.assertEqual(REGNET.stake_validation_height, 144)
        self.assertFalse(REGNET.is_stake_enabled_height(31))
        self.assertTrue(REGNET.is_stake_enabled_height(32))
        self.assertFalse(REGNET.is_stake_validation_height(143))
        self.assertTrue(REGNET.is_stake_validation_height(144))

    def test_version_four_deployment(self):
        votes = REGNET.active_votes(4, 1_600_000_000)
        self.assertEqual(len(votes), 1)
        vote = votes[0]
        self.assertEqual(vote.id, VOTE_ID_MAX_BLOCK_SIZE)
        self.assertEqual(vote.mask, 0x0006)
        self.assertEqual([(c.id, c.bits) for c in vote.choices],
                         [("abstain", 0x0000), ("no", 0x0002), ("yes", 0x0004)])
        self.assertTrue(vote.choices[0].is_abstain)
        self.assertTrue(vote.choices[1].is_no)
        self.assertFalse(vote.choices[2].is_no)

    def test_deployments_never_expire(self):
        for deployments in REGNET.deployments.values():
            for deployment in deployments:
                self.assertEqual(deployment.start_time, 0)
                self.assertEqual(deployment.expire_time, MAX_TIME)
                self.assertTrue(deployment.never_expires)

    def test_version_without_deployment(self):
        self.assertEqual(REGNET.deployments_for_version(3), ())
        self.assertEqual(REGNET.active_votes(99, 0), ())

    def test_block_max_size_for_version(self):
        self.assertEqual(REGNET.block_max_size_for_version(3), 1000000)
        self.assertEqual(REGNET.block_max_size_for_version(4), 1310720)
        self.assertEqual(REGNET.block_max_size_for_version(12), 1310720)
        # Only one size on mainnet, the vote cannot move past it
        self.assertEqual(MAINNET.block_max_size_for_version(7), 393216)


class TestSubsidy(unittest.TestCase):
    """Subsidy schedule and its work/stake/treasury split"""

    def test_subsidy_starts_at_base(self):
        for params in NETWORKS.values():
            with self.subTest(network=params.name):
                self.assertEqual(params.subsidy_at(0), params.base_subsidy)

    def test_subsidy_reduction(self):
        self.assertEqual(REGNET.subsidy_at(127), 50000000000)
        self.assertEqual(REGNET.subsidy_at(128), 49504950495)
        self.assertEqual(MAINNET.subsidy_at(6143), 3119582664)
        self.assertEqual(MAINNET.subsidy_at(6144), 3088695706)
        self.assertEqual(TESTNET.subsidy_at(2048), 2475247524)

    def test_subsidy_non_increasing_and_saturates(self):
        previous = REGNET.subsidy_at(0)
        for height in range(0, 128 * 2500, 640):
            subsidy = REGNET.subsidy_at(height)
            self.assertLessEqual(subsidy, previous)
            self.assertGreaterEqual(subsidy, 0)
            previous = subsidy
        self.assertEqual(REGNET.subsidy_at(128 * 2071), 0)
        self.assertEqual(REGNET.subsidy_at(128 * 10**9), 0)
        self.assertGreater(REGNET.subsidy_at(128 * 2070), 0)

    def test_negative_height_rejected(self):
        with self.assertRaises(ValueError):
            REGNET.subsidy_at(-1)

    def test_split_before_stake_validation(self):
        # Voters do not matter before votes are required
        self.assertEqual(REGNET.work_subsidy_at(100, 0), 30000000000)
        self.assertEqual(REGNET.treasury_subsidy_at(100, 0), 5000000000)
        self.assertEqual(REGNET.stake_vote_subsidy_at(100), 3000000000)

    def test_split_after_stake_validation(self):
        self.assertEqual(REGNET.work_subsidy_at(200, 5), 29702970297)
        self.assertEqual(REGNET.work_subsidy_at(200, 3), 17821782178)
        self.assertEqual(REGNET.work_subsidy_at(200, 0), 0)
        self.assertEqual(REGNET.treasury_subsidy_at(200, 5), 4950495049)

    def test_voters_out_of_range(self):
        with self.assertRaises(ValueError):
            REGNET.work_subsidy_at(200, 6)
        with self.assertRaises(ValueError):
            REGNET.treasury_subsidy_at(200, -1)

    def test_block_subsidy_schedule(self):
        self.assertEqual(REGNET.block_subsidy_at(0), 0)
        self.assertEqual(REGNET.block_subsidy_at(1), 300000 * 10**8)
        self.assertEqual(REGNET.block_subsidy_at(2), REGNET.base_subsidy)
        self.assertEqual(MAINNET.block_one_subsidy(), 1680000 * 10**8)

    def test_block_one_ledger_overrides_total(self):
        ledger = (TokenPayout(REGNET.organization_pk_script, 100 * 10**8),
                  TokenPayout(bytes.fromhex("76a914") + bytes(20) + bytes.fromhex("88ac"), 50 * 10**8))
        params = dataclasses.replace(REGNET, block_one_ledger=ledger)
        self.assertEqual(params.block_subsidy_at(1), 150 * 10**8)
        with self.assertRaisesRegex(ConfigurationError, "ledger"):
            dataclasses.replace(REGNET, block_one_ledger=(TokenPayout(b"\x51", 0),)).validate()


class TestDeployments(unittest.TestCase):
    """Vote definitions, their bit encodings and open windows"""

    def setUp(self):
        self.vote = REGNET.deployments_for_version(4)[0].vote

    def test_choice_for_bits(self):
        self.assertEqual(self.vote.choice_for_bits(0x0000).id, "abstain")
        self.assertEqual(self.vote.choice_for_bits(0x0002).id, "no")
        self.assertEqual(self.vote.choice_for_bits(0x0004).id, "yes")
        # Bits outside the mask are ignored
        self.assertEqual(self.vote.choice_for_bits(0x0001).id, "abstain")
        self.assertEqual(self.vote.choice_for_bits(0x0005).id, "yes")

    def test_invalid_bits_are_no_data(self):
        """Both bits set is not a choice and must not read as an explicit no"""
        self.assertIsNone(self.vote.choice_for_bits(0x0006))
        self.assertIsNone(self.vote.choice_for_bits(0x0007))

    def test_choice_by_id(self):
        self.assertEqual(self.vote.choice_by_id("yes").bits, 0x0004)
        self.assertIsNone(self.vote.choice_by_id("maybe"))
        self.assertEqual(self.vote.abstain_choice.id, "abstain")

    def test_yes_no_vote_on_upper_bits(self):
        vote = yes_no_vote("test", "test vote", 0x0018, "no", "yes")
        self.assertEqual([c.bits for c in vote.choices], [0x0000, 0x0008, 0x0010])

    def test_choice_outside_mask_rejected(self):
        with self.assertRaisesRegex(ConfigurationError, "outside mask"):
            Vote("v", "d", 0x0006, (
                Choice("abstain", "a", 0x0000, is_abstain=True),
                Choice("yes", "y", 0x0008),
            ))

    def test_colliding_choices_rejected(self):
        with self.assertRaisesRegex(ConfigurationError, "collide"):
            Vote("v", "d", 0x0006, (
                Choice("abstain", "a", 0x0000, is_abstain=True),
                Choice("no", "n", 0x0002, is_no=True),
                Choice("yes", "y", 0x0002),
            ))

    def test_abstain_rules(self):
        with self.assertRaisesRegex(ConfigurationError, "exactly one abstain"):
            Vote("v", "d", 0x0006, (Choice("yes", "y", 0x0004),))
        with self.assertRaisesRegex(ConfigurationError, "exactly one abstain"):
            Vote("v", "d", 0x0006, (
                Choice("abstain", "a", 0x0000, is_abstain=True),
                Choice("abstain2", "a", 0x0000, is_abstain=True),
            ))
        with self.assertRaisesRegex(ConfigurationError, "zero bits"):
            Vote("v", "d", 0x0006, (Choice("abstain", "a", 0x0002, is_abstain=True),))
        with self.assertRaisesRegex(ConfigurationError, "abstain encoding"):
            Vote("v", "d", 0x0006, (
                Choice("abstain", "a", 0x0000, is_abstain=True),
                Choice("no", "n", 0x0000, is_no=True),
            ))
        with self.assertRaises(ConfigurationError):
            Choice("odd", "o", 0x0000, is_abstain=True, is_no=True)

    def test_deployment_window(self):
        deployment = ConsensusDeployment(self.vote, start_time=100, expire_time=200)
        self.assertFalse(deployment.is_open(99))
        self.assertTrue(deployment.is_open(100))
        self.assertTrue(deployment.is_open(199))
        self.assertFalse(deployment.is_open(200))
        with self.assertRaises(ConfigurationError):
            ConsensusDeployment(self.vote, start_time=200, expire_time=200)

    def test_mainnet_votes_by_time(self):
        july_2017 = 1_500_000_000
        november_2017 = 1_510_000_000
        self.assertEqual([v.id for v in MAINNET.active_votes(5, july_2017)],
                         ["sdiffalgorithm", "lnsupport"])
        self.assertEqual([v.id for v in MAINNET.active_votes(5, november_2017)],
                         ["sdiffalgorithm"])
        self.assertEqual(MAINNET.active_votes(5, 1524700800), ())

    def test_votes_of_one_version_use_disjoint_masks(self):
        sdiff, lnsupport = (d.vote for d in MAINNET.deployments_for_version(5))
        self.assertEqual(sdiff.mask & lnsupport.mask, 0)

    def test_overlapping_masks_rejected(self):
        vote_a = yes_no_vote("a", "a", 0x0006, "no", "yes")
        vote_b = yes_no_vote("b", "b", 0x000C, "no", "yes")
        with self.assertRaisesRegex(ConfigurationError, "overlaps"):
            validate_deployments({4: (ConsensusDeployment(vote_a), ConsensusDeployment(vote_b))})

    def test_reused_vote_id_rejected(self):
        vote = yes_no_vote("a", "a", 0x0006, "no", "yes")
        with self.assertRaisesRegex(ConfigurationError, "used at versions"):
            validate_deployments({4: (ConsensusDeployment(vote),), 5: (ConsensusDeployment(vote),)})

    def test_find_vote(self):
        version, deployment = find_vote(MAINNET.deployments, VOTE_ID_LN_SUPPORT)
        self.assertEqual(version, 5)
        self.assertEqual(deployment.vote.mask, 0x0018)
        self.assertIsNone(find_vote(TESTNET.deployments, VOTE_ID_LN_SUPPORT))


class TestCheckpoints(unittest.TestCase):
    """Checkpoint lookup and ordering"""

    def test_checkpoint_lookup(self):
        self.assertEqual(MAINNET.checkpoint_at(440),
                         "0000000000002203eb2c95ee96906730bb56b2985e174518f90eb4db29232d93")
        self.assertIsNone(MAINNET.checkpoint_at(441))
        self.assertIsNone(MAINNET.checkpoint_at(0))
        self.assertIsNone(REGNET.checkpoint_at(0))

    def test_latest_checkpoint(self):
        self.assertEqual(MAINNET.latest_checkpoint().height, 295940)
        self.assertIsNone(REGNET.latest_checkpoint())

    def test_non_increasing_heights_rejected(self):
        hash_a = "00" * 32
        hash_b = "11" * 32
        with self.assertRaisesRegex(ConfigurationError, "strictly increase"):
            validate_checkpoints([Checkpoint(10, hash_a), Checkpoint(10, hash_b)])
        with self.assertRaisesRegex(ConfigurationError, "strictly increase"):
            validate_checkpoints([Checkpoint(10, hash_a), Checkpoint(5, hash_b)])

    def test_malformed_hash_rejected(self):
        with self.assertRaisesRegex(ConfigurationError, "malformed"):
            validate_checkpoints([Checkpoint(10, "abc")])
        with self.assertRaisesRegex(ConfigurationError, "malformed"):
            validate_checkpoints([Checkpoint(10, "zz" * 32)])

    def test_lookup_stops_past_height(self):
        table = (Checkpoint(5, "05" * 32), Checkpoint(9, "09" * 32))
        self.assertEqual(checkpoint_at(table, 9), "09" * 32)
        self.assertIsNone(checkpoint_at(table, 7))


class TestAddressMagics(unittest.TestCase):
    """Magic prefix tables and the Base58 prefixes they produce"""

    # Bytes following the magic: hash160 + checksum, key + checksum, HD key body + checksum
    PAYLOAD_LENGTHS = {
        AddressKind.PUBKEY: 33 + 4,
        AddressKind.PUBKEY_HASH: 20 + 4,
        AddressKind.PKH_EDWARDS: 20 + 4,
        AddressKind.PKH_SCHNORR: 20 + 4,
        AddressKind.SCRIPT_HASH: 20 + 4,
        AddressKind.PRIVATE_KEY: 33 + 4,
        AddressKind.HD_PRIVATE: 74 + 4,
        AddressKind.HD_PUBLIC: 74 + 4,
    }

    EXPECTED_PREFIXES = {
        "mainnet": ("Dk", "Ds", "De", "DS", "Dc", "Pm", "dprv", "dpub"),
        "testnet3": ("Tk", "Ts", "Te", "TS", "Tc", "Pt", "tprv", "tpub"),
        "simnet": ("Sk", "Ss", "Se", "SS", "Sc", "Ps", "sprv", "spub"),
        "regnet": ("Rk", "Rs", "Re", "RS", "Rc", "Pr", "rprv", "rpub"),
    }

    def encode(self, params, kind, fill):
        magic = params.magic_for(kind)
        return base58.b58encode(magic + fill * self.PAYLOAD_LENGTHS[kind]).decode()

    def test_base58_prefixes(self):
        for name, prefixes in self.EXPECTED_PREFIXES.items():
            params = params_for_network(name)
            for kind, prefix in zip(AddressKind, prefixes):
                for fill in (b"\x00", b"\xff"):
                    with self.subTest(network=name, kind=kind.value, fill=fill):
                        self.assertTrue(self.encode(params, kind, fill).startswith(prefix))

    def test_kind_for_encoded(self):
        for params in NETWORKS.values():
            for kind in AddressKind:
                with self.subTest(network=params.name, kind=kind.value):
                    encoded = self.encode(params, kind, b"\x5a")
                    self.assertEqual(kind_for_encoded(params.address_magics, encoded), kind)

    def test_foreign_and_malformed_addresses(self):
        mainnet_address = self.encode(MAINNET, AddressKind.PUBKEY_HASH, b"\x01")
        self.assertIsNone(kind_for_encoded(TESTNET.address_magics, mainnet_address))
        self.assertIsNone(kind_for_encoded(MAINNET.address_magics, "0OIl"))
        self.assertIsNone(kind_for_encoded(MAINNET.address_magics, ""))

    def test_pubkey_address_from_real_key(self):
        signing_key = ecdsa.SigningKey.generate(curve=ecdsa.SECP256k1)
        compressed = signing_key.get_verifying_key().to_string("compressed")
        payload = MAINNET.magic_for(AddressKind.PUBKEY) + compressed
        encoded = base58.b58encode(payload + double_sha256(payload)[:4]).decode()
        self.assertTrue(encoded.startswith("Dk"))
        self.assertEqual(kind_for_encoded(MAINNET.address_magics, encoded), AddressKind.PUBKEY)

    def test_magic_round_trip(self):
        magics = REGNET.address_magics
        for kind in AddressKind:
            self.assertEqual(magics.kind_for_magic(magics.magic_for(kind)), kind)
        self.assertIsNone(magics.kind_for_magic(b"\x00\x00"))
        self.assertEqual(magics.as_dict()["pubkeyhash"], "0e00")

    def test_magic_table_rules(self):
        with self.assertRaisesRegex(ConfigurationError, "must be 2 bytes"):
            dataclasses.replace(REGNET.address_magics, pubkey_addr_id=b"\x25")
        with self.assertRaisesRegex(ConfigurationError, "must be 4 bytes"):
            dataclasses.replace(REGNET.address_magics, hd_public_key_id=b"\xea\xb4")
        with self.assertRaisesRegex(ConfigurationError, "reuses"):
            dataclasses.replace(REGNET.address_magics, script_hash_addr_id=b"\x0e\x00")


class TestGenesis(unittest.TestCase):
    """Genesis header layout and hash verification with an injected hash function"""

    def make_block(self, **overrides):
        fields = dict(version=1, merkle_root=b"\x66" * 32, bits=0x207FFFFF,
                      timestamp=REGNET.genesis.timestamp, voters=0, stake_version=0)
        fields.update(overrides)
        return GenesisBlock(header=BlockHeader(**fields), transactions=(b"\x01\x00",))

    def params_for_block(self, block):
        info = GenesisInfo(hash=header_hash_hex(block.header, double_sha256),
                           timestamp=block.header.timestamp, bits=block.header.bits)
        return dataclasses.replace(REGNET, genesis=info)

    def test_header_layout(self):
        header = self.make_block(nonce=7, height=0).header
        raw = header.serialize()
        self.assertEqual(len(raw), HEADER_SIZE)
        self.assertEqual(HEADER_SIZE, 180)
        self.assertEqual(raw[:4], b"\x01\x00\x00\x00")
        self.assertEqual(BlockHeader.deserialize(raw), header)
        with self.assertRaises(ValueError):
            BlockHeader.deserialize(raw[:-1])

    def test_hash_is_reversed_for_display(self):
        header = self.make_block().header
        digest = double_sha256(header.serialize())
        self.assertEqual(header_hash_hex(header, double_sha256), digest[::-1].hex())

    def test_matching_genesis_block_is_attached(self):
        block = self.make_block()
        params = self.params_for_block(block)
        attached = params.with_genesis_block(block, double_sha256)
        self.assertIs(attached.genesis_block, block)
        self.assertIsNone(params.genesis_block)
        attached.validate()

    def test_mismatched_genesis_hash_rejected(self):
        block = self.make_block()
        params = self.params_for_block(block)
        tampered = self.make_block(nonce=1)
        with self.assertRaisesRegex(GenesisMismatchError, "hashes to"):
            params.with_genesis_block(tampered, double_sha256)

    def test_mismatched_header_fields_rejected(self):
        block = self.make_block()
        params = self.params_for_block(block)
        with self.assertRaisesRegex(GenesisMismatchError, "timestamp"):
            params.with_genesis_block(self.make_block(timestamp=1), double_sha256)
        with self.assertRaisesRegex(GenesisMismatchError, "bits"):
            params.with_genesis_block(self.make_block(bits=0x1D00FFFF), double_sha256)
        with self.assertRaisesRegex(GenesisMismatchError, "height"):
            params.with_genesis_block(self.make_block(height=1), double_sha256)



class TestRealGenesisBlocks(unittest.TestCase):
    """Recorded genesis hashes checked with the real BLAKE-256 header hash"""

    BLOCKS = (
        (MAINNET, MAINNET_GENESIS_BLOCK),
        (SIMNET, SIMNET_GENESIS_BLOCK),
        (REGNET, REGNET_GENESIS_BLOCK),
    )

    def test_recorded_hash_matches_header(self):
        for params, block in self.BLOCKS:
            with self.subTest(network=params.name):
                self.assertEqual(header_hash_hex(block.header, blake256.blake_hash),
                                 params.genesis.hash)

    def test_genesis_block_attaches(self):
        for params, block in self.BLOCKS:
            with self.subTest(network=params.name):
                attached = params.with_genesis_block(block, blake256.blake_hash)
                self.assertIs(attached.genesis_block, block)
                attached.validate()

    def test_regnet_hash(self):
        self.assertEqual(header_hash_hex(REGNET_GENESIS_BLOCK.header, blake256.blake_hash),
                         "2ced94b4ae95bba344cfa043268732d230649c640f92dce2d9518823d3057cb0")

    def test_other_network_genesis_rejected(self):
        with self.assertRaises(GenesisMismatchError):
            REGNET.with_genesis_block(SIMNET_GENESIS_BLOCK, blake256.blake_hash)
        # Same timestamp and bits but a different header still fails on the hash
        header = dataclasses.replace(REGNET_GENESIS_BLOCK.header, nonce=1)
        with self.assertRaisesRegex(GenesisMismatchError, "hashes to"):
            REGNET.with_genesis_block(GenesisBlock(header=header), blake256.blake_hash)

class TestValidation(unittest.TestCase):
    """Broken parameter sets must be refused"""

    def assertInvalid(self, pattern, **changes):
        with self.assertRaisesRegex(ConfigurationError, pattern):
            dataclasses.replace(REGNET, **changes).validate()

    def test_timespan_mismatch(self):
        self.assertInvalid("target timespan", target_timespan=timedelta(seconds=9))

    def test_proportions_must_sum(self):
        self.assertInvalid("add up", work_reward_proportion=7)

    def test_quorum_bounds(self):
        self.assertInvalid("quorum", rule_change_activation_quorum=0)
        self.assertInvalid("quorum", rule_change_activation_quorum=320 * 5 + 1)

    def test_supermajority_bounds(self):
        self.assertInvalid("supermajority", rule_change_activation_multiplier=5)

    def test_stake_enabled_formula(self):
        self.assertInvalid("stake enabled", stake_enabled_height=33)

    def test_stake_validation_before_enabled(self):
        self.assertInvalid("stake validation", stake_validation_height=31)

    def test_block_sizes_never_shrink(self):
        self.assertInvalid("shrink", maximum_block_sizes=(1310720, 1000000))

    def test_subsidy_must_decay(self):
        self.assertInvalid("must shrink at every", mul_subsidy=102)
        # A constant subsidy would never reach zero
        self.assertInvalid("must shrink at every", mul_subsidy=101)

    def test_block_sizes_must_be_reachable(self):
        """Only one max block size vote exists, so a third size could never apply"""
        self.assertInvalid("only 1 max block size vote",
                           maximum_block_sizes=(1000000, 1310720, 2000000))
        self.assertInvalid("only 0 max block size vote",
                           deployments={5: REGNET.deployments[5]})

    def test_pow_limit_bits(self):
        self.assertInvalid("pow limit bits", pow_limit=2**200)

    def test_upgrade_thresholds(self):
        self.assertInvalid("enforce", block_enforce_num_required=80)

    def test_checkpoints(self):
        self.assertInvalid("strictly increase",
                           checkpoints=(Checkpoint(5, "00" * 32), Checkpoint(4, "11" * 32)))

    def test_error_names_network(self):
        self.assertInvalid("^regnet: ", default_port="port")


if __name__ == '__main__':
    unittest.main(verbosity=2)
