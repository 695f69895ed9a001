#!/usr/bin/env python3
"""
Airdrop Merkle Tree

This module builds a flat, OpenZeppelin-compatible Merkle tree over
(account, amount) records and generates single proofs for individual leaves.
The root is what a distributor contract stores; each claimant submits its
leaf data and proof, which any verifier can check without the full tree.
"""

import logging
from bisect import bisect_left
from dataclasses import replace
from typing import Optional

from eth_utils import to_hex

from basic_data_structure import LeafRecord
from merkle_hashing import as_hash, build_tree_layers, hash_leaf, hash_record, process_proof
from tree_config import LeafEncoding, TreeConfig, snapshot_config

logger = logging.getLogger(__name__)


class AirdropMerkleTree:
    """Immutable Merkle tree over sorted, deduplicated leaf hashes."""

    def __init__(self, records, encoding=None, config: Optional[TreeConfig] = None):
        self.config = replace(config) if config is not None else snapshot_config()
        if encoding is not None:
            self.config.encoding = LeafEncoding.parse(encoding)
        self.encoding = self.config.encoding

        # Validate everything before hashing anything
        normalized = [LeafRecord.from_value(r) for r in records]
        hashes = [self.leaf_hash_for(record, position) for position, record in enumerate(normalized)]

        # sort and deduplicate to get the canonical leaf order
        hashes.sort()
        leaves = []
        for leaf in hashes:
            if leaves and leaves[-1] == leaf:
                logger.debug("Dropping duplicate leaf %s", to_hex(leaf))
                continue
            leaves.append(leaf)

        self._leaves = tuple(leaves)
        self._layers = tuple(tuple(layer) for layer in build_tree_layers(leaves))

        level = logging.INFO if self.config.verbose_logging else logging.DEBUG
        logger.log(
            level,
            "Built %s tree: %d records -> %d leaves (%d duplicates), %d layers, root %s",
            self.encoding.value,
            len(normalized),
            len(self._leaves),
            len(normalized) - len(self._leaves),
            len(self._layers),
            self.merkle_root_hex,
        )

    def leaf_hash_for(self, record, position=None):
        """Leaf hash of a record under this tree's encoding.

        In indexed mode a record without its own index takes ``position``
        (its place in the input, before sorting).
        """
        record = LeafRecord.from_value(record)
        if self.encoding is LeafEncoding.PLAIN:
            return hash_leaf(record.account, record.amount)
        index = record.index if record.index is not None else position
        if index is None:
            raise ValueError("Indexed encoding needs an index on the record or a position")
        return hash_leaf(record.account, record.amount, index)

    @property
    def leaves(self):
        return self._leaves

    @property
    def layers(self):
        return self._layers

    @property
    def layer_count(self):
        return len(self._layers)

    def leaves_length(self):
        """Number of unique leaves in the tree."""
        return len(self._leaves)

    def get_root(self):
        """Root hash, or None for a tree built from no records."""
        if not self._layers:
            return None
        return self._layers[-1][0]

    @property
    def merkle_root_hex(self):
        root = self.get_root()
        return to_hex(root) if root is not None else None

    def _position(self, leaf):
        i = bisect_left(self._leaves, leaf)
        if i < len(self._leaves) and self._leaves[i] == leaf:
            return i
        return None

    def contains(self, leaf):
        return self._position(as_hash(leaf)) is not None

    def __contains__(self, leaf):
        return self.contains(leaf)

    def get_proof(self, leaf):
        """Sibling path for one leaf, lowest layer first; None if the leaf is absent."""
        leaf = as_hash(leaf)
        index = self._position(leaf)
        if index is None:
            logger.debug("Leaf %s not in tree", to_hex(leaf))
            return None

        proof = []
        for layer in self._layers[:-1]:  # Exclude root layer
            sibling_index = index ^ 1
            # An odd last element is promoted and has no sibling
            if sibling_index < len(layer):
                proof.append(layer[sibling_index])
            index //= 2
        return proof

    def verify_proof(self, leaf, proof, root=None):
        """Check a proof against ``root`` (defaults to this tree's root)."""
        return verify(leaf, proof, self.get_root() if root is None else root)

    def generate_single_proofs_for_leaves(self, leaf_hashes):
        """Generate an independent proof for each requested leaf."""
        all_proofs = []
        for leaf in leaf_hashes:
            proof = self.get_proof(leaf)
            all_proofs.append({
                'leaf_hash': as_hash(leaf),
                'proof': proof,
                'proof_size_bytes': len(proof) * 32 if proof is not None else 0,
            })
        return all_proofs

    def __repr__(self):
        return f"AirdropMerkleTree({self.encoding.value}, leaves={len(self._leaves)}, root={self.merkle_root_hex})"


# --- Functional API ---

def build(records, encoding=None):
    return AirdropMerkleTree(records, encoding=encoding)


def root(tree):
    return tree.get_root()


def proof(tree, leaf):
    return tree.get_proof(leaf)


def verify(leaf, proof, claimed_root):
    """Standalone proof check; needs no tree, only leaf, proof and root.

    Sibling order within each pair does not matter because pairs are sorted
    before hashing. An empty proof verifies iff the leaf is the root; a
    missing proof or root (absent leaf, empty tree) never verifies.
    """
    if proof is None or claimed_root is None:
        return False
    leaf = as_hash(leaf)
    siblings = [as_hash(p) for p in proof]
    return process_proof(leaf, siblings) == as_hash(claimed_root)


def leaf_hash(record, index=None, encoding=None):
    """Leaf hash of a record.

    Without ``encoding`` the indexed form is used when an index is given or
    carried by the record. With ``encoding`` the hash matches what a tree
    built in that mode stores: plain drops any index, indexed requires one.
    """
    record = LeafRecord.from_value(record)
    if encoding is None:
        return hash_record(record, index)
    if LeafEncoding.parse(encoding) is LeafEncoding.PLAIN:
        return hash_leaf(record.account, record.amount)
    if index is None:
        index = record.index
    if index is None:
        raise ValueError("Indexed encoding needs an index on the record or as an argument")
    return hash_leaf(record.account, record.amount, index)


def leaf_count(tree):
    return tree.leaves_length()
