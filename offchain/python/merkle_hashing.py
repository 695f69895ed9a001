#!/usr/bin/env python3
"""
OpenZeppelin-compatible hashing primitives.

Leaves are keccak256 over the packed record bytes, internal nodes are
keccak256 over the byte-wise sorted pair. Byte layouts match Solidity's
``keccak256(abi.encodePacked(...))`` so roots and proofs can be checked by
``MerkleProof.verify`` on-chain.
"""

from eth_utils import is_bytes, keccak, to_bytes

from basic_data_structure import LeafRecord, check_uint256, normalize_account

HASH_LENGTH = 32
UINT256_LENGTH = 32


def as_hash(value):
    """Coerce a 32-byte hash given as bytes or 0x-hex string."""
    if is_bytes(value):
        data = bytes(value)
    elif isinstance(value, str):
        try:
            data = to_bytes(hexstr=value)
        except ValueError:
            raise ValueError(f"Invalid hex hash: {value!r}") from None
    else:
        raise ValueError(f"Hash must be bytes or hex string, got {type(value).__name__}")
    if len(data) != HASH_LENGTH:
        raise ValueError(f"Hash must be {HASH_LENGTH} bytes, got {len(data)}")
    return data


def encode_leaf(account, amount, index=None):
    """Packed leaf bytes: [index_be32 ||] account20 || amount_be32.

    All fields are validated before anything is concatenated.
    """
    account_bytes = normalize_account(account)
    amount_bytes = check_uint256(amount, "amount").to_bytes(UINT256_LENGTH, "big")
    if index is None:
        return account_bytes + amount_bytes
    index_bytes = check_uint256(index, "index").to_bytes(UINT256_LENGTH, "big")
    return index_bytes + account_bytes + amount_bytes


def hash_leaf(account, amount, index=None):
    """keccak256 of the packed leaf; indexed encoding when index is given."""
    return keccak(encode_leaf(account, amount, index))


def hash_record(record, index=None):
    """Hash a record or (account, amount[, index]) tuple; an explicit index overrides the record's."""
    record = LeafRecord.from_value(record)
    if index is None:
        index = record.index
    return hash_leaf(record.account, record.amount, index)


def combine_and_hash(hash1, hash2):
    """Sorted-pair parent hash: keccak256(min || max)."""
    combined = hash1 + hash2 if hash1 < hash2 else hash2 + hash1
    return keccak(combined)


def next_layer(layer):
    """Parent layer; a trailing odd element is promoted unchanged."""
    parents = []
    for i in range(0, len(layer) - 1, 2):
        parents.append(combine_and_hash(layer[i], layer[i + 1]))
    if len(layer) % 2 != 0:
        parents.append(layer[-1])
    return parents


def build_tree_layers(leaves):
    """Build tree layers from leaves: [leaves, level1, ..., [root]].

    Empty input gives no layers at all.
    """
    if not leaves:
        return []
    layers = [list(leaves)]
    while len(layers[-1]) > 1:
        layers.append(next_layer(layers[-1]))
    return layers


def process_proof(leaf, proof):
    """Fold a leaf upward through its sibling path."""
    computed_hash = leaf
    for sibling in proof:
        computed_hash = combine_and_hash(computed_hash, sibling)
    return computed_hash
