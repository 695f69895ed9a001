"""
Tree Configuration for Leaf Encoding

This module selects how leaves are encoded before hashing. The choice is fixed
when a tree is built, and the two modes produce different, non-interchangeable
roots:
1. Plain encoding   -> keccak256(account || amount)
2. Indexed encoding -> keccak256(index || account || amount)
"""

import os
from dataclasses import dataclass, replace
from enum import Enum


class LeafEncoding(Enum):
    """Leaf encoding modes understood by on-chain verifiers."""
    PLAIN = "plain"       # abi.encodePacked(address, uint256)
    INDEXED = "indexed"   # abi.encodePacked(uint256, address, uint256)

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown leaf encoding: {value!r}") from None


@dataclass
class TreeConfig:
    """Configuration captured by a tree at construction time."""
    encoding: LeafEncoding = LeafEncoding.PLAIN

    # Debugging
    verbose_logging: bool = False   # Emit build summaries at INFO instead of DEBUG


TREE_CONFIG = TreeConfig()

_TRUTHY = {"1", "true", "yes", "on"}


def parse_flag(value) -> bool:
    """Interpret a bool or a "1/true/yes/on" style string."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def get_tree_config() -> TreeConfig:
    """Get current tree configuration."""
    return TREE_CONFIG


def snapshot_config() -> TreeConfig:
    """Copy of the current configuration, safe to hold on to."""
    return replace(TREE_CONFIG)


def set_leaf_encoding(encoding, **kwargs):
    """Change the default leaf encoding for trees built from now on."""
    TREE_CONFIG.encoding = LeafEncoding.parse(encoding)
    for key, value in kwargs.items():
        if hasattr(TREE_CONFIG, key):
            if key == "verbose_logging":
                value = parse_flag(value)
            setattr(TREE_CONFIG, key, value)
    return TREE_CONFIG


def reset_to_default_config():
    """Reset configuration to default values."""
    global TREE_CONFIG
    TREE_CONFIG = TreeConfig()
    return TREE_CONFIG


def load_config_from_env(environ=None) -> TreeConfig:
    """Apply MERKLE_LEAF_ENCODING / MERKLE_VERBOSE_LOGGING overrides."""
    env = os.environ if environ is None else environ
    encoding = env.get("MERKLE_LEAF_ENCODING")
    if encoding:
        TREE_CONFIG.encoding = LeafEncoding.parse(encoding)
    verbose = env.get("MERKLE_VERBOSE_LOGGING")
    if verbose is not None:
        TREE_CONFIG.verbose_logging = parse_flag(verbose)
    return TREE_CONFIG
