import pytest

import tree_config
from basic_data_structure import InvalidLeafRecord, LeafRecord
from tree_config import LeafEncoding, get_tree_config, load_config_from_env
from conftest import ACCOUNT_B, AMOUNT_B


def test_default_config():
    config = get_tree_config()
    assert config.encoding is LeafEncoding.PLAIN
    assert config.verbose_logging is False


@pytest.mark.parametrize("value", ["indexed", "INDEXED", " Indexed ", LeafEncoding.INDEXED])
def test_parse_encoding(value):
    assert LeafEncoding.parse(value) is LeafEncoding.INDEXED


def test_parse_unknown_encoding():
    with pytest.raises(ValueError):
        LeafEncoding.parse("salted")


def test_set_and_reset():
    tree_config.set_leaf_encoding("indexed", verbose_logging=True, unknown_option=1)
    assert get_tree_config().encoding is LeafEncoding.INDEXED
    assert get_tree_config().verbose_logging is True
    assert not hasattr(get_tree_config(), "unknown_option")
    tree_config.reset_to_default_config()
    assert get_tree_config().encoding is LeafEncoding.PLAIN


def test_load_config_from_env():
    config = load_config_from_env({"MERKLE_LEAF_ENCODING": "indexed", "MERKLE_VERBOSE_LOGGING": "yes"})
    assert config.encoding is LeafEncoding.INDEXED
    assert config.verbose_logging is True


def test_load_config_from_env_ignores_missing(monkeypatch):
    monkeypatch.delenv("MERKLE_LEAF_ENCODING", raising=False)
    monkeypatch.delenv("MERKLE_VERBOSE_LOGGING", raising=False)
    assert load_config_from_env().encoding is LeafEncoding.PLAIN


def test_load_config_from_env_rejects_unknown():
    with pytest.raises(ValueError):
        load_config_from_env({"MERKLE_LEAF_ENCODING": "sorted"})


def test_leaf_record_normalizes_account():
    record = LeafRecord(ACCOUNT_B, AMOUNT_B)
    assert record.account == bytes.fromhex(ACCOUNT_B[2:])
    assert record.account_hex == ACCOUNT_B.lower()
    assert record == LeafRecord.from_value((ACCOUNT_B.lower(), AMOUNT_B))


def test_leaf_record_is_frozen():
    record = LeafRecord(ACCOUNT_B, AMOUNT_B)
    with pytest.raises(AttributeError):
        record.amount = 1


def test_leaf_record_from_value_passthrough():
    record = LeafRecord(ACCOUNT_B, AMOUNT_B, 3)
    assert LeafRecord.from_value(record) is record
    assert LeafRecord.from_value([ACCOUNT_B, AMOUNT_B, 3]) == record


@pytest.mark.parametrize("value", ["not-a-record", (ACCOUNT_B,), (ACCOUNT_B, 1, 2, 3)])
def test_leaf_record_from_value_rejects(value):
    with pytest.raises(InvalidLeafRecord):
        LeafRecord.from_value(value)


@pytest.mark.parametrize("value,expected", [("no", False), ("0", False), ("Yes", True), (True, True), (False, False)])
def test_set_leaf_encoding_parses_verbose_flag(value, expected):
    tree_config.set_leaf_encoding("plain", verbose_logging=value)
    assert get_tree_config().verbose_logging is expected
