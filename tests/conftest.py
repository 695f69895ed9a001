import pytest

import tree_config
from basic_data_structure import LeafRecord

ACCOUNT_A = "0x00393d62f17b07e64f7cdcdf9bdc2fd925b20bba"
AMOUNT_A = 1840233889215604334017
ACCOUNT_B = "0x008EF27b8d0B9f8c1FAdcb624ef5FebE4f11fa9f"
AMOUNT_B = 73750290420694562195
EXPECTED_ROOT = "0x54f23346bacf6e33c89e27917b92354a0b89c670bc67918bd17debf369bbd3fa"


@pytest.fixture(autouse=True)
def default_config():
    tree_config.reset_to_default_config()
    yield
    tree_config.reset_to_default_config()


@pytest.fixture
def two_records():
    return [(ACCOUNT_A, AMOUNT_A), (ACCOUNT_B, AMOUNT_B)]


@pytest.fixture
def many_records():
    return [LeafRecord("0x" + f"{i + 1:040x}", (i + 1) * 10**18) for i in range(11)]
