"""Unit tests for calldata helpers."""

import pytest

from chaintx.abi import (
    address_bytes,
    decode_address,
    decode_return,
    decode_uint,
    encode_call,
    selector,
    split_signature,
)
from chaintx.errors import ContractCallError
from tests.helpers import DAI, WETH, address_word, word


class TestSplitSignature:
    def test_flat(self):
        assert split_signature("approve(address,uint256)") == ("approve", ["address", "uint256"])

    def test_no_arguments(self):
        assert split_signature("deposit()") == ("deposit", [])

    def test_tuple_argument(self):
        name, types = split_signature("f((address,uint24),uint256)")
        assert name == "f"
        assert types == ["(address,uint24)", "uint256"]

    def test_array_argument(self):
        assert split_signature("f(address[],uint256[2])") == ("f", ["address[]", "uint256[2]"])

    @pytest.mark.parametrize(
        "signature",
        ["approve", "(address)", "f((address)", "f(a))", "f(uint7)", "f(address)[2]"],
    )
    def test_malformed(self, signature):
        with pytest.raises(ValueError):
            split_signature(signature)


class TestEncodeCall:
    def test_selector(self):
        assert selector("transfer(address,uint256)").hex() == "a9059cbb"

    def test_encodes_arguments(self):
        data = encode_call("balanceOf(address)", [address_bytes(WETH)])
        assert data == selector("balanceOf(address)") + address_word(WETH)

    def test_argument_count(self):
        with pytest.raises(ValueError, match="takes 2 arguments"):
            encode_call("approve(address,uint256)", [address_bytes(WETH)])

    def test_address_bytes_rejects_garbage(self):
        with pytest.raises(ValueError):
            address_bytes("0x1234")


class TestDecode:
    def test_uint_words(self):
        data = word(7) + word(9)
        assert decode_uint(data) == 7
        assert decode_uint(data, 1) == 9

    def test_uint_too_short(self):
        with pytest.raises(ContractCallError, match="too short"):
            decode_uint(b"\x00" * 31)

    def test_address(self):
        assert decode_address(word(1) + address_word(DAI), 1) == DAI

    def test_return_tuple(self):
        assert decode_return(["uint256", "uint256"], word(1) + word(2)) == (1, 2)

    def test_return_failure(self):
        with pytest.raises(ContractCallError, match="Could not decode"):
            decode_return(["uint256", "uint256"], word(1))
