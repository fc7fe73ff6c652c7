"""Tests for the Hamming codec.
"""

import logging

import numpy as np
import pytest

from bitfec.codec import hamming as hamming_module
from bitfec.codec.hamming import (
    HammingCode,
    check_parity,
    decode,
    decode_block,
    encode,
    encode_block,
    is_power_of_2,
    parity_to_data,
    parity_to_length,
)
from bitfec.errors import BlockLengthError
from bitfec.testing import add_errors

from conftest import flip_bit


def sample_blocks(parity):
    """A handful of data blocks for the given parity count."""
    n = parity_to_data(parity)
    return [
        [False] * n,
        [True] * n,
        [bool(i % 2) for i in range(n)],
        [bool(i % 3 == 0) for i in range(n)],
        [i == n - 1 for i in range(n)],
    ]


class TestHammingSizes:
    """Test block size helpers."""

    def test_parity_to_data(self):
        """Test data bits per block."""
        assert parity_to_data(2) == 1
        assert parity_to_data(3) == 4
        assert parity_to_data(4) == 11
        assert parity_to_data(5) == 26
        assert parity_to_data(6) == 57
        assert parity_to_data(7) == 120

    def test_parity_to_length(self):
        """Test total bits per block."""
        assert parity_to_length(2) == 3
        assert parity_to_length(3) == 7
        assert parity_to_length(4) == 15
        assert parity_to_length(5) == 31
        assert parity_to_length(6) == 63
        assert parity_to_length(7) == 127

    def test_is_power_of_2(self):
        """Test parity slot detection."""
        for n in (1, 2, 4, 8, 16, 32, 64):
            assert is_power_of_2(n)
        for n in (3, 5, 9, 11, 17, 22, 24):
            assert not is_power_of_2(n)

    def test_code_properties(self):
        """Test HammingCode exposes the block layout."""
        code = HammingCode(4)
        assert code.data_length == 11
        assert code.block_length == 15
        assert code.parity_positions == (1, 2, 4, 8)

    @pytest.mark.parametrize("parity", [0, 1, -3, 3.0, True, "3"])
    def test_invalid_parity(self, parity):
        """Test parity counts below 2 or not integers."""
        with pytest.raises(ValueError, match="Parity"):
            HammingCode(parity)
        with pytest.raises(ValueError, match="Parity"):
            encode(b"\x00", parity)

    def test_numpy_parity(self):
        """Test numpy integers are accepted as parity counts."""
        code = HammingCode(np.int64(3))
        assert code.parity == 3
        assert type(code.parity) is int
        assert encode(b"hi", np.int64(3)) == encode(b"hi", 3)
        assert decode(encode(b"hi", np.int32(4)), np.uint8(4)) == decode(encode(b"hi", 4), 4)

    def test_no_upper_limit(self):
        """Test parity counts above 16 are valid."""
        code = HammingCode(17)
        assert code.data_length == 131054
        assert code.block_length == 131071
        assert code.parity_positions[-1] == 65536


class TestHammingEncodeBlock:
    """Test single block encoding."""

    def test_known_codeword(self):
        """Test the (7,4) codeword for 0001."""
        result = encode_block([False, False, False, True], 3)
        assert result == [True, True, False, True, False, False, True]

    def test_zero_codeword(self):
        """Test all-zero data gives an all-zero codeword."""
        assert encode_block([False] * 4, 3) == [False] * 7

    def test_smallest_code(self):
        """Test the (3,1) code repeats its single bit."""
        assert encode_block([True], 2) == [True, True, True]
        assert encode_block([False], 2) == [False, False, False]

    def test_data_in_order(self):
        """Test data bits land in the non-parity slots in order."""
        data = [bool(i % 3 == 0) for i in range(11)]
        encoded = encode_block(data, 4)
        assert [encoded[p - 1] for p in range(1, 16) if not is_power_of_2(p)] == data

    @pytest.mark.parametrize("parity", [2, 3, 4, 5])
    def test_codewords_check_clean(self, parity):
        """Test freshly encoded blocks have no parity mismatches."""
        for data in sample_blocks(parity):
            assert check_parity(encode_block(data, parity), parity) == []

    def test_wrong_length(self):
        """Test wrong data length is a contract violation."""
        with pytest.raises(BlockLengthError, match="4"):
            encode_block([True] * 5, 3)
        with pytest.raises(ValueError):
            encode_block([], 3)


class TestHammingDecodeBlock:
    """Test single block decoding."""

    def test_no_errors(self):
        """Test decoding a clean codeword."""
        assert decode_block([True, True, False, True, False, False, True], 3) == [
            False, False, False, True,
        ]

    def test_wrong_length(self):
        """Test wrong block length is a contract violation."""
        with pytest.raises(BlockLengthError, match="7"):
            decode_block([True] * 6, 3)

    @pytest.mark.parametrize("parity", [2, 3, 4, 5])
    def test_corrects_any_single_flip(self, parity):
        """Test every single-bit error is corrected."""
        for data in sample_blocks(parity):
            encoded = encode_block(data, parity)
            for i in range(len(encoded)):
                corrupted = list(encoded)
                corrupted[i] = not corrupted[i]
                assert decode_block(corrupted, parity) == data

    def test_syndrome_locates_data_bit(self):
        """Test the mismatching parity positions sum to the flipped position."""
        encoded = encode_block([True, False, True, True], 3)
        for position in (3, 5, 6, 7):
            corrupted = list(encoded)
            corrupted[position - 1] = not corrupted[position - 1]
            mismatches = check_parity(corrupted, 3)
            assert len(mismatches) >= 2
            assert sum(mismatches) == position

    @pytest.mark.parametrize("position", [1, 2, 4])
    def test_single_parity_mismatch_not_corrected(self, position):
        """Test one mismatching parity bit is not used to locate an error.

        Unlike textbook decoding, a lone mismatch leaves the block as is;
        the data is still right because parity bits are dropped.
        """
        data = [False, True, True, False]
        corrupted = encode_block(data, 3)
        corrupted[position - 1] = not corrupted[position - 1]
        assert check_parity(corrupted, 3) == [position]
        assert decode_block(corrupted, 3) == data

    def test_double_error_miscorrects(self):
        """Test two flipped bits silently give wrong data."""
        data = [False, False, False, True]
        corrupted = encode_block(data, 3)
        corrupted[0] = not corrupted[0]
        corrupted[1] = not corrupted[1]
        assert check_parity(corrupted, 3) == [1, 2]
        assert decode_block(corrupted, 3) == [True, False, False, True]

    def test_accepts_int_bits(self):
        """Test 0/1 integers are accepted as bits."""
        assert decode_block([1, 1, 0, 1, 0, 0, 1], 3) == [False, False, False, True]


class TestHammingBytes:
    """Test byte-level encode/decode."""

    def test_single_byte(self):
        """Test encoding one byte with the (7,4) code."""
        encoded = encode(b"\x01", 3)
        assert encoded == b"\x01\xa4"
        assert decode(encoded, 3) == b"\x01"

    def test_round_trip(self):
        """Test a four-byte round trip with the (7,4) code."""
        data = bytes([1, 2, 34, 56])
        assert decode(encode(data, 3), 3) == data

    def test_large_round_trip(self):
        """Test the (15,11) code on a buffer that is not a whole number of blocks."""
        data = bytes([1, 2, 34, 54])
        encoded = encode(data, 4)
        assert len(encoded) == 6
        assert decode(encoded, 4) == data

    @pytest.mark.parametrize("parity,length", [(2, 5), (3, 9), (4, 11), (5, 13), (6, 57)])
    def test_round_trip_whole_blocks(self, parity, length):
        """Test round trips for buffers that fill whole data blocks."""
        data = bytes((i * 37 + 11) % 256 for i in range(length))
        assert decode(encode(data, parity), parity) == data

    def test_empty(self):
        """Test an empty buffer."""
        assert encode(b"", 3) == b""
        assert decode(b"", 3) == b""

    def test_every_single_bit_flip(self):
        """Test any one flipped bit in the encoded buffer is corrected."""
        data = b"Hamming"
        encoded = encode(data, 3)
        for i in range(len(encoded) * 8):
            assert decode(flip_bit(encoded, i), 3) == data

    def test_hamming_errors(self, rng):
        """Test recovery from one flip in every other byte."""
        data = bytes([127, 0, 80, 12])
        for _ in range(20):
            corrupted = add_errors(encode(data, 3), rng, every_other=True)
            assert decode(corrupted, 3) == data

    def test_code_object(self):
        """Test the HammingCode wrapper."""
        code = HammingCode(3)
        assert code.decode(code.encode(b"hi")) == b"hi"


class TestHammingLongBlocks:
    """Test codes with more than 16 parity bits."""

    def test_block_correction(self):
        """Test a flipped data bit is corrected in a 131071-bit block."""
        data = [i % 5 == 0 for i in range(parity_to_data(17))]
        block = encode_block(data, 17)
        assert check_parity(block, 17) == []
        block[999] = not block[999]
        assert decode_block(block, 17) == data

    def test_byte_round_trip(self):
        """Test encoding and decoding bytes with 17 parity bits."""
        encoded = encode(b"\x01", 17)
        # one padded codeword of 131071 bits
        assert len(encoded) == 16384
        expected = b"\x01" + bytes(16380)
        assert decode(encoded, 17) == expected
        assert decode(flip_bit(encoded, 5000), 17) == expected


class TestHammingLogging:
    """Test the per-block debug trace."""

    def test_debug_trace(self, caplog):
        """Test blocks are traced at DEBUG level."""
        caplog.set_level(logging.DEBUG, logger="bitfec.codec.hamming")
        encode(b"\x01", 3)
        assert "Hamming(3) encode 0001 -> 1101001" in caplog.text

        decode(flip_bit(encode(b"\x01", 3), 9), 3)
        assert "Hamming(3) corrected bit at position 3" in caplog.text

    def test_no_formatting_without_debug(self, caplog, monkeypatch):
        """Test bit strings are not built when DEBUG is off."""
        caplog.set_level(logging.WARNING, logger="bitfec.codec.hamming")

        def fail(bits):
            raise AssertionError("bit string built with DEBUG disabled")

        monkeypatch.setattr(hamming_module, "_bits_str", fail)
        assert decode(encode(b"\x01", 3), 3) == b"\x01"
        assert not [r for r in caplog.records if r.name == "bitfec.codec.hamming"]
