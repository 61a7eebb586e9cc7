import dataclasses
import itertools
import re

import pytest

from md5digest import MD5, Digest

ABC = "900150983cd24fb0d6963f7d28e17f72"


def test_hex_and_bin_shape():
    d = MD5(b"abc").finalize()
    assert d.hex() == ABC
    assert str(d) == ABC
    assert re.fullmatch(r"[0-9a-f]{32}", d.hex())
    assert re.fullmatch(r"[01]{128}", d.bin())


def test_bin_is_msb_first():
    d = Digest(bytes([0x80, 0x01]) + bytes(14))
    assert d.bin().startswith("1000000000000001")
    assert d.bin()[16:] == "0" * 112


def test_bytes_access():
    d = MD5(b"abc").finalize()
    raw = bytes.fromhex(ABC)
    assert bytes(d) == raw
    assert len(d) == 16
    assert d[0] == 0x90
    assert d[-1] == 0x72
    assert list(d) == list(raw)


def test_fromhex_roundtrip():
    assert Digest.fromhex(ABC.upper()) == MD5(b"abc").finalize()
    assert repr(Digest.fromhex(ABC)) == f"Digest('{ABC}')"


@pytest.mark.parametrize("text", ["", "00", "zz" * 16, ABC + "00"])
def test_fromhex_rejects_malformed(text):
    with pytest.raises(ValueError):
        Digest.fromhex(text)


@pytest.mark.parametrize("value", [b"", bytes(15), bytes(17)])
def test_wrong_length(value):
    with pytest.raises(ValueError):
        Digest(value)


def test_normalizes_bytearray():
    d = Digest(bytearray(16))
    assert isinstance(d.value, bytes)
    assert d == Digest(bytes(16))


def test_immutable_and_hashable():
    d = Digest(bytes(16))
    with pytest.raises(dataclasses.FrozenInstanceError):
        d.value = bytes(16)
    assert len({d, Digest(bytes(16)), MD5(b"abc").finalize()}) == 2


def test_first_byte_is_most_significant():
    low = Digest(b"\x00" + b"\xff" * 15)
    high = Digest(b"\x01" + b"\x00" * 15)
    assert low < high
    assert high > low
    assert low <= high
    assert not high <= low


def test_ordering_is_consistent():
    digests = [MD5(m).finalize() for m in (b"", b"a", b"abc", b"message digest")]
    digests.append(Digest(digests[2].value))
    for a, b in itertools.product(digests, repeat=2):
        assert (a == b) == (not (a < b) and not (a > b))
        assert (a <= b) == (a < b or a == b)
        assert (a >= b) == (a > b or a == b)
        assert (a != b) == (not a == b)


def test_ordering_matches_bytes():
    digests = [MD5(bytes([i])).finalize() for i in range(20)]
    assert [d.value for d in sorted(digests)] == sorted(d.value for d in digests)


def test_other_types_do_not_compare():
    d = MD5(b"abc").finalize()
    assert d != bytes(d)
    with pytest.raises(TypeError):
        d < bytes(d)
