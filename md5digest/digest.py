from __future__ import annotations

from dataclasses import dataclass

DIGEST_SIZE = 16


@dataclass(frozen=True, order=True)
class Digest:
    """16-byte MD5 result. Orders as a big-endian byte string."""
    value: bytes

    def __post_init__(self):
        if isinstance(self.value, (int, str)):
            raise TypeError(f"digest value must be bytes-like, not {type(self.value).__name__}")
        try:
            value = bytes(self.value)
        except TypeError:
            raise TypeError(f"digest value must be bytes-like, not {type(self.value).__name__}") from None
        if len(value) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(value)}")
        object.__setattr__(self, "value", value)

    @classmethod
    def fromhex(cls, text: str) -> Digest:
        if len(text) != 2 * DIGEST_SIZE:
            raise ValueError(f"expected {2 * DIGEST_SIZE} hex characters, got {len(text)}")
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        return self.value.hex()

    def bin(self) -> str:
        return "".join(format(b, "08b") for b in self.value)

    def __bytes__(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return DIGEST_SIZE

    def __getitem__(self, index):
        return self.value[index]

    def __iter__(self):
        return iter(self.value)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Digest('{self.hex()}')"
