from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from typing import Final, Protocol

from protocol import Hand

HASH_ALGORITHM: Final[str] = "sha256"
NONCE_BYTES: Final[int] = 32


class RandomExhausted(RuntimeError):
    """Raised when a scripted random source has no bytes left."""


class RandomSource(Protocol):
    def fill(self, size: int) -> bytes: ...


class SystemRandom:
    """Cryptographically-strong bytes from the operating system."""

    def fill(self, size: int) -> bytes:
        return secrets.token_bytes(size)


class FixedRandom:
    """Replays a scripted byte string. Used to make rounds deterministic."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def fill(self, size: int) -> bytes:
        if size > self.remaining:
            raise RandomExhausted(f"wanted {size} byte(s), {self.remaining} left")
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk


def generate_nonce(source: RandomSource, num_bytes: int = NONCE_BYTES) -> bytes:
    nonce = source.fill(num_bytes)
    if len(nonce) != num_bytes:
        raise RuntimeError(f"random source returned {len(nonce)} byte(s), wanted {num_bytes}")
    return nonce


def verification_string(nonce: bytes, hand: Hand) -> str:
    # bytes.hex() always renders two lowercase digits per byte.
    return f"{nonce.hex()}_{hand.name_token}"


def compute_commitment(nonce: bytes, hand: Hand) -> str:
    payload = verification_string(nonce, hand).encode("utf-8")
    return hashlib.new(HASH_ALGORITHM, payload).hexdigest()


def verify_commitment(*, expected_commitment: str, nonce_hex: str, hand: Hand) -> bool:
    try:
        nonce = bytes.fromhex(nonce_hex)
    except ValueError:
        return False
    computed = compute_commitment(nonce, hand)
    # compare_digest rejects non-ASCII str, so compare the encoded bytes.
    return secrets.compare_digest(expected_commitment.strip().lower().encode("utf-8"), computed.encode("ascii"))


@dataclass(frozen=True)
class Commitment:
    nonce: bytes
    hand: Hand
    digest: str

    @classmethod
    def create(cls, hand: Hand, nonce: bytes) -> "Commitment":
        return cls(nonce=nonce, hand=hand, digest=compute_commitment(nonce, hand))

    @property
    def nonce_hex(self) -> str:
        return self.nonce.hex()

    def verification_string(self) -> str:
        return verification_string(self.nonce, self.hand)

    def verify(self) -> bool:
        return verify_commitment(expected_commitment=self.digest, nonce_hex=self.nonce_hex, hand=self.hand)


def shell_command(commitment: Commitment) -> str:
    return f"echo -n {commitment.verification_string()} | shasum -a 256"
