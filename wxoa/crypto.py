"""AES (CBC/ECB) and RSA helpers."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from enum import Enum

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_AES_BLOCK_SIZE = 16
_AES_KEY_SIZES = (16, 24, 32)

_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([^-\r\n]*)-----\r?\n(.*?)-----END \1-----",
    re.DOTALL,
)


class PaddingMode(str, Enum):
    """Padding applied before AES encryption."""

    ZERO = "ZERO"
    PKCS5 = "PKCS#5"
    PKCS7 = "PKCS#7"


def zero_padding(data: bytes, block_size: int) -> bytes:
    """Append zero bytes up to the next block boundary (always at least one)."""
    pad = block_size - len(data) % block_size
    return data + b"\x00" * pad


def zero_unpadding(data: bytes) -> bytes:
    """Strip trailing zero bytes."""
    return data.rstrip(b"\x00")


def pkcs5_padding(data: bytes, block_size: int) -> bytes:
    """Append PKCS#5/#7 padding for the given block size."""
    pad = block_size - len(data) % block_size
    return data + bytes([pad]) * pad


def pkcs5_unpadding(data: bytes, block_size: int) -> bytes:
    """Remove PKCS#5/#7 padding; an out-of-range pad byte leaves the data unchanged."""
    if not data:
        raise ValueError("cannot unpad empty data")
    pad = data[-1]
    if pad < 1 or pad > block_size:
        pad = 0
    return data[: len(data) - pad]


def _check_key(key: bytes) -> None:
    if len(key) not in _AES_KEY_SIZES:
        raise ValueError(f"invalid AES key size {len(key)}")


def _check_full_blocks(data: bytes) -> None:
    if len(data) % _AES_BLOCK_SIZE:
        raise ValueError("input not full blocks")


def _pad(data: bytes, key: bytes, mode: PaddingMode | None) -> bytes:
    if mode is PaddingMode.ZERO:
        return zero_padding(data, _AES_BLOCK_SIZE)
    if mode is PaddingMode.PKCS5:
        return pkcs5_padding(data, _AES_BLOCK_SIZE)
    if mode is PaddingMode.PKCS7:
        return pkcs5_padding(data, len(key))
    return data


def _unpad(data: bytes, key: bytes, mode: PaddingMode | None) -> bytes:
    if mode is PaddingMode.ZERO:
        return zero_unpadding(data)
    if mode is PaddingMode.PKCS5:
        return pkcs5_unpadding(data, _AES_BLOCK_SIZE)
    if mode is PaddingMode.PKCS7:
        return pkcs5_unpadding(data, len(key))
    return data


def _run(cipher: Cipher, data: bytes, encrypt: bool) -> bytes:
    _check_full_blocks(data)
    ctx = cipher.encryptor() if encrypt else cipher.decryptor()
    return ctx.update(data) + ctx.finalize()


@dataclass(frozen=True)
class CBCCrypto:
    """AES in CBC mode; ``mode`` of ``None`` means no padding."""

    key: bytes
    iv: bytes
    mode: PaddingMode | None

    def __post_init__(self) -> None:
        _check_key(self.key)
        if len(self.iv) != _AES_BLOCK_SIZE:
            raise ValueError("IV length must equal block size")
        if self.mode is not None:
            object.__setattr__(self, "mode", PaddingMode(self.mode))

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self.key), modes.CBC(self.iv))

    def encrypt(self, plain_text: bytes) -> bytes:
        data = _pad(plain_text, self.key, self.mode)
        return _run(self._cipher(), data, encrypt=True)

    def decrypt(self, cipher_text: bytes) -> bytes:
        data = _run(self._cipher(), cipher_text, encrypt=False)
        return _unpad(data, self.key, self.mode)


@dataclass(frozen=True)
class ECBCrypto:
    """AES in ECB mode; ``mode`` of ``None`` means no padding."""

    key: bytes
    mode: PaddingMode | None

    def __post_init__(self) -> None:
        _check_key(self.key)
        if self.mode is not None:
            object.__setattr__(self, "mode", PaddingMode(self.mode))

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self.key), modes.ECB())

    def encrypt(self, plain_text: bytes) -> bytes:
        data = _pad(plain_text, self.key, self.mode)
        return _run(self._cipher(), data, encrypt=True)

    def decrypt(self, cipher_text: bytes) -> bytes:
        data = _run(self._cipher(), cipher_text, encrypt=False)
        return _unpad(data, self.key, self.mode)


def _pem_der(pem: bytes | str) -> bytes | None:
    if isinstance(pem, str):
        pem = pem.encode("ascii", errors="ignore")
    match = _PEM_BLOCK.search(pem)
    if match is None:
        return None
    lines = [line for line in match.group(2).splitlines() if b":" not in line]
    try:
        return base64.b64decode(b"".join(line.strip() for line in lines), validate=True)
    except (binascii.Error, ValueError):
        return None


def rsa_encrypt(data: bytes, public_key: bytes | str) -> bytes:
    """Encrypt with PKCS#1 v1.5 using a PEM-encoded PKIX RSA public key."""
    der = _pem_der(public_key)
    if der is None:
        raise ValueError("invalid rsa public key")
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise ValueError("invalid rsa public key") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise ValueError("invalid rsa public key")
    return key.encrypt(data, asym_padding.PKCS1v15())


def rsa_decrypt(cipher_text: bytes, private_key: bytes | str) -> bytes:
    """Decrypt PKCS#1 v1.5 data using a PEM-encoded RSA private key."""
    der = _pem_der(private_key)
    if der is None:
        raise ValueError("invalid rsa private key")
    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ValueError("invalid rsa private key") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ValueError("invalid rsa private key")
    return key.decrypt(cipher_text, asym_padding.PKCS1v15())