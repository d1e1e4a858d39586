import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from wxoa.crypto import (
    CBCCrypto,
    ECBCrypto,
    PaddingMode,
    pkcs5_padding,
    pkcs5_unpadding,
    rsa_decrypt,
    rsa_encrypt,
    zero_padding,
    zero_unpadding,
)

KEY16 = bytes(range(16))
KEY32 = bytes(range(32))
IV = bytes(range(100, 116))


@pytest.fixture(scope="module")
def rsa_pems():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return public_pem, private_pem


@pytest.mark.parametrize("length", range(0, 33))
def test_pkcs5_padding_round_trip(length):
    data = b"x" * length
    padded = pkcs5_padding(data, 16)
    assert len(padded) % 16 == 0
    assert len(padded) > length
    assert pkcs5_unpadding(padded, 16) == data


@pytest.mark.parametrize("length", range(0, 33))
def test_zero_padding_round_trip(length):
    data = b"y" * length
    padded = zero_padding(data, 16)
    assert len(padded) % 16 == 0
    assert len(padded) > length
    assert zero_unpadding(padded) == data


def test_pkcs5_padding_full_block_for_empty():
    assert pkcs5_padding(b"", 16) == bytes([16]) * 16


def test_zero_padding_value():
    assert zero_padding(b"ab", 4) == b"ab\x00\x00"


@pytest.mark.parametrize("data", [b"abc\x00", b"abcd"])
def test_pkcs5_unpadding_ignores_invalid_pad(data):
    assert pkcs5_unpadding(data, 16) == data


def test_pkcs5_unpadding_empty_raises():
    with pytest.raises(ValueError):
        pkcs5_unpadding(b"", 16)


def test_ecb_known_answer():
    key = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
    plain = bytes.fromhex("00112233445566778899aabbccddeeff")
    cipher_text = ECBCrypto(key, PaddingMode.ZERO).encrypt(plain)
    assert cipher_text[:16] == bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a")


@pytest.mark.parametrize("mode", list(PaddingMode))
@pytest.mark.parametrize("key", [KEY16, KEY32])
def test_cbc_round_trip(mode, key):
    crypto = CBCCrypto(key, IV, mode)
    cipher_text = crypto.encrypt(b"hello world")
    assert len(cipher_text) % 16 == 0
    assert crypto.decrypt(cipher_text) == b"hello world"


@pytest.mark.parametrize("mode", list(PaddingMode))
@pytest.mark.parametrize("key", [KEY16, KEY32])
def test_ecb_round_trip(mode, key):
    crypto = ECBCrypto(key, mode)
    cipher_text = crypto.encrypt(b"hello world, again")
    assert crypto.decrypt(cipher_text) == b"hello world, again"


def test_cbc_accepts_mode_string():
    crypto = CBCCrypto(KEY16, IV, "PKCS#5")
    assert crypto.decrypt(crypto.encrypt(b"data")) == b"data"


def test_cbc_iv_changes_output():
    first = CBCCrypto(KEY16, IV, PaddingMode.PKCS5).encrypt(b"same text")
    second = CBCCrypto(KEY16, bytes(16), PaddingMode.PKCS5).encrypt(b"same text")
    assert first != second


def test_ecb_equal_blocks_give_equal_output():
    cipher_text = ECBCrypto(KEY16, PaddingMode.PKCS5).encrypt(b"A" * 32)
    assert cipher_text[:16] == cipher_text[16:32]


def test_pkcs7_pads_to_key_length():
    cipher_text = CBCCrypto(KEY32, IV, PaddingMode.PKCS7).encrypt(b"abc")
    assert len(cipher_text) % 32 == 0


def test_pkcs7_with_24_byte_key_rejects_partial_block():
    with pytest.raises(ValueError):
        CBCCrypto(bytes(24), IV, PaddingMode.PKCS7).encrypt(b"")


def test_no_padding_requires_full_blocks():
    crypto = ECBCrypto(KEY16, None)
    assert crypto.decrypt(crypto.encrypt(b"x" * 16)) == b"x" * 16
    with pytest.raises(ValueError):
        crypto.encrypt(b"x" * 5)


def test_cbc_bad_iv():
    with pytest.raises(ValueError):
        CBCCrypto(KEY16, b"short", PaddingMode.PKCS5)


def test_bad_key_size():
    with pytest.raises(ValueError):
        ECBCrypto(b"k" * 10, PaddingMode.PKCS5)


def test_decrypt_partial_block_raises():
    with pytest.raises(ValueError):
        CBCCrypto(KEY16, IV, PaddingMode.PKCS5).decrypt(b"x" * 17)


def test_rsa_round_trip(rsa_pems):
    public_pem, private_pem = rsa_pems
    cipher_text = rsa_encrypt(b"message", public_pem)
    assert rsa_decrypt(cipher_text, private_pem) == b"message"


def test_rsa_encrypt_is_randomised(rsa_pems):
    public_pem, private_pem = rsa_pems
    first = rsa_encrypt(b"message", public_pem)
    second = rsa_encrypt(b"message", public_pem)
    assert len(first) == 256
    assert len(second) == 256
    assert first != second
    assert rsa_decrypt(first, private_pem) == b"message"
    assert rsa_decrypt(second, private_pem) == b"message"


def test_rsa_encrypt_invalid_pem():
    with pytest.raises(ValueError):
        rsa_encrypt(b"message", b"not a pem")


def test_rsa_encrypt_rejects_non_rsa_key():
    ec_public_pem = ec.generate_private_key(ec.SECP256R1()).public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    with pytest.raises(ValueError):
        rsa_encrypt(b"message", ec_public_pem)


def test_rsa_decrypt_rejects_public_key(rsa_pems):
    public_pem, _ = rsa_pems
    cipher_text = rsa_encrypt(b"message", public_pem)
    with pytest.raises(ValueError):
        rsa_decrypt(cipher_text, public_pem)