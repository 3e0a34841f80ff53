"""Tests for the AES-256-CBC message codec."""
import base64

import pytest
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad

from password_crypto.cipher import (MessageCipher, decrypt, encrypt,
                                    encrypt_with_iv)
from password_crypto.errors import (CodecError, InvalidEncoding,
                                    InvalidIVLength, InvalidKeyLength,
                                    InvalidUtf8, MalformedMessage,
                                    PaddingError)

from .vectors import (FIXED_IV, FIXED_KEY, FIXED_VECTORS, ZERO_IV,
                      ZERO_KEY, ZERO_VECTORS)

PLAINTEXTS = [
    '',
    'a',
    'test',
    'MyPassword123',
    '0123456789abcdef',
    '0123456789abcdef0',
    'x' * 100,
    'pässwörd 🔑',
    'пароль',
    '密码',
    ' leading and trailing spaces ',
    'line\nbreak\ttab',
    '\x00nul',
]


def _raw_message(key, iv, block):
    """Seal a raw (already padded or deliberately broken) block."""
    ciphertext = AES.new(key, AES.MODE_CBC, iv=iv).encrypt(block)
    return base64.b64encode(iv + ciphertext).decode()


@pytest.mark.parametrize('plaintext', PLAINTEXTS)
def test_round_trip(plaintext):
    key = bytes(range(100, 132))
    assert decrypt(key, encrypt(key, plaintext)) == plaintext


@pytest.mark.parametrize('plaintext,expected', ZERO_VECTORS.items())
def test_zero_key_vectors(plaintext, expected):
    assert encrypt_with_iv(ZERO_KEY, plaintext, ZERO_IV) == expected
    assert decrypt(ZERO_KEY, expected) == plaintext


@pytest.mark.parametrize('plaintext,expected', FIXED_VECTORS.items())
def test_fixed_key_vectors(plaintext, expected):
    assert encrypt_with_iv(FIXED_KEY, plaintext, FIXED_IV) == expected
    assert decrypt(FIXED_KEY, expected) == plaintext


def test_sealed_layout():
    data = base64.b64decode(encrypt(FIXED_KEY, 'MyPassword123'))
    # IV followed by a single padded block
    assert len(data) == 32
    data = base64.b64decode(encrypt(FIXED_KEY, '0123456789abcdef'))
    # aligned input gets a full block of padding
    assert len(data) == 48


def test_iv_is_fresh_for_every_message():
    outputs = [encrypt(FIXED_KEY, 'MyPassword123') for _ in range(2000)]
    assert len(set(outputs)) == len(outputs)
    ivs = {base64.b64decode(o)[:16] for o in outputs}
    assert len(ivs) == len(outputs)


def test_iv_uses_secure_random(monkeypatch):
    import password_crypto.cipher as cipher

    calls = []

    def fake_random(n):
        calls.append(n)
        return FIXED_IV

    monkeypatch.setattr(cipher, 'get_random_bytes', fake_random)
    assert cipher.encrypt(FIXED_KEY, 'test') == FIXED_VECTORS['test']
    assert calls == [16]


@pytest.mark.parametrize('length', [0, 16, 31, 33, 64])
def test_encrypt_rejects_wrong_key_length(length):
    with pytest.raises(InvalidKeyLength):
        encrypt(bytes(length), 'test')
    with pytest.raises(InvalidKeyLength):
        encrypt_with_iv(bytes(length), 'test', ZERO_IV)


@pytest.mark.parametrize('length', [0, 16, 31, 33, 64])
def test_decrypt_rejects_wrong_key_length(length):
    with pytest.raises(InvalidKeyLength):
        decrypt(bytes(length), ZERO_VECTORS['test'])


def test_key_checked_before_message():
    with pytest.raises(InvalidKeyLength):
        decrypt(bytes(16), 'not base64!')


@pytest.mark.parametrize('length', [0, 8, 15, 17, 32])
def test_encrypt_with_iv_rejects_wrong_iv_length(length):
    with pytest.raises(InvalidIVLength):
        encrypt_with_iv(ZERO_KEY, 'test', bytes(length))


@pytest.mark.parametrize('sealed', [
    'not base64!',
    'AAAA AAAA',
    'AAA',
    'oKGio6SlpqeoqaqrrK2ur8HWj-FZWMQgAxgSVWNg8VE=',  # url-safe alphabet
])
def test_decrypt_rejects_malformed_base64(sealed):
    with pytest.raises(InvalidEncoding):
        decrypt(FIXED_KEY, sealed)


@pytest.mark.parametrize('length', [0, 1, 15])
def test_decrypt_rejects_short_message(length):
    sealed = base64.b64encode(bytes(length)).decode()
    with pytest.raises(MalformedMessage, match='too short'):
        decrypt(FIXED_KEY, sealed)


@pytest.mark.parametrize('length', [16, 17, 31, 33, 47])
def test_decrypt_rejects_unaligned_ciphertext(length):
    # 16 bytes is an IV with no ciphertext at all
    sealed = base64.b64encode(bytes(length)).decode()
    with pytest.raises(MalformedMessage):
        decrypt(FIXED_KEY, sealed)


@pytest.mark.parametrize('block', [
    b'A' * 15 + b'\x00',          # pad length 0
    b'A' * 15 + b'\x11',          # pad length 17
    b'A' * 15 + b'\xff',
    b'A' * 14 + b'\x01\x02',      # inconsistent pad bytes
    b'A' * 12 + b'\x04\x04\x03\x04',
])
def test_decrypt_rejects_bad_padding(block):
    sealed = _raw_message(ZERO_KEY, ZERO_IV, block)
    with pytest.raises(PaddingError):
        decrypt(ZERO_KEY, sealed)


def test_decrypt_rejects_invalid_utf8():
    sealed = _raw_message(ZERO_KEY, ZERO_IV, pad(b'\xff\xfe\xfd', 16))
    with pytest.raises(InvalidUtf8):
        decrypt(ZERO_KEY, sealed)


def test_wrong_key_fails_padding():
    with pytest.raises(PaddingError):
        decrypt(ZERO_KEY, FIXED_VECTORS['MyPassword123'])
    with pytest.raises(PaddingError):
        decrypt(FIXED_KEY, ZERO_VECTORS['MyPassword123'])


def test_wrong_key_with_valid_padding_fails_utf8():
    # this key happens to decrypt to a block ending in a valid 0x01 pad
    with pytest.raises(InvalidUtf8):
        decrypt(bytes([173]) * 32, FIXED_VECTORS['MyPassword123'])


def test_wrong_key_never_returns_plaintext():
    sealed = FIXED_VECTORS['MyPassword123']
    for i in range(256):
        key = bytes([i]) * 32
        try:
            assert decrypt(key, sealed) != 'MyPassword123'
        except (PaddingError, InvalidUtf8):
            pass


def test_tampering_is_detected_or_changes_text():
    """Flipping any bit of IV or ciphertext never yields the original."""
    plaintext = 'MyPassword123'
    data = base64.b64decode(FIXED_VECTORS[plaintext])
    for bit in range(len(data) * 8):
        tampered = bytearray(data)
        tampered[bit // 8] ^= 1 << (bit % 8)
        sealed = base64.b64encode(bytes(tampered)).decode()
        try:
            assert decrypt(FIXED_KEY, sealed) != plaintext
        except (PaddingError, InvalidUtf8):
            pass


def test_codec_errors_are_value_errors():
    with pytest.raises(ValueError):
        decrypt(FIXED_KEY, 'not base64!')
    assert issubclass(PaddingError, CodecError)


def test_message_cipher_uses_key_provider():
    calls = []

    def provide_key():
        calls.append(1)
        return FIXED_KEY

    cipher = MessageCipher(provide_key)
    sealed = cipher.encrypt('MyPassword123')
    assert cipher.decrypt(sealed) == 'MyPassword123'
    assert cipher.decrypt(FIXED_VECTORS['test']) == 'test'
    assert len(calls) == 3


def test_message_cipher_validates_provided_key():
    cipher = MessageCipher(lambda: bytes(16))
    with pytest.raises(InvalidKeyLength):
        cipher.encrypt('test')
    with pytest.raises(InvalidKeyLength):
        cipher.decrypt(FIXED_VECTORS['test'])


def test_decrypt_ignores_surrounding_whitespace():
    sealed = f"  {FIXED_VECTORS['test']}\n"
    assert decrypt(FIXED_KEY, sealed) == 'test'
