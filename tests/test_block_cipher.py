import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from ideacipher.cipher_core import (
    BLOCK_SIZE,
    BlockSizeError,
    Direction,
    IdeaCipher,
    transform_block,
    transform_blocks,
    encrypt_block,
    decrypt_block,
)
from ideacipher.key_schedule import NUM_SUBKEYS, expand_key, invert_subkeys

# Reference vector from the IDEA paper (Lai, 1992)
VECTOR_KEY = bytes.fromhex("00010002000300040005000600070008")
VECTOR_PLAINTEXT = bytes.fromhex("0000000100020003")
VECTOR_CIPHERTEXT = bytes.fromhex("11fbed2b01986de5")


def _random_bytes(rng, n):
    return bytes(rng.randrange(0, 256) for _ in range(n))


def test_known_vector_encrypt():
    assert encrypt_block(VECTOR_PLAINTEXT, VECTOR_KEY) == VECTOR_CIPHERTEXT


def test_known_vector_decrypt():
    assert decrypt_block(VECTOR_CIPHERTEXT, VECTOR_KEY) == VECTOR_PLAINTEXT


def test_zero_key_zero_block_roundtrip():
    key = bytes(16)
    block = bytes(8)
    ct = encrypt_block(block, key)
    assert len(ct) == BLOCK_SIZE
    assert decrypt_block(ct, key) == block


def test_random_roundtrip():
    rng = random.Random(1337)
    for _ in range(50):
        key = _random_bytes(rng, 16)
        pt = _random_bytes(rng, BLOCK_SIZE)
        ct = encrypt_block(pt, key)
        rt = decrypt_block(ct, key)
        assert rt == pt, f"pt={pt.hex()}, key={key.hex()}, ct={ct.hex()}, rt={rt.hex()}"


def test_schedules_undo_each_other_in_either_order():
    enc = expand_key(VECTOR_KEY)
    dec = invert_subkeys(enc)
    block = b"IDEA-64b"
    assert transform_block(transform_block(block, enc), dec) == block
    assert transform_block(transform_block(block, dec), enc) == block


def test_transform_does_not_touch_input():
    block = bytearray(VECTOR_PLAINTEXT)
    transform_block(block, expand_key(VECTOR_KEY))
    assert bytes(block) == VECTOR_PLAINTEXT


def test_transform_accepts_buffer_types():
    subkeys = expand_key(VECTOR_KEY)
    expected = transform_block(VECTOR_PLAINTEXT, subkeys)
    assert transform_block(bytearray(VECTOR_PLAINTEXT), subkeys) == expected
    assert transform_block(memoryview(VECTOR_PLAINTEXT), subkeys) == expected


@pytest.mark.parametrize("length", [0, 7, 9, 16])
def test_block_size_enforced(length):
    with pytest.raises(BlockSizeError):
        transform_block(bytes(length), expand_key(VECTOR_KEY))


def test_block_size_error_is_value_error():
    with pytest.raises(ValueError):
        encrypt_block(b"short", VECTOR_KEY)


@pytest.mark.parametrize("direction", list(Direction))
def test_vectorised_matches_scalar(direction):
    rng = random.Random(2026)
    cipher = IdeaCipher(_random_bytes(rng, 16), direction)
    data = _random_bytes(rng, BLOCK_SIZE * 100) + bytes(BLOCK_SIZE) + b"\xff" * BLOCK_SIZE

    expected = b"".join(
        cipher.process_block(data[i:i + BLOCK_SIZE]) for i in range(0, len(data), BLOCK_SIZE))

    assert cipher.process_blocks(data) == expected


def test_vectorised_known_vector():
    data = VECTOR_PLAINTEXT * 3
    assert transform_blocks(data, expand_key(VECTOR_KEY)) == VECTOR_CIPHERTEXT * 3


def test_vectorised_empty_input():
    assert transform_blocks(b"", expand_key(VECTOR_KEY)) == b""


def test_vectorised_rejects_partial_block():
    with pytest.raises(BlockSizeError):
        transform_blocks(bytes(12), expand_key(VECTOR_KEY))


def test_cipher_schedule_by_direction():
    enc = IdeaCipher(VECTOR_KEY, Direction.ENCRYPT)
    dec = IdeaCipher(VECTOR_KEY, Direction.DECRYPT)

    assert enc.direction is Direction.ENCRYPT
    assert len(enc.subkeys) == NUM_SUBKEYS
    assert enc.subkeys == expand_key(VECTOR_KEY)
    assert dec.subkeys == invert_subkeys(expand_key(VECTOR_KEY))


def test_cipher_from_password():
    cipher = IdeaCipher.from_password("key", Direction.ENCRYPT)
    assert cipher.subkeys == expand_key(b"key" + bytes(13))


def test_cipher_is_stateless_across_blocks():
    cipher = IdeaCipher(VECTOR_KEY)
    first = cipher.process_block(VECTOR_PLAINTEXT)
    cipher.process_block(b"\x01" * 8)
    assert cipher.process_block(VECTOR_PLAINTEXT) == first


def test_cipher_shared_between_threads():
    rng = random.Random(7)
    cipher = IdeaCipher(_random_bytes(rng, 16), Direction.ENCRYPT)
    blocks = [_random_bytes(rng, BLOCK_SIZE) for _ in range(200)]

    expected = [cipher.process_block(b) for b in blocks]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(cipher.process_block, blocks))

    assert results == expected


def test_direction_given_as_value():
    cipher = IdeaCipher(VECTOR_KEY, "decrypt")
    assert cipher.direction is Direction.DECRYPT
    assert cipher.process_block(VECTOR_CIPHERTEXT) == VECTOR_PLAINTEXT


@pytest.mark.parametrize("direction", ["DECRYPT", "backwards", None, True])
def test_invalid_direction_rejected(direction):
    with pytest.raises(ValueError):
        IdeaCipher(VECTOR_KEY, direction)
