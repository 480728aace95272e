"""
Tests for the LWE homomorphic backend.
"""

import numpy as np
import pytest

from hprf.errors import DecryptionError, EvaluationError
from hprf.lwe import Ciphertext, LWEParams, LWEScheme

Q = 1 << 12


@pytest.fixture(scope="module")
def scheme():
    return LWEScheme()


@pytest.fixture(scope="module")
def keys(scheme):
    return scheme.keygen(LWEParams())


@pytest.fixture(scope="module")
def other_keys(scheme):
    return scheme.keygen(LWEParams())


class TestEncryptDecrypt:
    """Test fresh encryption."""

    @pytest.mark.parametrize("value", [0, 1, 2, 1000, Q // 2, Q - 1])
    def test_roundtrip(self, scheme, keys, value):
        ck, _ = keys
        assert scheme.decrypt(ck, scheme.encrypt(ck, value)) == value

    def test_value_reduced_mod_q(self, scheme, keys):
        ck, _ = keys
        assert scheme.decrypt(ck, scheme.encrypt(ck, Q + 5)) == 5

    def test_probabilistic(self, scheme, keys):
        """Same plaintext, different ciphertexts."""
        ck, _ = keys
        a = scheme.encrypt(ck, 42)
        b = scheme.encrypt(ck, 42)
        assert a.body != b.body or not np.array_equal(a.mask, b.mask)

    def test_ciphertext_is_immutable(self, scheme, keys):
        ck, _ = keys
        ct = scheme.encrypt(ck, 1)
        with pytest.raises(ValueError):
            ct.mask[0] = 0

    def test_server_key_holds_no_secret(self, keys):
        ck, sk = keys
        assert not hasattr(sk, "secret")
        assert ck.key_id == sk.key_id

    def test_plaintext_bits(self, scheme, keys):
        ck, sk = keys
        assert scheme.plaintext_bits(ck) == scheme.plaintext_bits(sk) == 12
        wide = scheme.keygen(LWEParams(num_blocks=8))
        assert [scheme.plaintext_bits(k) for k in wide] == [16, 16]


class TestLinearOperations:
    """Test addition and multiplication."""

    def test_add_wraps_mod_q(self, scheme, keys):
        ck, sk = keys
        ct = scheme.add(sk, scheme.encrypt(ck, Q - 10), scheme.encrypt(ck, 25))
        assert scheme.decrypt(ck, ct) == 15

    def test_sum(self, scheme, keys):
        ck, sk = keys
        values = [100, 2000, 3000, 4000]
        ct = scheme.sum(sk, [scheme.encrypt(ck, v) for v in values])
        assert scheme.decrypt(ck, ct) == sum(values) % Q

    def test_sum_single(self, scheme, keys):
        ck, sk = keys
        assert scheme.decrypt(ck, scheme.sum(sk, [scheme.encrypt(ck, 9)])) == 9

    def test_sum_empty(self, scheme, keys):
        _, sk = keys
        with pytest.raises(EvaluationError):
            scheme.sum(sk, [])

    def test_scalar_mul(self, scheme, keys):
        ck, sk = keys
        ct = scheme.scalar_mul(sk, scheme.encrypt(ck, 3000), 4001)
        assert scheme.decrypt(ck, ct) == (3000 * 4001) % Q

    def test_inner_product_with_max_scalars(self, scheme, keys):
        """Noise stays within budget for a dimension-8 inner product at worst-case scalars."""
        ck, sk = keys
        row = [Q - 1 - i for i in range(8)]
        products = [scheme.scalar_mul(sk, scheme.encrypt(ck, a), Q - 1) for a in row]
        ct = scheme.sum(sk, products)
        assert scheme.decrypt(ck, ct) == sum(a * (Q - 1) for a in row) % Q

    def test_trivial(self, scheme, keys):
        ck, sk = keys
        ct = scheme.trivial_encrypt(sk, 77)
        assert ct.is_trivial
        assert scheme.decrypt(ck, ct) == 77
        assert not scheme.encrypt(ck, 77).is_trivial

    def test_mul_by_trivial(self, scheme, keys):
        ck, sk = keys
        enc = scheme.encrypt(ck, 1234)
        triv = scheme.trivial_encrypt(sk, 567)
        expected = (1234 * 567) % Q
        assert scheme.decrypt(ck, scheme.mul(sk, enc, triv)) == expected
        assert scheme.decrypt(ck, scheme.mul(sk, triv, enc)) == expected

    def test_mul_two_ciphertexts_unsupported(self, scheme, keys):
        ck, sk = keys
        with pytest.raises(EvaluationError, match="non-trivial"):
            scheme.mul(sk, scheme.encrypt(ck, 2), scheme.encrypt(ck, 3))


class TestRightShift:
    """Test the homomorphic modulus switch."""

    @pytest.mark.parametrize("value", [0, 1, 7, 8, 15, 16, 17, 2047, 2048, 2056, Q - 16, Q - 1])
    def test_floor(self, scheme, keys, value):
        ck, sk = keys
        ct = scheme.right_shift(sk, scheme.encrypt(ck, value), 4)
        assert ct.width == 8
        assert scheme.decrypt(ck, ct) == value >> 4

    @pytest.mark.parametrize("bits", [1, 4, 11])
    def test_floor_after_inner_product(self, scheme, keys, bits):
        ck, sk = keys
        row, key = [4000, 17, 2500, 3], [4095, 2048, 1, 999]
        products = [scheme.scalar_mul(sk, scheme.encrypt(ck, a), s) for a, s in zip(row, key)]
        inner = sum(a * s for a, s in zip(row, key)) % Q
        ct = scheme.right_shift(sk, scheme.sum(sk, products), bits)
        assert scheme.decrypt(ck, ct) == inner >> bits

    def test_zero_shift_is_identity(self, scheme, keys):
        ck, sk = keys
        ct = scheme.encrypt(ck, 5)
        assert scheme.right_shift(sk, ct, 0) is ct

    @pytest.mark.parametrize("bits", [-1, 12, 13])
    def test_out_of_range(self, scheme, keys, bits):
        ck, sk = keys
        with pytest.raises(EvaluationError):
            scheme.right_shift(sk, scheme.encrypt(ck, 5), bits)

    def test_rounded_ciphertext_is_final(self, scheme, keys):
        ck, sk = keys
        ct = scheme.right_shift(sk, scheme.encrypt(ck, 100), 4)
        with pytest.raises(EvaluationError, match="Rounded"):
            scheme.add(sk, ct, ct)
        with pytest.raises(EvaluationError, match="Rounded"):
            scheme.right_shift(sk, ct, 1)


class TestFailures:
    """Test key mismatch and corruption handling."""

    def test_decrypt_under_foreign_key(self, scheme, keys, other_keys):
        ck, _ = keys
        other_ck, _ = other_keys
        with pytest.raises(DecryptionError, match="not produced under"):
            scheme.decrypt(other_ck, scheme.encrypt(ck, 1))

    def test_evaluate_with_foreign_server_key(self, scheme, keys, other_keys):
        ck, _ = keys
        _, other_sk = other_keys
        ct = scheme.encrypt(ck, 1)
        with pytest.raises(EvaluationError, match="incompatible"):
            scheme.scalar_mul(other_sk, ct, 2)
        with pytest.raises(EvaluationError):
            scheme.add(other_sk, ct, ct)

    def test_corrupted_body(self, scheme, keys):
        ck, _ = keys
        ct = scheme.encrypt(ck, 1)
        corrupted = Ciphertext(
            mask=ct.mask,
            body=(ct.body + ct.delta // 2) % (1 << 64),
            width=ct.width,
            key_id=ct.key_id,
        )
        with pytest.raises(DecryptionError, match="noise"):
            scheme.decrypt(ck, corrupted)

    def test_malformed_mask(self, scheme, keys):
        ck, sk = keys
        ct = scheme.encrypt(ck, 1)
        truncated = Ciphertext(mask=ct.mask[:-1], body=ct.body, width=ct.width, key_id=ct.key_id)
        with pytest.raises(DecryptionError, match="Malformed"):
            scheme.decrypt(ck, truncated)
        with pytest.raises(EvaluationError, match="Malformed"):
            scheme.scalar_mul(sk, truncated, 2)

    def test_width_mismatch(self, scheme, keys):
        ck, sk = keys
        ct = scheme.encrypt(ck, 1)
        narrow = Ciphertext(mask=ct.mask, body=ct.body, width=8, key_id=ct.key_id)
        with pytest.raises(EvaluationError, match="Width"):
            scheme.add(sk, ct, narrow)
