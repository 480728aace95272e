"""
Tests for PRF and LWE parameters.
"""

import pytest

from hprf.errors import ParameterMismatchError
from hprf.lwe import LWEParams
from hprf.lwr import Params


class TestParams:
    """Test PRF parameter computation."""

    def test_defaults(self):
        params = Params()
        assert params.lattice_dim == 8
        assert params.q == 4096
        assert params.p == 256
        assert params.out_len == 16

    def test_derived_sizes(self):
        params = Params()
        assert params.q_bytes == 2
        assert params.p_bytes == 1
        assert params.shift == 4
        assert params.num_rows == 16  # one output byte per row
        assert params.word_bytes == 8

    def test_multi_byte_output_elements(self):
        # log2p = 10 needs 2 bytes per row
        params = Params(lattice_dim=16, log2q=16, log2p=10, out_len=20)
        assert params.p_bytes == 2
        assert params.num_rows == 10

    def test_rows_round_up(self):
        params = Params(log2q=20, log2p=12, out_len=15)
        assert params.p_bytes == 2
        assert params.num_rows == 8  # ceil(15 / 2)

    def test_wide_modulus_draws_more_words(self):
        params = Params(log2q=72, log2p=64)
        assert params.q_bytes == 9
        assert params.word_bytes == 16

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lattice_dim": 0},
            {"log2p": 0},
            {"log2q": 8, "log2p": 8},
            {"log2q": 8, "log2p": 12},
            {"out_len": 0},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ParameterMismatchError):
            Params(**kwargs)

    def test_mismatch_is_value_error(self):
        """Parameter errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Params(lattice_dim=-1)


class TestLWEParams:
    """Test LWE backend parameters."""

    def test_for_prf_covers_q(self):
        lwe_params = LWEParams.for_prf(Params())
        assert lwe_params.num_blocks == 6
        assert lwe_params.plaintext_bits == 12
        assert lwe_params.delta == 1 << 52

    def test_for_prf_custom_block_size(self):
        lwe_params = LWEParams.for_prf(Params(), bits_per_block=3)
        assert lwe_params.num_blocks == 4
        assert lwe_params.plaintext_bits == 12

    def test_block_size_must_divide_log2q(self):
        with pytest.raises(ParameterMismatchError, match="does not divide"):
            LWEParams.for_prf(Params(), bits_per_block=5)

    def test_not_enough_noise_headroom(self):
        with pytest.raises(ParameterMismatchError, match="headroom"):
            LWEParams(bits_per_block=8, num_blocks=6)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lwe_dimension": 0},
            {"noise_std": -1.0},
            {"bits_per_block": 0},
            {"num_blocks": 0},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ParameterMismatchError):
            LWEParams(**kwargs)

    def test_small_dimension_warns(self, caplog):
        with caplog.at_level("WARNING", logger="hprf.lwe.params"):
            LWEParams(lwe_dimension=16)
        assert "only suitable for testing" in caplog.text
