"""Tests for unequal-amplitude superpositions."""

import numpy as np
import pytest

from qsynth import (
    reset, pushQubit, controlled_by,
    unequal_superposition, three_states_two_qubits, hardy_state,
    split_angle,
    init_register, register_state,
    PreconditionViolation,
)


def prepared(n: int, build) -> np.ndarray:
    reset()
    qs = init_register("q", n)
    build(qs)
    return register_state(qs)


class TestUnequalSuperposition:
    """cos α|0⟩ + sin α|1⟩."""

    @pytest.mark.parametrize(
        "alpha",
        [0.0, np.pi / 6, np.pi / 4, np.pi / 2, 2.0, -0.4, 3 * np.pi / 2],
        ids=["zero", "pi_6", "pi_4", "pi_2", "two", "negative", "three_pi_2"],
    )
    def test_amplitudes(self, alpha: float):
        state = prepared(1, lambda qs: unequal_superposition(qs[0], alpha))
        assert np.allclose(state, [np.cos(alpha), np.sin(alpha)])

    @pytest.mark.parametrize("alpha", [0.3, 1.7, -2.5])
    def test_inverse(self, alpha: float):
        def build(qs):
            unequal_superposition(qs[0], alpha)
            unequal_superposition(qs[0], alpha, inverse=True)

        assert np.allclose(prepared(1, build), [1, 0])


class TestThreeStates:
    """(|00⟩ + |01⟩ + |10⟩)/√3."""

    def test_amplitudes(self):
        state = prepared(2, three_states_two_qubits)
        expected = np.array([1, 1, 1, 0]) / np.sqrt(3)
        assert np.allclose(state, expected)

    def test_branch_probabilities_multiply_out(self):
        """P(q0=0)·P(q1=b | q0=0) is exactly 1/3 for b = 0, 1."""
        theta = split_angle(2, 1)
        p_zero = np.cos(theta) ** 2
        assert np.isclose(p_zero * 0.5, 1 / 3)
        assert np.isclose(np.sin(theta) ** 2, 1 / 3)

    def test_inverse(self):
        def build(qs):
            three_states_two_qubits(qs)
            three_states_two_qubits(qs, inverse=True)

        assert np.allclose(prepared(2, build), [1, 0, 0, 0])

    def test_wrong_size_rejected(self):
        reset()
        qs = init_register("q", 3)
        with pytest.raises(PreconditionViolation):
            three_states_two_qubits(qs)


class TestHardyState:
    """(3|00⟩ + |01⟩ + |10⟩ + |11⟩)/√12."""

    def test_amplitudes(self):
        state = prepared(2, hardy_state)
        expected = np.array([3, 1, 1, 1]) / np.sqrt(12)
        assert np.allclose(state, expected)

    def test_branch_probabilities_multiply_out(self):
        p0 = np.cos(split_angle(10, 2)) ** 2
        p_zero_zero = np.cos(split_angle(9, 1)) ** 2
        p_one_zero = np.cos(split_angle(1, 1)) ** 2
        assert np.isclose(p0 * p_zero_zero, 9 / 12)
        assert np.isclose(p0 * (1 - p_zero_zero), 1 / 12)
        assert np.isclose((1 - p0) * p_one_zero, 1 / 12)
        assert np.isclose((1 - p0) * (1 - p_one_zero), 1 / 12)

    def test_inverse(self):
        def build(qs):
            hardy_state(qs)
            hardy_state(qs, inverse=True)

        assert np.allclose(prepared(2, build), [1, 0, 0, 0])

    def test_controlled_off(self):
        reset()
        pushQubit("c", [1, 0])
        qs = init_register("q", 2)
        with controlled_by(["c"]):
            hardy_state(qs)
        state = register_state(["c"] + qs)
        assert np.isclose(abs(state[0]), 1.0)

    def test_controlled_on(self):
        reset()
        pushQubit("c", [0, 1])
        qs = init_register("q", 2)
        with controlled_by(["c"]):
            hardy_state(qs)
        state = register_state(["c"] + qs)
        assert np.allclose(state[4:], np.array([3, 1, 1, 1]) / np.sqrt(12))
        assert np.allclose(state[:4], 0)
