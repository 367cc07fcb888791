"""Tests for controlled dispatch."""

import numpy as np
import pytest

from qsynth import (
    reset, pushQubit,
    H_gate, X_gate,
    apply, rotate, flip, apply_on_bits, apply_on_int, within, controlled_by,
    active_controls,
    init_register, register_state, bits_to_int, int_to_bits,
    PreconditionViolation,
)


def _run_on_basis(value: int, n_controls: int, action) -> int:
    """Prepare |value⟩|0⟩, run action(controls, target), return the target bit."""
    reset()
    controls = init_register("c", n_controls, value)
    pushQubit("t")
    action(controls, "t")
    state = register_state(controls + ["t"])
    index = int(np.argmax(np.abs(state)))
    assert np.isclose(abs(state[index]), 1.0)
    assert index >> 1 == value, "controls must be left unchanged"
    return index & 1


class TestApplyOnInt:
    """apply_on_int fires only for the requested integer."""

    @pytest.mark.parametrize("k", range(8))
    def test_fires_only_on_k(self, k: int):
        for value in range(8):
            bit = _run_on_basis(
                value, 3, lambda cs, t: apply_on_int(k, X_gate, cs, t)
            )
            assert bit == (1 if value == k else 0), f"k={k}, controls={value:03b}"

    @pytest.mark.parametrize("k", [-1, 4], ids=["negative", "too_large"])
    def test_out_of_range_rejected(self, k: int):
        reset()
        cs = init_register("c", 2)
        pushQubit("t")
        with pytest.raises(PreconditionViolation):
            apply_on_int(k, X_gate, cs, "t")


class TestApplyOnBits:
    """apply_on_bits compares controls bit for bit."""

    @pytest.mark.parametrize("pattern", ["00", "01", "10", "11"])
    def test_fires_only_on_pattern(self, pattern: str):
        for value in range(4):
            bit = _run_on_basis(
                value, 2, lambda cs, t: apply_on_bits(pattern, X_gate, cs, t)
            )
            assert bit == (1 if value == bits_to_int(pattern) else 0)

    def test_accepts_bool_pattern(self):
        bit = _run_on_basis(
            0b10, 2, lambda cs, t: apply_on_bits([True, False], X_gate, cs, t)
        )
        assert bit == 1

    def test_length_mismatch_rejected(self):
        reset()
        cs = init_register("c", 2)
        pushQubit("t")
        with pytest.raises(PreconditionViolation):
            apply_on_bits("101", X_gate, cs, "t")

    def test_superposed_controls(self):
        """Only the matching branch of a superposed control register is touched."""
        reset()
        cs = init_register("c", 2)
        pushQubit("t")
        for c in cs:
            apply(H_gate, c)
        apply_on_bits("01", X_gate, cs, "t")
        state = register_state(cs + ["t"])
        expected = np.zeros(8)
        for value in range(4):
            target = 1 if value == 0b01 else 0
            expected[(value << 1) | target] = 0.5
        assert np.allclose(state, expected)


class TestWithin:
    """within(encode, decode) always runs decode."""

    def test_encode_body_decode_order(self):
        calls = []
        with within(lambda: calls.append("encode"), lambda: calls.append("decode")):
            calls.append("body")
        assert calls == ["encode", "body", "decode"]

    def test_decode_runs_on_exception(self):
        calls = []
        with pytest.raises(RuntimeError):
            with within(lambda: calls.append("encode"), lambda: calls.append("decode")):
                raise RuntimeError("boom")
        assert calls == ["encode", "decode"]

    def test_flip_conjugation_restores_qubit(self):
        reset()
        (q,) = init_register("q", 1)
        with within(lambda: flip([q]), lambda: flip([q])):
            pass
        assert np.allclose(register_state([q]), [1, 0])


class TestControlledBy:
    """controlled_by adds controls to everything emitted inside it."""

    @pytest.mark.parametrize("control", [0, 1])
    def test_gate_follows_extra_control(self, control: int):
        bit = _run_on_basis(control, 1, lambda cs, t: self._flip_under(cs, t))
        assert bit == control

    @staticmethod
    def _flip_under(cs, t):
        with controlled_by(cs):
            apply(X_gate, t)

    def test_nested_controls_stack(self):
        seen = []
        with controlled_by(["a"]):
            with controlled_by(["b", "c"]):
                seen.append(active_controls())
            seen.append(active_controls())
        seen.append(active_controls())
        assert seen == [["a", "b", "c"], ["a"], []]

    def test_controls_dropped_on_exception(self):
        with pytest.raises(RuntimeError):
            with controlled_by(["a"]):
                raise RuntimeError("boom")
        assert active_controls() == []

    def test_within_suspends_extra_controls(self):
        seen = []
        with controlled_by(["a"]):
            with within(lambda: seen.append(active_controls()), lambda: None):
                seen.append(active_controls())
        assert seen == [[], ["a"]]

    def test_controlled_rotation(self):
        """rotate under a |1⟩ control acts, under |0⟩ it does not."""
        for value in (0, 1):
            reset()
            (c,) = init_register("c", 1, value)
            pushQubit("t")
            with controlled_by([c]):
                rotate(np.pi / 6, "t")
            state = register_state([c, "t"])
            if value:
                expected = [0, 0, np.cos(np.pi / 6), np.sin(np.pi / 6)]
            else:
                expected = [1, 0, 0, 0]
            assert np.allclose(state, expected)

    def test_int_to_bits_is_big_endian(self):
        assert int_to_bits(6, 3) == (1, 1, 0)
