"""
Amplitude encoding of an arbitrary target superposition.

The target basis states are arranged in a binary prefix tree, one level per
qubit. At each node the probability below it is split between its 0-child
and 1-child by a rotation of that level's qubit, controlled on the qubits
above matching the node's prefix. Basis states that share a prefix share the
rotations on it, so the number of rotations is at most one per tree node:
O(M·N) for M target states on N qubits, with no ancillas and no restriction
on M.

Planning is separate from emission: every angle is computed (and every
degenerate input rejected) before the first gate is applied.

Phases: the primitive set has a phase-90 gate, so amplitudes may carry any
phase that is a multiple of π/2 (1, i, −1, −i).
"""

from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from .angles import split_angle
from .dispatch import apply_on_bits, flip, within
from .errors import PreconditionViolation
from .gates import Ry_gate, S_gate, dagger
from .utils import Bits, BitsLike, bits_to_str, validate_bits

NORM_TOL = 1e-6
PHASE_TOL = 1e-9

Rotation = Tuple[Bits, int, float]


def plan_rotations(weights: Mapping[Bits, float]) -> List[Rotation]:
    """
    Rotations that load the given probabilities, in emission order.

    Args:
        weights: Probability per basis state; all keys have the same length
                 and every weight is > 0

    Returns:
        List of (prefix, index, θ): rotate qubit `index` by Ry(2θ) when the
        qubits before it equal `prefix`. Parents come before children.
    """
    if not weights:
        raise PreconditionViolation("Target superposition is empty")
    n = len(next(iter(weights)))
    steps: List[Rotation] = []

    def split(prefix: Bits, members: List[Tuple[Bits, float]]):
        i = len(prefix)
        if i == n:
            return
        zeros = [(b, w) for b, w in members if b[i] == 0]
        ones = [(b, w) for b, w in members if b[i] == 1]
        if ones:
            theta = split_angle(sum(w for _, w in zeros), sum(w for _, w in ones))
            steps.append((prefix, i, theta))
        if zeros:
            split(prefix + (0,), zeros)
        if ones:
            split(prefix + (1,), ones)

    split((), list(weights.items()))
    return steps


def _quarter_turns(amplitude: complex) -> int:
    """Phase of `amplitude` as a number of quarter turns, 0..3."""
    turns = np.angle(amplitude) / (np.pi / 2)
    nearest = round(turns)
    if abs(turns - nearest) > PHASE_TOL:
        raise PreconditionViolation(
            f"Phase of amplitude {amplitude} is not a multiple of π/2"
        )
    return int(nearest) % 4


def _normalize_target(
    qubits: Sequence[str], amplitudes: Mapping[BitsLike, complex]
) -> Tuple[Dict[Bits, float], Dict[Bits, int]]:
    weights: Dict[Bits, float] = {}
    phases: Dict[Bits, int] = {}
    seen = set()
    for key, amp in amplitudes.items():
        bits = validate_bits(key, len(qubits))
        if bits in seen:
            raise PreconditionViolation(f"Basis state {bits_to_str(bits)} given twice")
        seen.add(bits)
        amp = complex(amp)
        if abs(amp) == 0:
            continue
        weights[bits] = abs(amp) ** 2
        phases[bits] = _quarter_turns(amp)

    total = sum(weights.values())
    if not weights or abs(total - 1) > NORM_TOL:
        raise PreconditionViolation(
            f"Squared amplitudes must sum to 1, got {total}"
        )
    return weights, {b: p for b, p in phases.items() if p}


def _emit_phase(qubits: Sequence[str], bits: Bits, turns: int, inverse: bool):
    gate = dagger(S_gate) if inverse else S_gate
    last = qubits[-1]
    # Phase gates act on |1⟩; flip the last qubit when its bit is 0
    unset = [] if bits[-1] else [last]
    with within(lambda: flip(unset), lambda: flip(unset)):
        for _ in range(turns):
            apply_on_bits(bits[:-1], gate, qubits[:-1], last)


def prepare_superposition(
    qubits: List[str],
    amplitudes: Mapping[BitsLike, complex],
    inverse: bool = False,
    verbose: bool = False,
):
    """
    Prepare Σ amplitudes[b] |b⟩ from |0...0⟩.

    Args:
        qubits: Register [MSB, ..., LSB]
        amplitudes: Basis state ("0101" or bit sequence) to amplitude.
                    Squared magnitudes must sum to 1; phases must be
                    multiples of π/2. Zero entries are ignored.
        inverse: If True, map the target state back to |0...0⟩
        verbose: If True, print each rotation

    Raises:
        PreconditionViolation: On an empty, unnormalized or mis-sized target,
            repeated basis states, or unsupported phases
    """
    if not qubits:
        raise PreconditionViolation("Register is empty")
    weights, phases = _normalize_target(qubits, amplitudes)
    steps = plan_rotations(weights)

    def emit_rotations(sign: int, order):
        for prefix, i, theta in order:
            if verbose:
                where = f" when {bits_to_str(prefix)}" if prefix else ""
                print(f"Rotate {qubits[i]} by θ = {sign * theta:.6f}{where}")
            apply_on_bits(prefix, Ry_gate(2 * sign * theta), qubits[:i], qubits[i])

    if inverse:
        for bits, turns in phases.items():
            _emit_phase(qubits, bits, turns, inverse=True)
        emit_rotations(-1, reversed(steps))
        return

    emit_rotations(1, steps)
    for bits, turns in phases.items():
        _emit_phase(qubits, bits, turns, inverse=False)


def bitstring_superposition(
    qubits: List[str],
    bit_strings: Sequence[BitsLike],
    inverse: bool = False,
    verbose: bool = False,
):
    """
    Equal superposition of any number of distinct bit strings, no ancillas.

    Raises:
        PreconditionViolation: On an empty list, a length mismatch or
            repeated bit strings
    """
    if not bit_strings:
        raise PreconditionViolation("Need at least one bit string")
    amp = 1 / np.sqrt(len(bit_strings))
    targets = [validate_bits(b, len(qubits)) for b in bit_strings]
    if len(set(targets)) != len(targets):
        raise PreconditionViolation("Bit strings must be distinct")
    prepare_superposition(
        qubits, {t: amp for t in targets}, inverse=inverse, verbose=verbose
    )
