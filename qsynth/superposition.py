"""
Equal superpositions of basis states.

Each routine expects its qubits in |0...0⟩ and leaves them in the target
state. With inverse=True it emits the adjoint sequence instead, taking the
target state back to |0...0⟩. Wrap a call in dispatch.controlled_by() for the
controlled variant.

Bit ordering convention:
    qubits[0] is the most significant bit, so qubits = [a, b, c] in state
    |011⟩ means a=0, b=1, c=1.
"""

from typing import List, Sequence

from .ancilla import ancillas
from .dispatch import apply, apply_on_bits, apply_on_int, within
from .errors import PreconditionViolation
from .gates import H_gate, S_gate, X_gate, dagger
from .utils import BitsLike, bits_to_str, int_to_bits, validate_bits


def _require_qubits(qubits: Sequence[str], minimum: int = 1):
    if len(qubits) < minimum:
        raise PreconditionViolation(
            f"Register needs at least {minimum} qubit(s), got {len(qubits)}"
        )


def all_basis_vectors(qubits: List[str], inverse: bool = False):
    """
    Uniform superposition over all 2^N basis states.

    Hadamard on every qubit; H is self-inverse, so the inverse is the same
    sequence.
    """
    _require_qubits(qubits)
    for q in qubits:
        apply(H_gate, q)


def even_odd_numbers(qubits: List[str], is_even: bool, inverse: bool = False):
    """
    Uniform superposition over all even (or all odd) N-bit integers.

    Parity is the last qubit alone: Hadamard the N-1 leading qubits and set
    the last one to 0 (even) or 1 (odd).
    """
    _require_qubits(qubits)
    free, last = qubits[:-1], qubits[-1]

    if inverse:
        if not is_even:
            apply(X_gate, last)
        for q in reversed(free):
            apply(H_gate, q)
        return

    for q in free:
        apply(H_gate, q)
    if not is_even:
        apply(X_gate, last)


def zero_and_bitstring(qubits: List[str], bits: BitsLike, inverse: bool = False):
    """
    (|0...0⟩ + |bits⟩)/√2 for a nonzero bit string.

    Hadamard on the first set bit (the pivot), then a CNOT from the pivot to
    every other set bit: the pivot's |0⟩ branch stays all-zero, its |1⟩
    branch becomes `bits`.

    Raises:
        PreconditionViolation: On a length mismatch or an all-zero bit string
    """
    _require_qubits(qubits)
    bits = validate_bits(bits, len(qubits))
    if not any(bits):
        raise PreconditionViolation("Bit string must contain at least one 1")

    pivot = qubits[bits.index(1)]
    others = [q for q, b in zip(qubits, bits) if b and q != pivot]

    if inverse:
        for q in reversed(others):
            apply(X_gate, q, [pivot])
        apply(H_gate, pivot)
        return

    apply(H_gate, pivot)
    for q in others:
        apply(X_gate, q, [pivot])


# =============================================================================
# Bit strings selected by ancilla qubits
# =============================================================================

def selector_bitstrings(
    qubits: List[str],
    bit_strings: Sequence[BitsLike],
    inverse: bool = False,
    verbose: bool = False,
):
    """
    Equal superposition of 2^k distinct bit strings, using k ancillas.

    The ancillas are put in uniform superposition and act as a selector s:
    for every s, the bits of bit_strings[s] are copied into the register
    under "ancillas == s". Afterwards the register alone identifies s, so
    each ancilla bit that is 1 in s is flipped back under "register ==
    bit_strings[s]". That leaves the ancillas in |0...0⟩, disentangled,
    before they are released.

    Args:
        qubits: Register [MSB, ..., LSB] in |0...0⟩
        bit_strings: 2^k bit strings, each of length len(qubits)
        inverse: If True, undo the superposition instead
        verbose: If True, print the steps

    Raises:
        PreconditionViolation: On a count that is not a power of two, a length
            mismatch, or repeated bit strings
    """
    _require_qubits(qubits)
    targets = [validate_bits(b, len(qubits)) for b in bit_strings]
    count = len(targets)
    if count < 1 or count & (count - 1):
        raise PreconditionViolation(f"Need a power-of-two number of bit strings, got {count}")
    if len(set(targets)) != count:
        raise PreconditionViolation("Bit strings must be distinct")

    k = count.bit_length() - 1
    if k == 0:
        # A single basis state: plain flips, no selector needed
        for q, b in zip(qubits, targets[0]):
            if b:
                apply(X_gate, q)
        return

    if verbose:
        labels = ", ".join(bits_to_str(t) for t in targets)
        print(f"{'Undoing' if inverse else 'Preparing'} superposition of {labels} "
              f"with {k} ancilla(s)")

    def load(selector: List[str]):
        for s, target in enumerate(targets):
            for q, b in zip(qubits, target):
                if b:
                    apply_on_int(s, X_gate, selector, q)

    def unload(selector: List[str]):
        for s in range(1, count):
            for a, b in zip(selector, int_to_bits(s, k)):
                if b:
                    apply_on_bits(targets[s], X_gate, qubits, a)

    with ancillas(k) as selector:
        if inverse:
            unload(selector)
            load(selector)
            for a in reversed(selector):
                apply(H_gate, a)
        else:
            for a in selector:
                apply(H_gate, a)
            load(selector)
            unload(selector)

    if verbose:
        print("Selector ancillas disentangled and released")


def two_bitstrings(
    qubits: List[str],
    bits1: BitsLike,
    bits2: BitsLike,
    inverse: bool = False,
    verbose: bool = False,
):
    """
    (|bits1⟩ + |bits2⟩)/√2 for two distinct bit strings, using one ancilla.

    Raises:
        PreconditionViolation: On a length mismatch or equal bit strings
    """
    selector_bitstrings(qubits, [bits1, bits2], inverse=inverse, verbose=verbose)


def four_bitstrings(
    qubits: List[str],
    bits: Sequence[BitsLike],
    inverse: bool = False,
    verbose: bool = False,
):
    """
    Equal superposition of four distinct bit strings, using two ancillas.

    Raises:
        PreconditionViolation: Unless exactly four distinct, correctly sized
            bit strings are given
    """
    if len(bits) != 4:
        raise PreconditionViolation(f"Need exactly four bit strings, got {len(bits)}")
    selector_bitstrings(qubits, bits, inverse=inverse, verbose=verbose)


# =============================================================================
# Small fixed states
# =============================================================================

def plus_minus(qubit: str, sign: int, inverse: bool = False):
    """|+⟩ for sign >= 0, |−⟩ for sign < 0."""
    if inverse:
        apply(H_gate, qubit)
        if sign < 0:
            apply(X_gate, qubit)
        return

    if sign < 0:
        apply(X_gate, qubit)
    apply(H_gate, qubit)


def _phase_flip(qubit: str):
    # Z = S², self-inverse
    apply(S_gate, qubit)
    apply(S_gate, qubit)


def bell_state(qubits: List[str], index: int, inverse: bool = False):
    """
    One of the four Bell states on two qubits.

    index 0: (|00⟩ + |11⟩)/√2    index 1: (|00⟩ − |11⟩)/√2
    index 2: (|01⟩ + |10⟩)/√2    index 3: (|01⟩ − |10⟩)/√2

    Raises:
        PreconditionViolation: Unless two qubits and 0 <= index <= 3 are given
    """
    if len(qubits) != 2:
        raise PreconditionViolation(f"Bell states need 2 qubits, got {len(qubits)}")
    if not (0 <= index <= 3):
        raise PreconditionViolation(f"Bell state index must be in [0, 3], got {index}")

    q0, q1 = qubits
    minus, swap = index & 1, index & 2

    if inverse:
        if swap:
            apply(X_gate, q1)
        apply(X_gate, q1, [q0])
        if minus:
            _phase_flip(q0)
        apply(H_gate, q0)
        return

    apply(H_gate, q0)
    if minus:
        _phase_flip(q0)
    apply(X_gate, q1, [q0])
    if swap:
        apply(X_gate, q1)


def ghz_state(qubits: List[str], inverse: bool = False):
    """(|0...0⟩ + |1...1⟩)/√2."""
    _require_qubits(qubits)
    zero_and_bitstring(qubits, [1] * len(qubits), inverse=inverse)


def all_basis_vectors_with_phases(qubits: List[str], inverse: bool = False):
    """
    (|00⟩ + i|01⟩ − |10⟩ − i|11⟩)/2 on two qubits.

    The state factors as |−⟩ ⊗ (|0⟩ + i|1⟩)/√2, so each qubit is prepared on
    its own; the i comes from the phase-90 gate.
    """
    if len(qubits) != 2:
        raise PreconditionViolation(f"Need 2 qubits, got {len(qubits)}")
    q0, q1 = qubits

    if inverse:
        apply(dagger(S_gate), q1)
        apply(H_gate, q1)
        plus_minus(q0, -1, inverse=True)
        return

    plus_minus(q0, -1)
    apply(H_gate, q1)
    apply(S_gate, q1)
