"""
Utility functions for building and inspecting registers.

This module provides helper functions for:
- Bit-string conversion (big-endian: index 0 is the most significant bit)
- Register allocation and state read-back for callers and tests
- Quantum state comparison (accounting for global phase)
"""

import numpy as np
from typing import Dict, List, Sequence, Tuple, Union

from .core import get_namestack, get_state, pushQubit, tosQubit
from .errors import PreconditionViolation

ATOL = 1e-9

Bits = Tuple[int, ...]
BitsLike = Union[str, Sequence[bool], Sequence[int]]


# =============================================================================
# Binary utilities
# =============================================================================

def parse_bits(bits: BitsLike) -> Bits:
    """
    Normalize a bit string to a tuple of 0/1 ints.

    Accepts "0101" strings or sequences of bools/ints.

    Raises:
        PreconditionViolation: On characters or values other than 0 and 1
    """
    if isinstance(bits, str):
        if any(c not in "01" for c in bits):
            raise PreconditionViolation(f"Bit string may only contain 0 and 1, got {bits!r}")
        return tuple(int(c) for c in bits)

    parsed = []
    for b in bits:
        if b not in (0, 1):
            raise PreconditionViolation(f"Bits must be 0/1 or bool, got {b!r}")
        parsed.append(int(b))
    return tuple(parsed)


def validate_bits(bits: BitsLike, n: int) -> Bits:
    """Parse `bits` and check it has exactly n entries."""
    parsed = parse_bits(bits)
    if len(parsed) != n:
        raise PreconditionViolation(
            f"Bit string of length {len(parsed)} does not match register of {n} qubits"
        )
    return parsed


def int_to_bits(x: int, n: int) -> Bits:
    """
    Convert integer to n bits, MSB first.

    Args:
        x: Integer to convert, 0 <= x < 2^n
        n: Number of bits
    """
    return tuple((x >> (n - 1 - i)) & 1 for i in range(n))


def bits_to_int(bits: BitsLike) -> int:
    """Convert bits (MSB first) to an integer."""
    result = 0
    for bit in parse_bits(bits):
        result = result * 2 + bit
    return result


def bits_to_str(bits: BitsLike) -> str:
    """Render bits as a "0101" string."""
    return "".join(str(b) for b in parse_bits(bits))


# =============================================================================
# Registers
# =============================================================================

def init_register(prefix: str, n_bits: int, value: int = 0) -> List[str]:
    """
    Push a register of qubits initialized to a classical value.

    Args:
        prefix: Name prefix for qubits
        n_bits: Number of qubits
        value: Classical integer value, default 0

    Returns:
        List of qubit names [MSB, ..., LSB]
    """
    qubits = []
    for i, bit in enumerate(int_to_bits(value, n_bits)):
        pushQubit(f"{prefix}{i}", [1 - bit, bit])
        qubits.append(f"{prefix}{i}")
    return qubits


def register_state(qubits: Sequence[str]) -> np.ndarray:
    """
    Joint state with the given qubits as the big-endian index order.

    The qubits must cover the whole workspace; a leftover qubit (an ancilla
    that was never released, for instance) is reported as an error.
    """
    live = get_namestack()
    if sorted(live) != sorted(qubits):
        raise ValueError(f"Workspace holds {live}, expected exactly {list(qubits)}")
    for q in qubits:
        tosQubit(q)
    return get_state()


def basis_amplitudes(state, n: int, atol: float = ATOL) -> Dict[str, complex]:
    """
    Nonzero amplitudes of an n-qubit state keyed by bit string.

    Args:
        state: State vector of length 2^n
        n: Number of qubits
        atol: Amplitudes with magnitude below this are dropped
    """
    state = np.asarray(state).reshape(-1)
    return {
        bits_to_str(int_to_bits(i, n)): complex(a)
        for i, a in enumerate(state)
        if abs(a) > atol
    }


# =============================================================================
# Quantum state utilities
# =============================================================================

def allclose_up_to_global_phase(v, w, atol: float = ATOL) -> bool:
    """
    Check if two quantum states are equal up to a global phase.

    Args:
        v: First quantum state (array-like)
        w: Second quantum state (array-like)
        atol: Absolute tolerance for comparison
    """
    v = np.asarray(v).reshape(-1)
    w = np.asarray(w).reshape(-1)

    # Find a stable pivot amplitude in w
    idx = np.argmax(np.abs(w))
    if np.abs(w[idx]) < atol:
        return np.allclose(v, w, atol=atol)

    phase = v[idx] / w[idx]
    return np.allclose(v, phase * w, atol=atol)

