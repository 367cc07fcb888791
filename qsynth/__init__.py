"""
Qsynth - State preparation by gate synthesis.

Given a register of qubits in |0...0⟩, the routines in this package emit
the primitive gates (X, H, S, Ry and their controlled forms) that turn it
into a prescribed superposition. Gates go to a small state-vector backend
that the routines only write to.

Modules:
    core          - Backend (pushQubit, applyGate, releaseQubit)
    gates         - Primitive gate matrices and their controlled/adjoint forms
    angles        - Rotation angles from target weights
    ancilla       - Scoped temporary qubits
    dispatch      - Controlled emission, conditions on bit patterns
    superposition - Equal superpositions (all, even/odd, bit strings)
    weighted      - Unequal amplitudes (α rotation, 1:1:1, Hardy 3:1:1:1)
    wstate        - Recursive W state
    amplitude     - Prefix-tree encoding of arbitrary targets
    utils         - Bit strings, registers, state comparison

Quick Start:
    >>> from qsynth import *
    >>> reset()
    >>> qs = init_register("q", 3)
    >>> w_state(qs)
    >>> basis_amplitudes(register_state(qs), 3)   # |100⟩, |010⟩, |001⟩ at 1/√3
"""

# Backend
from .core import (
    reset,
    get_state,
    get_namestack,
    num_qubits,
    pushQubit,
    tosQubit,
    applyGate,
    applyControlled,
    probQubit,
    measureQubit,
    releaseQubit,
)

# Gates
from .gates import (
    X_gate,
    H_gate,
    S_gate,
    Ry_gate,
    dagger,
)

# Errors
from .errors import (
    SynthesisError,
    PreconditionViolation,
    NumericDomainError,
)

# Angles
from .angles import (
    split_angle,
    w_angle,
)

# Ancillas and controlled dispatch
from .ancilla import ANCILLA_PREFIX, ancillas
from .dispatch import (
    apply,
    rotate,
    flip,
    apply_on_bits,
    apply_on_int,
    within,
    controlled_by,
    active_controls,
)

# Algorithms
from .superposition import (
    all_basis_vectors,
    even_odd_numbers,
    zero_and_bitstring,
    two_bitstrings,
    four_bitstrings,
    selector_bitstrings,
    plus_minus,
    bell_state,
    ghz_state,
    all_basis_vectors_with_phases,
)

from .weighted import (
    unequal_superposition,
    three_states_two_qubits,
    hardy_state,
)

from .wstate import w_state

from .amplitude import (
    plan_rotations,
    prepare_superposition,
    bitstring_superposition,
)

# Utilities
from .utils import (
    parse_bits,
    int_to_bits,
    bits_to_int,
    bits_to_str,
    init_register,
    register_state,
    basis_amplitudes,
    allclose_up_to_global_phase,
)

__version__ = "0.1.0"
__all__ = [
    # Backend
    "reset",
    "get_state",
    "get_namestack",
    "num_qubits",
    "pushQubit",
    "tosQubit",
    "applyGate",
    "applyControlled",
    "probQubit",
    "measureQubit",
    "releaseQubit",
    # Gates
    "X_gate",
    "H_gate",
    "S_gate",
    "Ry_gate",
    "dagger",
    # Errors
    "SynthesisError",
    "PreconditionViolation",
    "NumericDomainError",
    # Angles
    "split_angle",
    "w_angle",
    # Ancillas and dispatch
    "ancillas",
    "ANCILLA_PREFIX",
    "apply",
    "rotate",
    "flip",
    "apply_on_bits",
    "apply_on_int",
    "within",
    "controlled_by",
    "active_controls",
    # Superpositions
    "all_basis_vectors",
    "even_odd_numbers",
    "zero_and_bitstring",
    "two_bitstrings",
    "four_bitstrings",
    "selector_bitstrings",
    "plus_minus",
    "bell_state",
    "ghz_state",
    "all_basis_vectors_with_phases",
    # Weighted
    "unequal_superposition",
    "three_states_two_qubits",
    "hardy_state",
    # W state
    "w_state",
    # Amplitude encoding
    "plan_rotations",
    "prepare_superposition",
    "bitstring_superposition",
    # Utils
    "parse_bits",
    "int_to_bits",
    "bits_to_int",
    "bits_to_str",
    "init_register",
    "register_state",
    "basis_amplitudes",
    "allclose_up_to_global_phase",
]
