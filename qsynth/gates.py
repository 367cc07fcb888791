"""
Primitive gate definitions.

The synthesis routines only ever emit these four primitives, optionally
with controls:

    X_gate        bit flip
    H_gate        Hadamard
    S_gate        phase-90, multiplies the |1⟩ amplitude by i
    Ry_gate(θ)    rotation, |0⟩ → cos(θ/2)|0⟩ + sin(θ/2)|1⟩

Controls are applied by core.applyControlled(); adjoints come from dagger().
"""

import numpy as np

# =============================================================================
# Single-qubit gates
# =============================================================================

X_gate = np.array([[0, 1],      # Pauli X gate (NOT gate)
                   [1, 0]])

H_gate = np.array([[1,  1],     # Hadamard gate
                   [1, -1]]) * np.sqrt(1/2)

S_gate = np.array([[1,  0],     # Phase gate = P(π/2), S² = Z
                   [0, 1j]])

def Ry_gate(theta):
    """Y rotation gate Ry(θ). Real-valued, so Ry(θ)† = Ry(-θ)."""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s],
                     [s,  c]])


# =============================================================================
# Derived forms
# =============================================================================

def dagger(gate: np.ndarray) -> np.ndarray:
    """Adjoint (conjugate transpose) of a gate."""
    return np.conj(np.asarray(gate)).T
