"""
State-vector backend for the synthesis routines.

The synthesis code treats this module as a write-only actuator: it pushes
qubits, applies gates and releases qubits, but never reads amplitudes back.
Reading the state (get_state, probQubit) is reserved for callers and tests.

The workspace is a numpy array holding the joint state. Qubits are referenced
by name through a name stack; the qubit on top of the stack (TOS) is the
least significant index of the flattened state.
"""

import numpy as np
from typing import List, Sequence

# Global state
workspace: np.ndarray = np.array([[1.0 + 0j]])
namestack: List[str] = []


def reset():
    """Discard every qubit and return to the empty workspace."""
    global workspace, namestack
    workspace = np.array([[1.0 + 0j]])
    namestack = []


def get_state() -> np.ndarray:
    """Return a copy of the joint state, ordered by the current name stack."""
    return np.reshape(workspace, -1).copy()


def get_namestack() -> List[str]:
    """Return a copy of the current name stack (bottom first, TOS last)."""
    return namestack.copy()


def num_qubits() -> int:
    """Number of live qubits in the workspace."""
    return len(namestack)


def pushQubit(name: str, weights: Sequence[complex] = (1, 0)):
    """
    Add a new qubit to the workspace as the new TOS.

    Args:
        name: Unique name for the qubit
        weights: Initial amplitudes [|0⟩ amplitude, |1⟩ amplitude],
                 normalized before use. Defaults to |0⟩.

    Raises:
        ValueError: If the name is already in use
    """
    global workspace, namestack

    if name in namestack:
        raise ValueError(f"Qubit name {name!r} is already in use")

    weights = np.array(weights, dtype=complex)
    weights = weights / np.linalg.norm(weights)
    namestack.append(name)
    workspace = np.reshape(workspace, (1, -1))
    workspace = np.kron(workspace, weights)


def _lift(names: Sequence[str]):
    """
    Reorder the name stack so that names end up on top, in the given order.

    The workspace is viewed as one axis per qubit and transposed; the last
    name becomes the TOS. Afterwards the workspace has shape
    (rest, 2**len(names)).
    """
    global workspace, namestack

    n = len(namestack)
    picked = [namestack.index(name) for name in names]
    order = [i for i in range(n) if i not in picked] + picked
    if order != list(range(n)):
        workspace = np.reshape(workspace, (2,) * n).transpose(order)
        namestack = [namestack[i] for i in order]
    workspace = np.reshape(workspace, (-1, 2 ** len(names)))


def tosQubit(name: str):
    """Move the named qubit to the top of stack without changing the state."""
    _lift([name])


def _check_distinct(names: Sequence[str]):
    if len(names) != len(set(names)):
        raise ValueError("The same qubit cannot occur twice as an argument")


def applyGate(gate: np.ndarray, *names: str):
    """
    Apply a gate matrix to the named qubits.

    The first name is the most significant qubit of the gate's index.

    Raises:
        ValueError: If a qubit is named twice or the gate size does not match
    """
    global workspace

    _check_distinct(names)
    if gate.shape != (2 ** len(names), 2 ** len(names)):
        raise ValueError(
            f"Gate of shape {gate.shape} cannot act on {len(names)} qubit(s)"
        )

    _lift(names)
    workspace = workspace @ gate.T


def applyControlled(gate: np.ndarray, controls: Sequence[str], target: str):
    """
    Apply a 2x2 gate to target on the subspace where every control is |1⟩.

    Only the all-ones control block of the workspace is multiplied, so the
    cost stays linear in the state size however many controls there are.

    Raises:
        ValueError: If a qubit is named twice or the gate is not 2x2
    """
    global workspace

    controls = list(controls)
    _check_distinct(controls + [target])
    if gate.shape != (2, 2):
        raise ValueError(f"Controlled gate must be 2x2, got shape {gate.shape}")

    _lift(controls + [target])
    workspace = np.reshape(workspace, (-1, 2 ** len(controls), 2))
    workspace[:, -1, :] = workspace[:, -1, :] @ gate.T


def probQubit(name: str) -> np.ndarray:
    """Probabilities [P(|0⟩), P(|1⟩)] of the named qubit."""
    _lift([name])
    prob = np.sum(np.abs(workspace) ** 2, axis=0)
    return prob / prob.sum()


def measureQubit(name: str) -> str:
    """
    Measure the named qubit in the computational basis and drop it.

    Returns:
        "0" or "1"
    """
    global workspace, namestack

    prob = probQubit(name)
    outcome = int(np.random.random() >= prob[0])
    workspace = workspace[:, outcome:outcome + 1] / np.sqrt(prob[outcome])
    namestack = namestack[:-1]
    return str(outcome)


def releaseQubit(name: str):
    """
    Hand a qubit back, removing it from the workspace.

    No gate is applied and nothing is checked. A qubit that is still entangled
    with the rest of the workspace collapses it on release, so callers must
    have returned it to a fixed basis state first.
    """
    measureQubit(name)
