"""
Scoped temporary qubits.

    with ancillas(2) as (a0, a1):
        ...  # must leave a0 and a1 back in |0⟩

Release only removes the qubits from the workspace. Driving them back to a
fixed state, disentangled from the register, is the job of the code inside
the block; the manager never checks it.

Ancilla names start with ANCILLA_PREFIX, which is reserved for this module.
"""

import itertools
from contextlib import contextmanager
from typing import Iterator, List

from .core import get_namestack, pushQubit, releaseQubit
from .errors import PreconditionViolation

ANCILLA_PREFIX = "__qsynth_anc:"

_names = itertools.count()


def _fresh_name() -> str:
    live = get_namestack()
    name = f"{ANCILLA_PREFIX}{next(_names)}"
    while name in live:
        name = f"{ANCILLA_PREFIX}{next(_names)}"
    return name


@contextmanager
def ancillas(count: int = 1) -> Iterator[List[str]]:
    """
    Acquire `count` fresh qubits in |0⟩ for the duration of a with-block.

    Names are unique for the life of the process, so nested scopes never
    collide. Qubits are released in reverse order of acquisition, on normal
    exit and when the block raises.

    Raises:
        PreconditionViolation: If count < 1
    """
    if count < 1:
        raise PreconditionViolation(f"Ancilla count must be >= 1, got {count}")

    names = [_fresh_name() for _ in range(count)]
    acquired = []
    try:
        for name in names:
            pushQubit(name, [1, 0])
            acquired.append(name)
        yield list(names)
    finally:
        for name in reversed(acquired):
            releaseQubit(name)
