"""Continuous-time linear quadratic regulator."""

from __future__ import annotations

import numpy as np

__all__ = ["solve_riccati_arimoto_potter", "Lqr"]


def _matrix(value) -> np.ndarray:
    return np.atleast_2d(np.asarray(value, dtype=float))


def solve_riccati_arimoto_potter(a, b, q, r) -> np.ndarray:
    """Solve the continuous algebraic Riccati equation for P.

    Uses the stable invariant subspace of the Hamiltonian matrix.
    """
    a, b, q, r = _matrix(a), _matrix(b), _matrix(q), _matrix(r)
    n = a.shape[0]
    ham = np.block([[a, -b @ np.linalg.inv(r) @ b.T], [-q, -a.T]])
    values, vectors = np.linalg.eig(ham)
    stable = vectors[:, values.real < 0.0]
    if stable.shape[1] != n:
        raise ValueError(
            f"Hamiltonian has {stable.shape[1]} stable eigenvalues, expected {n}"
        )
    vs_1 = stable[:n, :]
    vs_2 = stable[n:, :]
    return (vs_2 @ np.linalg.inv(vs_1)).real


class Lqr:
    """Computes the optimal state-feedback gain K for ``x' = A x + B u``."""

    def __init__(self, a, b, q, r) -> None:
        self._a = _matrix(a)
        self._b = _matrix(b)
        self._q = _matrix(q)
        self._r = _matrix(r)
        n = self._a.shape[0]
        m = self._b.shape[1]
        if self._a.shape != (n, n):
            raise ValueError("lqr: A should be square matrix")
        if self._b.shape[0] != n:
            raise ValueError("lqr: B rows should be equal to A rows")
        if self._q.shape != (n, n):
            raise ValueError("lqr: The rows and columns of Q should be equal to A")
        if self._r.shape != (m, m):
            raise ValueError("lqr: The rows and columns of R should be equal to the cols of B")
        self._k = np.zeros((m, n))

    def compute_k(self) -> bool:
        """Compute the gain; return False if Q or R is not a valid weight."""
        q_eig = np.linalg.eigvalsh(self._q)
        r_eig = np.linalg.eigvalsh(self._r)
        if np.any(q_eig < 0):
            return False
        if np.any(r_eig <= 0):
            return False
        if not (np.array_equal(self._q, self._q.T) and np.array_equal(self._r, self._r.T)):
            return False
        p = solve_riccati_arimoto_potter(self._a, self._b, self._q, self._r)
        self._k = np.linalg.inv(self._r) @ (self._b.T @ p.T)
        return True

    def k(self) -> np.ndarray:
        """Return a copy of the gain matrix."""
        return self._k.copy()