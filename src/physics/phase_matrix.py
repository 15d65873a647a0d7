# src/physics/phase_matrix.py
import numpy as np

from src.config.settings import PHASE_DIM, PHASE_COORDS, HOMOGENEOUS_INDEX, HOMOGENEOUS_VALUE


class PhaseMatrix:
    """
    7x7 matrix acting on homogeneous phase vectors.
    Translations live in the last column so affine maps compose by multiplication.
    """
    def __init__(self, arr=None):
        if arr is None:
            self._mat = np.zeros((PHASE_DIM, PHASE_DIM), dtype=float)
        else:
            mat = np.array(arr, dtype=float)
            if mat.shape != (PHASE_DIM, PHASE_DIM):
                raise ValueError(f"PhaseMatrix must be {PHASE_DIM}x{PHASE_DIM}, got {mat.shape}")
            self._mat = mat

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def identity(cls):
        return cls(np.eye(PHASE_DIM))

    @classmethod
    def translation(cls, vec):
        """
        Identity plus a translation by the phase coordinates of vec (anything with get_elem).
        """
        mat = cls.identity()
        for i in range(PHASE_COORDS):
            mat.set_elem(i, HOMOGENEOUS_INDEX, vec.get_elem(i))
        mat.set_elem(HOMOGENEOUS_INDEX, HOMOGENEOUS_INDEX, HOMOGENEOUS_VALUE)
        return mat

    def get_elem(self, i, j):
        return float(self._mat[int(i), int(j)])

    def set_elem(self, i, j, val):
        self._mat[int(i), int(j)] = float(val)

    def get_array(self):
        return self._mat.copy()

    def copy(self):
        return PhaseMatrix(self._mat.copy())

    def times(self, other):
        if not isinstance(other, PhaseMatrix):
            raise TypeError(f"Cannot multiply PhaseMatrix by {type(other).__name__}")
        return PhaseMatrix(self._mat @ other._mat)

    def transpose(self):
        return PhaseMatrix(self._mat.T.copy())

    def __matmul__(self, other):
        if isinstance(other, PhaseMatrix):
            return self.times(other)
        # PhaseVector premultiplication, resolved on the vector side
        if hasattr(other, "times") and hasattr(other, "get_elem"):
            return other.times(self)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, PhaseMatrix):
            return NotImplemented
        return bool(np.array_equal(self._mat, other._mat))

    __hash__ = None

    def __str__(self):
        rows = [",".join(repr(float(v)) for v in row) for row in self._mat]
        return "[" + ";".join("(" + r + ")" for r in rows) + "]"

    def __repr__(self):
        return f"PhaseMatrix({self._mat.tolist()!r})"
