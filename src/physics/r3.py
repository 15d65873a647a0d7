# src/physics/r3.py
import numpy as np

from src.config.settings import R3_DIM


class R3:
    """
    Plain 3-component real vector (x, y, z).
    Used for the position and momentum parts of a phase vector.
    """
    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_array(cls, v):
        arr = np.asarray(v, dtype=float)
        if arr.shape != (R3_DIM,):
            raise ValueError(f"Cannot coerce {v!r} to R3")
        return cls(arr[0], arr[1], arr[2])

    def getx(self):
        return self.x

    def gety(self):
        return self.y

    def getz(self):
        return self.z

    def to_array(self):
        return np.array([self.x, self.y, self.z], dtype=float)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __eq__(self, other):
        if not isinstance(other, R3):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __repr__(self):
        return f"R3({self.x!r}, {self.y!r}, {self.z!r})"
