# src/physics/phase_index.py
from enum import Enum


class PhaseIndex(Enum):
    """
    Symbolic names of the six phase coordinates, bound to their slot in a PhaseVector.
    Iteration order is X, XP, Y, YP, Z, ZP.
    """
    X = 0
    XP = 1
    Y = 2
    YP = 3
    Z = 4
    ZP = 5

    def val(self) -> int:
        return self.value

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def is_position(self) -> bool:
        return self.value % 2 == 0

    def is_momentum(self) -> bool:
        return self.value % 2 == 1

    @classmethod
    def from_val(cls, i: int) -> "PhaseIndex":
        try:
            return cls(i)
        except ValueError:
            raise IndexError(f"No phase coordinate at index {i!r}") from None
