# src/physics/phase_vector.py
"""
Homogeneous phase-space vector (x, xp, y, yp, z, zp, 1).

The seventh coordinate is always 1 when observed from outside the class, so an
affine map (linear part plus translation) acting on the vector is a single
PhaseMatrix product. Arithmetic only touches the six phase coordinates and
restores the homogeneous coordinate before returning.
"""
from __future__ import annotations

import logging
import numbers
import re
import struct
import sys

import numpy as np

from src.config.settings import (
    ATTR_DATA,
    DATA_LABEL,
    HASH_MULTIPLIER,
    HOMOGENEOUS_INDEX,
    HOMOGENEOUS_VALUE,
    MIN_PARSE_TOKENS,
    PARSED_TOKENS,
    PHASE_COORDS,
    PHASE_DIM,
    PRINT_DIGITS,
    PRINT_WIDTH,
    TOKEN_DELIMITERS,
)
from src.data.data_adaptor import DataFormatError
from src.physics.phase_index import PhaseIndex
from src.physics.phase_matrix import PhaseMatrix
from src.physics.r3 import R3

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile("[" + re.escape(TOKEN_DELIMITERS) + "]")

# ASCII decimal literals plus the special values written by repr() and Java
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:NaN|nan|Infinity|infinity|inf|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)

_MASK_32 = 0xFFFFFFFF
_MASK_64 = 0xFFFFFFFFFFFFFFFF
_CANONICAL_NAN_BITS = 0x7FF8000000000000


def _to_signed(val, bits):
    val &= (1 << bits) - 1
    if val >= 1 << (bits - 1):
        val -= 1 << bits
    return val


def _double_bits(val: float) -> int:
    """Signed 64-bit IEEE-754 pattern of val, with all NaNs collapsed to one pattern."""
    if val != val:
        return _CANONICAL_NAN_BITS
    return struct.unpack(">q", struct.pack(">d", val))[0]


def _tokenize(text):
    return [tok for tok in _TOKEN_SPLIT.split(text) if tok]


def _coerce_r3(v, role):
    if isinstance(v, R3):
        return v
    try:
        return R3.from_array(v)
    except ValueError:
        raise ValueError(f"{role} must be a 3D vector, got {v!r}") from None


class PhaseVector:
    """
    Phase coordinates of a particle in three planes plus the homogeneous 1.
    Indices can be ints 0..5 or PhaseIndex members; index 6 is read-only.
    """

    ATTR_DATA = ATTR_DATA
    DATA_LABEL = DATA_LABEL

    # numpy scalars defer to __rmul__ instead of broadcasting over __iter__
    __array_ufunc__ = None

    def __init__(self, x=0.0, xp=0.0, y=0.0, yp=0.0, z=0.0, zp=0.0):
        self._vec = np.array([x, xp, y, yp, z, zp, HOMOGENEOUS_VALUE], dtype=float)

    # ---------------------------
    # factories
    # ---------------------------
    @classmethod
    def _from_buffer(cls, buf):
        # takes ownership of buf, which must not be shared with another vector
        vec = cls.__new__(cls)
        vec._vec = buf
        return vec

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def copy_of(cls, vec):
        return vec.copy()

    @classmethod
    def from_array(cls, arr):
        """
        Initial value from the first six entries of arr, in (x, xp, y, yp, z, zp) order.
        """
        raw = np.asarray(arr)
        if raw.ndim != 1 or raw.dtype.kind not in "iuf":
            raise ValueError(f"PhaseVector needs a flat numeric array, got {arr!r}")
        vals = raw.astype(float)
        if vals.size < PHASE_COORDS:
            raise ValueError(f"PhaseVector needs {PHASE_COORDS} values, got {vals.size}")
        return cls(*vals[:PHASE_COORDS])

    @classmethod
    def from_r3(cls, pos, mom):
        """
        Interleave a position (x, y, z) and a momentum (xp, yp, zp) into (x, xp, y, yp, z, zp).
        """
        p = _coerce_r3(pos, "position")
        m = _coerce_r3(mom, "momentum")
        return cls(p.x, m.x, p.y, m.y, p.z, m.z)

    @classmethod
    def parse(cls, text):
        vec = cls()
        vec.set_vector(text)
        return vec

    @classmethod
    def from_adaptor(cls, adaptor):
        vec = cls()
        vec.load(adaptor)
        return vec

    def copy(self):
        return PhaseVector._from_buffer(self._vec.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # ---------------------------
    # assignment
    # ---------------------------
    def set_vector(self, text):
        """
        Assign coordinates from a string such as "(x,xp,y,yp,z,zp)".

        Tokens are separated by any of space, comma, '(' and ')'. At least six
        tokens are required but only the first five are read, into x..z; zp keeps
        its current value. Tokens read before a malformed one stay assigned.
        """
        tokens = _tokenize(text)
        if len(tokens) < MIN_PARSE_TOKENS:
            raise ValueError(f"PhaseVector.set_vector - wrong number of token strings: {text!r}")

        for i, tok in enumerate(tokens[:PARSED_TOKENS]):
            if _FLOAT_LITERAL.fullmatch(tok) is None:
                raise DataFormatError(f"PhaseVector.set_vector - bad numeric value {tok!r} in {text!r}")
            self._vec[i] = float(tok)

        self._vec[HOMOGENEOUS_INDEX] = HOMOGENEOUS_VALUE

    def set_elem(self, i, val):
        if isinstance(i, PhaseIndex):
            idx = i.val()
        else:
            idx = int(i)
            if idx < 0 or idx >= PHASE_COORDS:
                raise IndexError(f"PhaseVector.set_elem - index {idx} outside 0..{PHASE_COORDS - 1}")
        self._vec[idx] = float(val)

    def get_elem(self, i):
        if isinstance(i, PhaseIndex):
            idx = i.val()
        else:
            idx = int(i)
            if idx < 0 or idx >= PHASE_DIM:
                raise IndexError(f"PhaseVector.get_elem - index {idx} outside 0..{PHASE_DIM - 1}")
        return float(self._vec[idx])

    def getx(self):
        return self.get_elem(PhaseIndex.X)

    def getxp(self):
        return self.get_elem(PhaseIndex.XP)

    def gety(self):
        return self.get_elem(PhaseIndex.Y)

    def getyp(self):
        return self.get_elem(PhaseIndex.YP)

    def getz(self):
        return self.get_elem(PhaseIndex.Z)

    def getzp(self):
        return self.get_elem(PhaseIndex.ZP)

    def setx(self, val):
        self.set_elem(PhaseIndex.X, val)

    def setxp(self, val):
        self.set_elem(PhaseIndex.XP, val)

    def sety(self, val):
        self.set_elem(PhaseIndex.Y, val)

    def setyp(self, val):
        self.set_elem(PhaseIndex.YP, val)

    def setz(self, val):
        self.set_elem(PhaseIndex.Z, val)

    def setzp(self, val):
        self.set_elem(PhaseIndex.ZP, val)

    x = property(getx, setx)
    xp = property(getxp, setxp)
    y = property(gety, sety)
    yp = property(getyp, setyp)
    z = property(getz, setz)
    zp = property(getzp, setzp)

    def get_position(self):
        return R3(self.x, self.y, self.z)

    def get_momentum(self):
        return R3(self.xp, self.yp, self.zp)

    def to_array(self):
        return self._vec.copy()

    def __len__(self):
        return PHASE_DIM

    def __getitem__(self, i):
        return self.get_elem(i)

    def __setitem__(self, i, val):
        self.set_elem(i, val)

    def __iter__(self):
        return iter(self._vec.tolist())

    # ---------------------------
    # archive
    # ---------------------------
    def save(self, adaptor):
        adaptor.set_value(ATTR_DATA, self.to_string())

    def load(self, adaptor):
        """
        Restore from the "values" attribute of adaptor; leaves the vector alone if it is missing.
        """
        if not adaptor.has_attribute(ATTR_DATA):
            logger.debug("No %r attribute on node, vector unchanged", ATTR_DATA)
            return
        self.set_vector(adaptor.string_value(ATTR_DATA))

    def save_child(self, adaptor):
        child = adaptor.create_child(DATA_LABEL)
        self.save(child)
        return child

    def load_child(self, adaptor):
        child = adaptor.child_adaptor(DATA_LABEL)
        if child is None:
            raise DataFormatError(f"Node {adaptor.name()!r} has no {DATA_LABEL} child")
        self.load(child)

    # ---------------------------
    # algebra
    # ---------------------------
    def negate_equals(self):
        self._vec[:PHASE_COORDS] = -self._vec[:PHASE_COORDS]

    def negate(self):
        vec = self.copy()
        vec.negate_equals()
        return vec

    def plus(self, vec):
        buf = self._vec + vec._vec
        buf[HOMOGENEOUS_INDEX] = HOMOGENEOUS_VALUE
        return PhaseVector._from_buffer(buf)

    def plus_equals(self, vec):
        self._vec += vec._vec
        self._vec[HOMOGENEOUS_INDEX] = HOMOGENEOUS_VALUE

    def times(self, other):
        """
        Scalar product, or premultiplication by a PhaseMatrix (M . v).
        """
        if isinstance(other, PhaseMatrix):
            buf = other.get_array() @ self._vec
        elif isinstance(other, numbers.Real):
            buf = self._vec * float(other)
        else:
            raise TypeError(f"Cannot multiply PhaseVector by {type(other).__name__}")
        buf[HOMOGENEOUS_INDEX] = HOMOGENEOUS_VALUE
        return PhaseVector._from_buffer(buf)

    def times_equals(self, s):
        # the scaled copy is discarded, only the homogeneous coordinate is reset
        _ = self._vec * float(s)
        logger.debug("times_equals(%r) leaves phase coordinates unchanged", s)
        self._vec[HOMOGENEOUS_INDEX] = HOMOGENEOUS_VALUE

    def inner_prod(self, vec):
        return float(np.dot(self._vec[:PHASE_COORDS], vec._vec[:PHASE_COORDS]))

    def outer_prod(self, vec):
        return PhaseMatrix(np.outer(self._vec, vec._vec))

    def norm1(self):
        return float(np.sum(np.abs(self._vec[:PHASE_COORDS])))

    def norm2(self):
        """
        Sum of squares of the phase coordinates (no square root is taken).
        """
        v = self._vec[:PHASE_COORDS]
        return float(np.dot(v, v))

    def norm_inf(self):
        return float(np.max(np.abs(self._vec[:PHASE_COORDS])))

    def __neg__(self):
        return self.negate()

    def __add__(self, other):
        if not isinstance(other, PhaseVector):
            return NotImplemented
        return self.plus(other)

    def __iadd__(self, other):
        if not isinstance(other, PhaseVector):
            return NotImplemented
        self.plus_equals(other)
        return self

    def __mul__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self.times(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    # ---------------------------
    # equality / hashing
    # ---------------------------
    def __eq__(self, other):
        if other is self:
            return True
        if not isinstance(other, PhaseVector):
            return NotImplemented
        return all(
            _double_bits(self.get_elem(i)) == _double_bits(other.get_elem(i))
            for i in range(PHASE_COORDS)
        )

    def hash_code(self):
        """
        32-bit hash over the bit patterns of x..zp, homogeneous coordinate excluded.
        """
        bits = _double_bits(self.get_elem(0))
        for i in range(1, PHASE_COORDS):
            bits = _to_signed(bits * HASH_MULTIPLIER + _double_bits(self.get_elem(i)), 64)
        low = _to_signed(bits & _MASK_32, 32)
        high = _to_signed((bits & _MASK_64) >> 32, 32)
        return low ^ high

    def __hash__(self):
        return self.hash_code()

    # ---------------------------
    # text
    # ---------------------------
    def to_string(self):
        return "(" + ",".join(repr(v) for v in self._vec.tolist()) + ")"

    def print_string(self):
        vals = self._vec.tolist()
        return ",".join(repr(v) for v in vals[:PARSED_TOKENS] + [vals[HOMOGENEOUS_INDEX]])

    def format_column(self, width=PRINT_WIDTH, digits=PRINT_DIGITS):
        return "\n".join(f"{v:{width}.{digits}f}" for v in self._vec.tolist())

    def print(self, stream=None):
        """
        Without a stream, print the fixed-width column to stdout; otherwise write str(self), no newline.
        """
        if stream is None:
            sys.stdout.write(self.format_column() + "\n")
            return
        stream.write(self.to_string())

    def println(self, stream=None):
        (stream or sys.stdout).write(self.to_string() + "\n")

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return "PhaseVector(" + ", ".join(repr(v) for v in self._vec[:PHASE_COORDS].tolist()) + ")"
