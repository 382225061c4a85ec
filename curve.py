from dataclasses import dataclass, field
from typing import Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import ec

from constants import P256_A, P256_B, P256_GX, P256_GY, P256_N, P256_P
from errors import InvalidPoint, PointAtInfinity

# Affine coordinates, None is the point at infinity
Affine = Optional[Tuple[int, int]]
INFINITY: Affine = None


# --------------------------
# Curve parameters
# --------------------------
@dataclass(frozen=True)
class Curve:
    """Short Weierstrass curve y^2 = x^3 + ax + b over GF(p) with subgroup order n"""
    name: str
    p: int
    a: int
    b: int
    gx: int
    gy: int
    n: int
    h: int = 1
    # Named curve in the cryptography library, None for curves it doesn't know
    backend: Optional[ec.EllipticCurve] = field(default=None, compare=False, repr=False)

    def is_on_curve(self, x: int, y: int) -> bool:
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0

    @property
    def generator(self) -> "Point":
        return Point(self, self.gx, self.gy)

    def scalar(self, value: int) -> "Scalar":
        return Scalar(self, value)


P256 = Curve("P-256", P256_P, P256_A, P256_B, P256_GX, P256_GY, P256_N,
             backend=ec.SECP256R1())


# --------------------------
# Point arithmetic on affine tuples
# --------------------------
def point_add(curve: Curve, p1: Affine, p2: Affine) -> Affine:
    """Add two points, handling the identity and doubling"""
    if p1 is INFINITY:
        return p2
    if p2 is INFINITY:
        return p1
    x1, y1 = p1
    x2, y2 = p2

    if x1 == x2 and (y1 != y2 or y1 == 0):
        return INFINITY

    if x1 == x2:
        slope = (3 * x1 * x1 + curve.a) * pow(2 * y1, -1, curve.p)
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, curve.p)
    slope %= curve.p

    x3 = (slope * slope - x1 - x2) % curve.p
    y3 = (slope * (x1 - x3) - y1) % curve.p
    return (x3, y3)


def point_double(curve: Curve, point: Affine) -> Affine:
    return point_add(curve, point, point)


def scalar_mult(curve: Curve, k: int, point: Affine) -> Affine:
    """
    Montgomery ladder over the bit length of the group order.
    Every bit costs one addition and one doubling whatever its value.
    """
    k %= curve.n
    r0, r1 = INFINITY, point
    for i in reversed(range(curve.n.bit_length())):
        if (k >> i) & 1:
            r0, r1 = point_add(curve, r0, r1), point_double(curve, r1)
        else:
            r0, r1 = point_double(curve, r0), point_add(curve, r0, r1)
    return r0


# --------------------------
# Validated value types
# --------------------------
@dataclass(frozen=True)
class Scalar:
    """Integer modulo the group order; reduced on construction"""
    curve: Curve = field(repr=False)
    value: int = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.value, int):
            raise TypeError(f"Scalar value must be int, not {type(self.value).__name__}")
        object.__setattr__(self, "value", self.value % self.curve.n)

    def __add__(self, other: "Scalar") -> "Scalar":
        if not isinstance(other, Scalar):
            return NotImplemented
        if other.curve != self.curve:
            raise ValueError("Cannot add scalars of different curves")
        return Scalar(self.curve, self.value + other.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Scalar(curve={self.curve.name})"


@dataclass(frozen=True)
class Point:
    """Non-identity point of the prime-order subgroup"""
    curve: Curve = field(repr=False)
    x: int
    y: int

    def __post_init__(self):
        c = self.curve
        if not (isinstance(self.x, int) and isinstance(self.y, int)):
            raise InvalidPoint("Point coordinates must be integers")
        if not (0 <= self.x < c.p and 0 <= self.y < c.p):
            raise InvalidPoint(f"Point coordinates out of range for {c.name}")
        if not c.is_on_curve(self.x, self.y):
            raise InvalidPoint(f"Point is not on curve {c.name}")
        # Cofactor curves need an explicit subgroup check
        if c.h != 1 and _multiply_unreduced(c, c.n, (self.x, self.y)) is not INFINITY:
            raise InvalidPoint(f"Point is not in the prime-order subgroup of {c.name}")

    @classmethod
    def from_affine(cls, curve: Curve, point: Affine) -> "Point":
        if point is INFINITY:
            raise PointAtInfinity(f"Result is the point at infinity on {curve.name}")
        return cls(curve, point[0], point[1])

    @property
    def affine(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def multiply(self, k: Scalar) -> Affine:
        if k.curve != self.curve:
            raise ValueError("Scalar and point belong to different curves")
        return scalar_mult(self.curve, k.value, self.affine)


def _multiply_unreduced(curve: Curve, k: int, point: Affine) -> Affine:
    """Double-and-add without reducing k, for order checks"""
    result = INFINITY
    addend = point
    while k:
        if k & 1:
            result = point_add(curve, result, addend)
        addend = point_double(curve, addend)
        k >>= 1
    return result


def base_mult(k: Scalar) -> Point:
    """k*G as a validated point"""
    curve = k.curve
    return Point.from_affine(curve, scalar_mult(curve, k.value, (curve.gx, curve.gy)))
