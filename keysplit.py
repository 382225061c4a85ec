import logging
import secrets
from typing import Callable, NamedTuple

from curve import P256, Curve, Point, Scalar, base_mult
from errors import EntropyFailure, PointAtInfinity

logger = logging.getLogger(__name__)

# randbelow-style source: rng(n) returns a uniform int in [0, n)
RandomSource = Callable[[int], int]


class KeySet(NamedTuple):
    public_key: Point
    share_a: Scalar
    share_b: Scalar


# --------------------------
# Random scalars
# --------------------------
def random_scalar(curve: Curve, rng: RandomSource = secrets.randbelow, low: int = 0) -> Scalar:
    """Uniform scalar in [low, n) drawn from a secure source"""
    try:
        value = low + rng(curve.n - low)
    except (OSError, NotImplementedError) as e:
        raise EntropyFailure(f"Secure random source unavailable: {e}") from e
    return Scalar(curve, value)


# --------------------------
# Additive key splitting
# --------------------------
def split_key(curve: Curve = P256, rng: RandomSource = secrets.randbelow) -> KeySet:
    """
    Generate two independent shares a1, a2 and the public key (a1 + a2)*G.
    A pair whose sum is zero mod n would give the identity as public key,
    so it is drawn again.
    """
    while True:
        share_a = random_scalar(curve, rng)
        share_b = random_scalar(curve, rng)
        try:
            public_key = base_mult(share_a + share_b)
        except PointAtInfinity:
            logger.debug("Shares sum to zero on %s, redrawing", curve.name)
            continue
        logger.debug("Generated key split on %s", curve.name)
        return KeySet(public_key, share_a, share_b)


def combined_public_key(share_a: Scalar, share_b: Scalar) -> Point:
    """Public key implied by a share pair"""
    return base_mult(share_a + share_b)
