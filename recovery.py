import logging
from typing import NamedTuple

from curve import P256, Affine, Curve, Point, Scalar, point_add
from errors import InvalidPoint, RecoveryMismatch

logger = logging.getLogger(__name__)


class Recovery(NamedTuple):
    point: Point
    shared_secret: int


# --------------------------
# Split-key secret recovery
# --------------------------
def partial_point(share: Scalar, ephemeral: Point) -> Affine:
    """One holder's contribution share*E; may be the identity for a zero share"""
    return ephemeral.multiply(share)


def combine_partials(curve: Curve, p1: Affine, p2: Affine) -> Affine:
    return point_add(curve, p1, p2)


def recover(ephemeral: Point, share_a: Scalar, share_b: Scalar, curve: Curve = P256) -> Recovery:
    """
    Recover the shared secret from an ephemeral public key and both shares.

    a1*E and a2*E are computed independently and added, then checked against
    (a1 + a2)*E. A difference raises RecoveryMismatch and nothing is returned.
    """
    if not isinstance(ephemeral, Point) or ephemeral.curve != curve:
        raise InvalidPoint(f"Ephemeral key is not a validated point on {curve.name}")
    if share_a.curve != curve or share_b.curve != curve:
        raise ValueError(f"Shares do not belong to curve {curve.name}")

    p1 = partial_point(share_a, ephemeral)
    p2 = partial_point(share_b, ephemeral)
    recovered = combine_partials(curve, p1, p2)

    check = ephemeral.multiply(share_a + share_b)
    if recovered != check:
        logger.error("Recovered point differs from direct computation on %s", curve.name)
        raise RecoveryMismatch("Recovered secret does not match direct computation")

    point = Point.from_affine(curve, recovered)
    logger.debug("Recovered point verified against direct computation")
    return Recovery(point, point.x)
