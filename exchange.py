import logging
import secrets
from typing import NamedTuple

from cryptography.hazmat.primitives.asymmetric import ec

from curve import P256, Curve, Point, Scalar, base_mult
from errors import ExchangeMismatch, InvalidPublicKey
from keysplit import RandomSource, random_scalar

logger = logging.getLogger(__name__)


class EphemeralKeyPair(NamedTuple):
    secret: Scalar
    public_key: Point


class Exchange(NamedTuple):
    ephemeral_public_key: Point
    shared_secret: int


def generate_ephemeral(curve: Curve = P256, rng: RandomSource = secrets.randbelow) -> EphemeralKeyPair:
    """Fresh (b, b*G) with b uniform in [1, n)"""
    b = random_scalar(curve, rng, low=1)
    return EphemeralKeyPair(b, base_mult(b))


def _library_shared_x(curve: Curve, b: Scalar, public_key: Point) -> int:
    """x-coordinate of b*P via the cryptography library's ECDH"""
    private_key = ec.derive_private_key(b.value, curve.backend)
    peer = ec.EllipticCurvePublicNumbers(public_key.x, public_key.y, curve.backend).public_key()
    return int.from_bytes(private_key.exchange(ec.ECDH(), peer), byteorder='big')


def send(public_key: Point, curve: Curve = P256, rng: RandomSource = secrets.randbelow,
         verify: bool = False) -> Exchange:
    """
    Run the sender side of the exchange against a recipient public key.

    Returns the ephemeral public key to transmit and the x-coordinate of
    b*PublicKey. The ephemeral secret never leaves this function. With
    verify=True the shared point is recomputed with the library ECDH on
    the named curve and compared.
    """
    if not isinstance(public_key, Point) or public_key.curve != curve:
        raise InvalidPublicKey(f"Public key is not a validated point on {curve.name}")

    ephemeral = generate_ephemeral(curve, rng)
    shared = Point.from_affine(curve, public_key.multiply(ephemeral.secret))

    if verify:
        if curve.backend is None:
            raise ValueError(f"Curve {curve.name} has no library counterpart to verify against")
        if _library_shared_x(curve, ephemeral.secret, public_key) != shared.x:
            raise ExchangeMismatch("Sender shared secret differs from library ECDH result")
        logger.debug("Sender shared secret verified against library ECDH")

    return Exchange(ephemeral.public_key, shared.x)
