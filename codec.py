import base64
import binascii
import re
from typing import Type

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from curve import P256, Curve, Point, Scalar
from errors import InvalidPoint, InvalidPublicKey, MalformedEncoding

PEM_HEADER = b"-----BEGIN PUBLIC KEY-----"
PEM_FOOTER = b"-----END PUBLIC KEY-----"
_HEX_RE = re.compile(r"[0-9a-fA-F]*")


# --------------------------
# Scalars and secrets as hex
# --------------------------
def _int_to_bytes(i: int) -> bytes:
    """Minimal-length big-endian bytes; zero is empty"""
    return i.to_bytes((i.bit_length() + 7) // 8, byteorder='big')


def encode_int(value: int) -> str:
    return _int_to_bytes(value).hex()


def encode_scalar(scalar: Scalar) -> str:
    return encode_int(scalar.value)


def decode_int(text: str, source: str = "<input>") -> int:
    text = text.strip()
    if not _HEX_RE.fullmatch(text):
        raise MalformedEncoding(source, "not a hexadecimal string")
    if len(text) % 2:
        raise MalformedEncoding(source, "odd-length hexadecimal string")
    return int.from_bytes(bytes.fromhex(text), byteorder='big')


def decode_scalar(text: str, curve: Curve = P256, source: str = "<input>") -> Scalar:
    return Scalar(curve, decode_int(text, source))


# --------------------------
# Points as PEM SubjectPublicKeyInfo
# --------------------------
def _backend(curve: Curve) -> ec.EllipticCurve:
    if curve.backend is None:
        raise ValueError(f"Curve {curve.name} has no named-curve OID for PEM encoding")
    return curve.backend


def encode_point(point: Point) -> bytes:
    """PEM armored DER SubjectPublicKeyInfo with the named-curve OID"""
    numbers = ec.EllipticCurvePublicNumbers(point.x, point.y, _backend(point.curve))
    return numbers.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _pem_to_der(data: bytes, source: str) -> bytes:
    """Strip the PUBLIC KEY armour and base64-decode the body"""
    start = data.find(PEM_HEADER)
    end = data.find(PEM_FOOTER, start + 1)
    if start < 0 or end < 0:
        raise MalformedEncoding(source, "no PEM PUBLIC KEY block found")
    body = b"".join(data[start + len(PEM_HEADER):end].split())
    try:
        der = base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise MalformedEncoding(source, f"invalid base64 in PEM block: {e}") from e
    if not der:
        raise MalformedEncoding(source, "empty PEM block")
    return der


def decode_point(data: bytes, curve: Curve = P256, source: str = "<input>",
                 error: Type[InvalidPoint] = InvalidPoint) -> Point:
    """Parse a PEM public key; armour problems are MalformedEncoding, key problems `error`"""
    backend = _backend(curve)
    der = _pem_to_der(data, source)
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise error(f"{source}: {e}") from e

    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise error(f"{source}: not an elliptic curve public key")
    if key.curve.name != backend.name:
        raise error(f"{source}: key is on {key.curve.name}, expected {backend.name}")

    numbers = key.public_numbers()
    try:
        return Point(curve, numbers.x, numbers.y)
    except InvalidPoint as e:
        raise error(f"{source}: {e}") from e


def decode_public_key(data: bytes, curve: Curve = P256, source: str = "<input>") -> Point:
    return decode_point(data, curve, source, error=InvalidPublicKey)
