import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from curve import P256, Curve

# y^2 = x^3 + 2x + 2 over GF(17); the group has prime order 19
TOY_CURVE = Curve("toy-17", p=17, a=2, b=2, gx=5, gy=1, n=19)


@pytest.fixture
def toy():
    return TOY_CURVE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MPDH_AUDIT_LOG", "MPDH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def fixed_rng(*values):
    """randbelow stand-in returning the given values in order"""
    it = iter(values)

    def rng(n):
        value = next(it)
        assert 0 <= value < n
        return value
    return rng


def pem_from_der(der: bytes) -> bytes:
    body = base64.encodebytes(der).replace(b"\n", b"")
    lines = [body[i:i + 64] for i in range(0, len(body), 64)]
    return b"-----BEGIN PUBLIC KEY-----\n" + b"\n".join(lines) + b"\n-----END PUBLIC KEY-----\n"


def p256_der(point) -> bytes:
    key = ec.EllipticCurvePublicNumbers(point.x, point.y, ec.SECP256R1()).public_key()
    return key.public_bytes(serialization.Encoding.DER,
                            serialization.PublicFormat.SubjectPublicKeyInfo)


def off_curve_pem() -> bytes:
    """P-256 generator with the low bit of y flipped"""
    der = bytearray(p256_der(P256.generator))
    der[-1] ^= 0x01
    return pem_from_der(bytes(der))


def identity_pem() -> bytes:
    """SubjectPublicKeyInfo whose point is the single 0x00 byte"""
    der = p256_der(P256.generator)
    algorithm = der[2:23]
    return pem_from_der(b"\x30" + bytes([len(algorithm) + 4]) + algorithm + b"\x03\x02\x00\x00")
