# --------------------------
# Constants
# --------------------------
# NIST P-256 (secp256r1) domain parameters
P256_P = 0xffffffff00000001000000000000000000000000ffffffffffffffffffffffff
P256_A = -3
P256_B = 0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b
P256_GX = 0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296
P256_GY = 0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5
P256_N = 0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551

SHARE_A_HOLDER = "Alice"
SHARE_B_HOLDER = "Chuck"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
