# --------------------------
# Error taxonomy
# --------------------------
class MPDHError(Exception):
    """Base class for every failure of the split-key protocol"""


class EntropyFailure(MPDHError):
    """Secure random source unavailable"""


class InvalidPoint(MPDHError, ValueError):
    """Point is off the curve, outside the subgroup or on another curve"""


class InvalidPublicKey(InvalidPoint):
    """Recipient public key failed validation"""


class PointAtInfinity(MPDHError):
    """Computation produced the identity point"""


class MalformedEncoding(MPDHError, ValueError):
    """PEM or hex input could not be decoded"""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class RecoveryMismatch(MPDHError):
    """a1*E + a2*E differs from (a1 + a2)*E"""


class ExchangeMismatch(MPDHError):
    """Sender shared point differs from the library ECDH result"""


class IOFailure(MPDHError):
    """File could not be read or written"""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause.strerror or cause}")


class DuplicatePath(MPDHError, ValueError):
    """Two files of one operation resolve to the same path"""
