from . import base32 as base32
from .exceptions import InvalidDigitsError as InvalidDigitsError
from .exceptions import KeyDecodeError as KeyDecodeError
from .exceptions import KeySourceError as KeySourceError
from .exceptions import MacError as MacError
from .exceptions import TOTPError as TOTPError
from .hotp import HOTP as HOTP
from .mac import hmac_provider as hmac_provider
from .mac import hmac_sha1 as hmac_sha1
from .otp import OTP as OTP
from .otp import generate as generate
from .otp import render as render
from .totp import TOTP as TOTP
from .trace import Trace as Trace


def totp(
    secret: str,
    for_time: int,
    step: int = 30,
    digits: int = 6,
) -> str:
    """
    One-shot TOTP token for a base32 ``secret`` at Unix time ``for_time``.
    """
    return TOTP(secret, digits=digits, interval=step).at(for_time)
