import hashlib
from typing import Any, Optional

from . import base32
from .exceptions import InvalidDigitsError, KeyDecodeError
from .mac import MacProvider, hmac_provider, hmac_sha1
from .trace import NULL_TRACE, Trace

DEFAULT_DIGITS = 6
MAX_COUNTER = 2**64 - 1
# offset 15 reads bytes 15..18
MIN_DIGEST_SIZE = 19


def validate_digits(digits: int) -> int:
    # the truncated value is 31 bits, so more than 10 digits adds nothing
    if isinstance(digits, bool) or not isinstance(digits, int) or not 1 <= digits <= 10:
        raise InvalidDigitsError("digits must be 1..10")
    return digits


def dynamic_truncate(digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation: the low nibble of the last byte picks a
    4 byte window, read big-endian with the top bit cleared.
    """
    if not digest:
        raise ValueError("empty digest")
    hmac_hash = bytearray(digest)
    offset = hmac_hash[-1] & 0xF
    if len(hmac_hash) < offset + 4:
        raise ValueError("digest of {} bytes is too short for offset {}".format(len(hmac_hash), offset))
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def render(digest: bytes, digits: int = DEFAULT_DIGITS) -> str:
    """
    Renders a MAC digest as a zero-padded decimal token of ``digits`` characters.
    """
    validate_digits(digits)
    code = dynamic_truncate(digest)
    # 10**10 keeps leading zeros for every digit count up to 10
    str_code = str(10_000_000_000 + (code % 10**digits))
    return str_code[-digits:]


def generate(
    key: bytes,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    mac: MacProvider = hmac_sha1,
    trace: Optional[Trace] = None,
) -> str:
    """
    Computes the HOTP token for ``counter`` (RFC 4226).

    :param key: raw key bytes, usually from :func:`base32.decode`
    :param counter: the moving factor, a 64-bit unsigned integer
    :param digits: token length, 1..10
    :param mac: keyed hash over the 8 byte counter
    :param trace: diagnostics context
    :returns: token string of exactly ``digits`` characters
    """
    trace = trace or NULL_TRACE
    validate_digits(digits)
    if not key:
        raise KeyDecodeError("no key found")
    message = OTP.int_to_bytestring(counter)
    trace.dump(1, "T", message)
    digest = mac(key, message)
    trace.dump(1, "HMAC", digest)
    return render(digest, digits)


def digest_size(digest: Any) -> int:
    """
    Size in bytes of the digest produced by a hashlib constructor or hash name.
    """
    hasher = hashlib.new(digest) if isinstance(digest, str) else digest()
    return hasher.digest_size


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        digest: Any = None,
        mac: Optional[MacProvider] = None,
        max_key_len: int = base32.MAX_KEY_LEN,
        casefold: bool = False,
        trace: Optional[Trace] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param digits: number of integers in the OTP, 1..10
        :param digest: digest function for the default HMAC provider (SHA1 if omitted)
        :param mac: custom MAC provider, overrides ``digest``
        :param max_key_len: capacity of the decoded key
        :param casefold: accept lowercase base32
        :param trace: diagnostics context
        """
        self.digits = validate_digits(digits)
        if mac is not None and digest is not None:
            raise ValueError("pass either digest or mac, not both")
        if digest is not None and digest_size(digest) < MIN_DIGEST_SIZE:
            raise ValueError(
                "selected digest function must generate digest size greater than or equals to {} bytes".format(
                    MIN_DIGEST_SIZE
                )
            )
        self.mac = mac or (hmac_sha1 if digest is None else hmac_provider(digest))
        self.secret = s
        self.max_key_len = max_key_len
        self.casefold = casefold
        self.trace = trace or NULL_TRACE
        # decoded once, so a bad key fails before any token is requested
        self._key = self._decode_secret()

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        if input < 0:
            raise ValueError("input must be positive integer")
        return generate(self.byte_secret(), input, self.digits, self.mac, self.trace)

    def byte_secret(self) -> bytes:
        return self._key

    def _decode_secret(self) -> bytes:
        if not self.secret:
            raise KeyDecodeError("missing key")
        key = base32.decode(self.secret, self.max_key_len, self.casefold, self.trace)
        if not key:
            raise KeyDecodeError("key does not contain any base32 data")
        return key

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        if i < 0 or i >= 1 << (8 * padding):
            raise ValueError("counter must fit in {} unsigned bytes".format(padding))
        # most significant byte first
        return bytes((i >> (8 * (padding - 1 - n))) & 0xFF for n in range(padding))
