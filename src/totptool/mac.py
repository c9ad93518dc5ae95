import hashlib
import hmac
from typing import Any, Callable

from .exceptions import MacError


# mac(key, message) -> digest
MacProvider = Callable[[bytes, bytes], bytes]


def hmac_provider(digest: Any = hashlib.sha1) -> MacProvider:
    """
    Builds a MAC provider around :func:`hmac.new`.

    :param digest: a hashlib constructor or a hash name such as ``"sha256"``
    :returns: callable taking ``(key, message)`` and returning the digest bytes
    """

    def compute(key: bytes, message: bytes) -> bytes:
        try:
            return hmac.new(key, message, digest).digest()
        except (ValueError, TypeError) as e:
            raise MacError("HMAC calculation error") from e

    return compute


hmac_sha1 = hmac_provider(hashlib.sha1)
