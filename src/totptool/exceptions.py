class TOTPError(Exception):
    """
    Base class for errors raised while computing a token.
    """


class KeyDecodeError(TOTPError, ValueError):
    """
    The key is absent or its base32 text decodes to zero bytes.
    """


class InvalidDigitsError(TOTPError, ValueError):
    """
    The requested token length is outside 1..10.
    """


class MacError(TOTPError):
    """
    The keyed hash primitive failed; no token is produced.
    """


class KeySourceError(TOTPError):
    """
    A key file (or stdin) could not be read or holds no key.
    """
