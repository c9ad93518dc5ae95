import logging
import sys
import unicodedata
from hmac import compare_digest
from typing import IO, Optional, Union

from .exceptions import KeySourceError

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def read_key(source: str, stdin: Optional[IO] = None) -> str:
    """
    Reads the base32 key from the first line of a key file.

    ``-`` reads standard input instead. The line is returned as is,
    trailing newline included; the decoder stops there on its own.

    :param source: path of the key file, or ``-``
    :param stdin: stream used for ``-``, defaults to :data:`sys.stdin`
    :returns: the first line
    """
    if source == STDIN_MARKER:
        stream = stdin or sys.stdin
        # bytes when the stream has them, so undecodable garbage just ends the key
        line = _ascii(getattr(stream, "buffer", stream).readline())
    else:
        try:
            with open(source, "rb") as f:
                line = _ascii(f.readline())
        except OSError as e:
            logger.debug("opening key file %s failed: %s", source, e)
            raise KeySourceError("cannot open {}".format(source)) from e
    if not line:
        raise KeySourceError("no key found")
    return line


def _ascii(line: Union[bytes, str]) -> str:
    if isinstance(line, bytes):
        return line.decode("ascii", errors="replace")
    return line


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
