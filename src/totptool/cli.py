import argparse
import logging
import sys
import time
from typing import List, Optional

from .exceptions import TOTPError
from .otp import DEFAULT_DIGITS
from .totp import DEFAULT_INTERVAL, TOTP
from .trace import Trace
from .utils import read_key

DESCRIPTION = """\
By default current and next token are printed with
expiry information. Use -1 to just print the current token.
<key-file> can be - for key input on stdin.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="totptool",
        usage=(
            "%(prog)s [-v] [-1] [-t <time>] [-s <step>] [-d <digits>] <key-file>\n"
            "       %(prog)s [-v] [-1] [-t <time>] [-s <step>] [-d <digits>] -k <key>"
        ),
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("key_file", nargs="?", metavar="key-file", help="file holding the base32 key, - for stdin")
    parser.add_argument("when", nargs="?", type=int, metavar="time", help="same as -t")
    parser.add_argument("-k", dest="key", metavar="key", help="base32 key given directly")
    parser.add_argument("-t", dest="time", type=int, metavar="time", help="Unix time to use instead of now")
    parser.add_argument("-s", dest="step", type=int, default=DEFAULT_INTERVAL, metavar="step", help="time step in seconds")
    parser.add_argument("-d", dest="digits", type=int, default=DEFAULT_DIGITS, metavar="digits", help="token length, 1..10")
    parser.add_argument("-v", dest="verbose", action="count", default=0, help="dump intermediate values, repeat for more")
    parser.add_argument("-1", dest="just1", action="store_true", help="only print the current token")
    return parser


def fail(message: str) -> int:
    print("ERROR: {}".format(message), file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    # with -k the only positional is the time
    if args.key is not None and args.key_file is not None:
        if args.when is not None:
            return fail("too many key specifications, pick one")
        try:
            args.when = int(args.key_file)
        except ValueError:
            return fail("too many key specifications, pick one")
        args.key_file = None

    if args.key is None and args.key_file is None:
        return fail("missing key")
    if not 1 <= args.digits <= 10:
        return fail("<digits> must be 1..10")
    if args.step <= 0:
        return fail("<step> must be positive")

    t = args.time if args.time is not None else args.when
    if t is None:
        t = int(time.time())

    try:
        secret = args.key if args.key is not None else read_key(args.key_file)
        totp = TOTP(secret, digits=args.digits, interval=args.step, trace=Trace(args.verbose))
        if args.just1:
            print(totp.at(t))
            return 0
        window = totp.window(t)
    except (TOTPError, ValueError) as e:
        return fail(str(e))

    if args.step > 1:
        print("(valid for {} sec)".format(window.valid_for))
    print(window.current)
    print(window.next)
    return 0
