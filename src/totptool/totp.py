import datetime
import time
from typing import Any, NamedTuple, Optional, Union

from . import utils
from .mac import MacProvider
from .otp import DEFAULT_DIGITS, MAX_COUNTER, OTP
from .trace import Trace

DEFAULT_INTERVAL = 30

TimeLike = Union[int, float, datetime.datetime]


class Window(NamedTuple):
    """Current and next token, and how long the current one stays valid."""

    valid_for: int
    current: str
    next: str


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        digest: Any = None,
        mac: Optional[MacProvider] = None,
        interval: int = DEFAULT_INTERVAL,
        casefold: bool = False,
        trace: Optional[Trace] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time step in seconds, must be positive
        :param digits: number of integers in the OTP, 1..10
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param mac: custom MAC provider
        :param casefold: accept lowercase base32
        :param trace: diagnostics context
        """
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise ValueError("interval must be a positive integer")
        self.interval = interval
        super().__init__(s=s, digits=digits, digest=digest, mac=mac, casefold=casefold, trace=trace)

    def at(self, for_time: TimeLike, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def verify(self, otp: str, for_time: Optional[TimeLike] = None, valid_window: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = time.time()

        if valid_window:
            counter = self.timecode(for_time)
            for i in range(-valid_window, valid_window + 1):
                # no counters exist before the epoch or past 64 bits
                if not 0 <= counter + i <= MAX_COUNTER:
                    continue
                if utils.strings_equal(str(otp), str(self.generate_otp(counter + i))):
                    return True
            return False

        return utils.strings_equal(str(otp), str(self.at(for_time)))

    def remaining(self, for_time: TimeLike) -> int:
        """
        Seconds until the token for ``for_time`` expires.
        """
        t = self._seconds(for_time)
        return ((t // self.interval) + 1) * self.interval - t

    def window(self, for_time: Optional[TimeLike] = None) -> Window:
        """
        Current and next token for ``for_time`` (defaults to now), so a
        caller can show both across a rollover.
        """
        if for_time is None:
            for_time = time.time()
        counter = self.timecode(for_time)
        if counter >= MAX_COUNTER:
            raise ValueError("no token follows counter {}".format(counter))
        return Window(
            valid_for=self.remaining(for_time),
            current=self.generate_otp(counter),
            next=self.generate_otp(counter + 1),
        )

    def timecode(self, for_time: TimeLike) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).

        """
        return self._seconds(for_time) // self.interval

    @staticmethod
    def _seconds(for_time: TimeLike) -> int:
        if isinstance(for_time, datetime.datetime):
            for_time = for_time.timestamp()
        t = int(for_time)
        if t < 0:
            raise ValueError("time must not be before the Unix epoch")
        return t
