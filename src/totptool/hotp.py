from typing import Any, Optional

from . import utils
from .mac import MacProvider
from .otp import DEFAULT_DIGITS, OTP
from .trace import Trace


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        digest: Any = None,
        mac: Optional[MacProvider] = None,
        initial_count: int = 0,
        trace: Optional[Trace] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param initial_count: starting HMAC counter value, defaults to 0
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param mac: custom MAC provider
        :param trace: diagnostics context
        """
        self.initial_count = initial_count
        super().__init__(s=s, digits=digits, digest=digest, mac=mac, trace=trace)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    def verify(self, otp: str, counter: int) -> bool:
        """
        Verifies the OTP passed in against the current counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        """
        return utils.strings_equal(str(otp), str(self.at(counter)))
