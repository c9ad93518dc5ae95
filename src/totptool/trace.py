import logging
from typing import Optional


class Trace(object):
    """
    Diagnostic context handed to each stage of the token pipeline.

    Nothing here is global: every computation gets its own (or the shared,
    silent ``NULL_TRACE``) so concurrent computations never see each other's
    verbosity.

    :param verbosity: 0 is silent, 1 dumps counter and MAC bytes, 2 adds the key
    :param logger: where dumps go, defaults to the ``totptool`` logger
    """

    def __init__(self, verbosity: int = 0, logger: Optional[logging.Logger] = None) -> None:
        self.verbosity = verbosity
        self.logger = logger or logging.getLogger("totptool")

    def enabled(self, level: int) -> bool:
        return self.verbosity >= level

    def dump(self, level: int, label: str, data: bytes) -> None:
        if self.enabled(level):
            self.logger.debug("%s: %s", label, data.hex())


NULL_TRACE = Trace()
