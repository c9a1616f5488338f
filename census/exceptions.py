"""
Exceptions raised by the census generator.
"""

from typing import List, Optional


class CensusError(Exception):
    """Base class for census generation failures"""


class GenerationExhausted(CensusError):
    """A resampling loop could not satisfy its constraints within the retry cap"""

    def __init__(self, what: str, attempts: int):
        self.what = what
        self.attempts = attempts
        super().__init__(f"Could not generate a valid {what} after {attempts} attempts")


class DeliveryError(CensusError):
    """
    An artifact could not be delivered.

    The batch is aborted at the failing file; ``delivered`` lists the
    indices of files that were delivered before the failure.
    """

    def __init__(
        self,
        filename: str,
        failed_index: int,
        delivered: Optional[List[int]] = None,
        reason: str = ""
    ):
        self.filename = filename
        self.failed_index = failed_index
        self.delivered = list(delivered or [])
        message = f"Failed to deliver file {failed_index} ({filename})"
        if reason:
            message += f": {reason}"
        message += f". Delivered: {self.delivered}"
        super().__init__(message)
