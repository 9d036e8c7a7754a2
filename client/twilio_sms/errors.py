"""
Error types for the Twilio SMS client

Every failure raised by this package derives from TwilioSMSError so callers
can catch them with a single except clause.
"""


class TwilioSMSError(Exception):
    """Base class for all Twilio SMS client errors"""


class ValidationError(TwilioSMSError, ValueError):
    """Bad caller input or missing configuration; raised before any network call"""


class TransportError(TwilioSMSError):
    """The request could not be delivered to the Twilio API"""


class RemoteError(TwilioSMSError):
    """The Twilio API answered with a non-2xx status"""

    def __init__(self, status_line: str, status_code: int):
        super().__init__(status_line)
        self.status_line = status_line
        self.status_code = status_code
