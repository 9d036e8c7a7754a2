"""
Twilio API Client Module

This module sends SMS messages through the Twilio Messages REST API using
HTTP Basic authentication with the account SID and auth token.
"""

import os
import time
from dataclasses import dataclass, field
from typing import Mapping, Optional

import requests
from pydantic import SecretStr

from .errors import RemoteError, TransportError, ValidationError
from .logging_config import get_logger, log_sms_event

logger = get_logger(__name__)

API_VERSION = "2010-04-01"
API_BASE_URL = "https://api.twilio.com"

# Backoff applied to 429 responses, in seconds
INITIAL_BACKOFF = 1
MAX_BACKOFF = 4

# https://support.twilio.com/hc/en-us/articles/223181508
SINGLE_SEGMENT_LEN = 160
CONCATENATED_LEN = 1600

DEFAULT_TIMEOUT = 5

ENV_ACCOUNT_SID = "TWILIO_ACCOUNT_SID"
ENV_AUTH_TOKEN = "TWILIO_AUTH_TOKEN"
ENV_PHONE_NUMBER = "TWILIO_PHONE_NUMBER"


@dataclass(frozen=True)
class TwilioConfig:
    """Credentials and limits for one Twilio sender number"""

    account_sid: str
    auth_token: SecretStr = field(repr=False)
    from_number: str
    max_msg_len: int = SINGLE_SEGMENT_LEN
    timeout: float = DEFAULT_TIMEOUT

    def __str__(self) -> str:
        return self.account_sid

    @property
    def api_url(self) -> str:
        return f"{API_BASE_URL}/{API_VERSION}/Accounts/{self.account_sid}/Messages.json"


def new_config(sid: str, token: str, from_number: str,
               timeout: float = DEFAULT_TIMEOUT,
               enable_concatenation: bool = False) -> TwilioConfig:
    """
    Build a validated TwilioConfig.

    Args:
        sid: Twilio account SID
        token: Twilio auth token
        from_number: Twilio phone number messages are sent from
        timeout: Per-request HTTP timeout in seconds
        enable_concatenation: Allow messages up to 1600 bytes instead of 160

    Returns:
        TwilioConfig: Read-only configuration

    Raises:
        ValidationError: If a required field is empty or the timeout is negative
    """
    if not sid:
        raise ValidationError("no account sid specified")
    if not token:
        raise ValidationError("no authentication token specified")
    if not from_number:
        raise ValidationError("no Twilio phone number specified")
    if timeout < 0:
        raise ValidationError("timeout must be non-negative")

    max_len = CONCATENATED_LEN if enable_concatenation else SINGLE_SEGMENT_LEN

    return TwilioConfig(
        account_sid=sid,
        auth_token=SecretStr(token),
        from_number=from_number,
        max_msg_len=max_len,
        timeout=float(timeout),
    )


def load_config_from_env(timeout: float = DEFAULT_TIMEOUT,
                         environ: Optional[Mapping[str, str]] = None) -> TwilioConfig:
    """Build a TwilioConfig from the TWILIO_* environment variables"""
    if environ is None:
        environ = os.environ

    values = []
    for name in (ENV_ACCOUNT_SID, ENV_AUTH_TOKEN, ENV_PHONE_NUMBER):
        value = environ.get(name, "")
        if not value:
            raise ValidationError(f"please export {name}")
        values.append(value)

    sid, token, from_number = values
    return new_config(sid, token, from_number, timeout, enable_concatenation=True)


def _status_line(response: requests.Response) -> str:
    """Status line as Twilio sent it, e.g. "400 Bad Request" """
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


class TwilioSMSClient:
    """Client for the Twilio Messages API"""

    def __init__(self, config: TwilioConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def close(self):
        """Close the HTTP session if this client created it"""
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close the HTTP session"""
        self.close()

    def _validate(self, to_number: str, message: str):
        if not to_number:
            raise ValidationError("no phone number specified")
        if not message:
            raise ValidationError("no message specified")
        try:
            encoded = message.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError("message is not valid UTF-8") from e
        if len(encoded) > self.config.max_msg_len:
            raise ValidationError(f"message exceeds {self.config.max_msg_len} bytes")

    def _post(self, data: dict) -> requests.Response:
        try:
            return self._session.post(
                self.config.api_url,
                data=data,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                auth=(self.config.account_sid, self.config.auth_token.get_secret_value()),
                # requests treats None as no timeout but rejects 0
                timeout=self.config.timeout or None,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to Twilio failed: {e}")
            raise TransportError(f"Failed to reach Twilio: {e}") from e

    def send_sms(self, to_number: str, message: str) -> None:
        """
        Send an SMS message.

        429 responses are retried after 1, 2 and 4 seconds; any other status
        ends the attempt loop.

        Raises:
            ValidationError: If the recipient or message is invalid
            TransportError: If the request could not be sent
            RemoteError: If Twilio answered with a non-2xx status
        """
        self._validate(to_number, message)

        data = {
            "To": to_number,
            "From": self.config.from_number,
            "Body": message,
        }

        attempt = 0
        delay = 0
        while True:
            if delay:
                time.sleep(delay)
            attempt += 1
            logger.debug(f"Sending SMS to {to_number} (attempt {attempt})")
            response = self._post(data)
            response.close()

            if response.status_code != 429:
                break

            delay = delay * 2 if delay else INITIAL_BACKOFF
            if delay > MAX_BACKOFF:
                break
            logger.warning(f"Twilio rate limited the request, retrying in {delay}s")
            log_sms_event("sms_rate_limited", to_number=to_number, attempt=attempt,
                          status=response.status_code, success=False)

        # The response body is documented at https://www.twilio.com/docs/usage/twilios-response
        # but only the status is needed here.
        if 200 <= response.status_code < 300:
            logger.info(f"SMS sent to {to_number} from {self.config.from_number}")
            log_sms_event("sms_sent", to_number=to_number, from_number=self.config.from_number,
                          attempt=attempt, status=response.status_code)
            return None

        status_line = _status_line(response)
        logger.error(f"Twilio rejected SMS to {to_number}: {status_line}")
        log_sms_event("sms_failed", to_number=to_number, from_number=self.config.from_number,
                      attempt=attempt, status=response.status_code, success=False,
                      error=status_line)
        raise RemoteError(status_line, response.status_code)


def send_sms(config: TwilioConfig, to_number: str, message: str,
             session: Optional[requests.Session] = None) -> None:
    """
    Send an SMS message with a one-off client

    Args:
        config: Twilio configuration
        to_number: Recipient phone number
        message: The message to send
        session: Optional requests session to send through
    """
    with TwilioSMSClient(config, session) as client:
        client.send_sms(to_number, message)
