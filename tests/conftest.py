import logging
import logging.handlers

import pytest

from twilio_sms import new_config


ACCOUNT_SID = "AC0123456789abcdef0123456789abcdef"
AUTH_TOKEN = "s3cr3t-auth-token-value"
FROM_NUMBER = "+15005550006"
TO_NUMBER = "+15558675310"


class FakeResponse:
    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; replays queued responses or exceptions"""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    return new_config(ACCOUNT_SID, AUTH_TOKEN, FROM_NUMBER, timeout=5)


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff sleeps instead of blocking"""
    recorded = []
    monkeypatch.setattr("twilio_sms.twilio_api_caller.time.sleep", recorded.append)
    return recorded


@pytest.fixture
def restore_root_logger():
    """Drop handlers installed by setup_logging and restore the root level"""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
