"""
Twilio SMS Client

A Python client library and command line tool for sending SMS messages through
the Twilio REST API.
"""

from .errors import TwilioSMSError, ValidationError, TransportError, RemoteError
from .twilio_api_caller import TwilioConfig, TwilioSMSClient, new_config, load_config_from_env, send_sms

__all__ = [
    'TwilioConfig',
    'TwilioSMSClient',
    'new_config',
    'load_config_from_env',
    'send_sms',
    'TwilioSMSError',
    'ValidationError',
    'TransportError',
    'RemoteError',
]

__version__ = "0.1.0"
