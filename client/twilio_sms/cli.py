import argparse
import sys

from .errors import TwilioSMSError
from .logging_config import get_logger, setup_logging
from .twilio_api_caller import DEFAULT_TIMEOUT, TwilioSMSClient, load_config_from_env

logger = get_logger(__name__)


def cmd_send_sms(args: argparse.Namespace) -> int:
    """Send an SMS message using credentials from the environment"""
    try:
        config = load_config_from_env(timeout=args.timeout)
        logger.debug(f"Loaded Twilio configuration for account {config}")

        with TwilioSMSClient(config) as client:
            client.send_sms(args.to, args.msg)
    except TwilioSMSError as e:
        logger.error(f"SMS send failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("ok")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="twilio-sms",
        description="Send an SMS message through Twilio. Credentials are read from "
                    "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER.",
        allow_abbrev=False,
    )
    p.add_argument("-to", default="", help="+phone number")
    p.add_argument("-msg", default="", help="message")
    p.add_argument("-timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT})")
    p.add_argument("-log-level", default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                   type=str.upper,
                   help="Logging level (default: LOG_LEVEL env var or WARNING)")
    p.set_defaults(func=cmd_send_sms)
    return p


def main(argv=None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(log_level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
