#!/usr/bin/env python3
"""Social login cookie harvester.

Logs in through the configured identity provider and prints the resulting
cookies as JSON on stdout, ready to be injected into another browser or
HTTP session.

Usage:
    python main.py [--headless | --headed] [--popup] [--all-cookies]
"""

import sys
import json
import asyncio
import argparse

from social_login.utils.config import get_config
from social_login.utils.logger import setup_logging, get_logger


logger = get_logger(__name__)


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Log in with an identity provider and print the session cookies as JSON"
    )

    parser.add_argument(
        "--env-file",
        type=str,
        help="Path to .env file (default: .env in project root)"
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--headless",
        dest="headless",
        action="store_true",
        default=None,
        help="Run browser in headless mode (overrides HEADLESS_MODE env var)"
    )
    mode.add_argument(
        "--headed",
        dest="headless",
        action="store_false",
        help="Show the browser window (overrides HEADLESS_MODE env var)"
    )

    parser.add_argument(
        "--popup",
        action="store_true",
        help="Provider login opens in a popup window (overrides IS_POPUP env var)"
    )
    parser.add_argument(
        "--all-cookies",
        action="store_true",
        help="Return cookies for every domain instead of just LOGIN_URL's"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides LOG_LEVEL env var)"
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation for the printed cookies (default: 2)"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()

    from social_login.auth.authenticator import social_login
    from social_login.errors import SocialLoginError

    # Load configuration
    try:
        config = get_config(args.env_file)
        overrides = {}
        if args.headless is not None:
            overrides["headless"] = args.headless
        if args.popup:
            overrides["is_popup"] = True
        if args.all_cookies:
            overrides["get_all_browser_cookies"] = True
        session_config = config.to_session_config(**overrides)
        session_config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print("\nPlease create a .env file based on .env.example", file=sys.stderr)
        return 1

    setup_logging(
        log_level=args.log_level or config.log_level,
        log_to_console=True,
        log_dir=config.log_dir
    )

    logger.info(f"Logging in at {session_config.login_url} as {session_config.username}")

    try:
        result = asyncio.run(social_login(session_config))
    except SocialLoginError as e:
        print(f"✗ Social login failed: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.cookies, indent=args.indent))
    logger.info(f"✓ Harvested {len(result.cookies)} cookies")
    return 0


if __name__ == "__main__":
    sys.exit(main())
