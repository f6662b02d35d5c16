"""Configuration management for the social login cookie harvester."""

import os
import shlex
from pathlib import Path
from typing import Optional, Tuple
from dotenv import load_dotenv

from ..auth.options import DEFAULT_LOGIN_SELECTOR_DELAY, SessionConfig
from ..errors import ConfigurationError


# Values that switch a delay off entirely
DISABLED_VALUES = ("false", "off", "none", "no")


def _env_bool(name: str, default: str = "false") -> bool:
    value = os.getenv(name, default).lower()
    return value in ("true", "1", "yes")


def _env_millis(name: str, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    if value.strip().lower() in DISABLED_VALUES:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of milliseconds, got '{value}'")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration.

        Args:
            env_file: Path to .env file (default: .env in project root)
        """
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to find .env in project root
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

    # Identity provider credentials
    @property
    def username(self) -> str:
        """Identity provider username."""
        value = os.getenv("SOCIAL_LOGIN_USERNAME", "")
        if not value:
            raise ConfigurationError("SOCIAL_LOGIN_USERNAME not set in environment")
        return value

    @property
    def password(self) -> str:
        """Identity provider password."""
        value = os.getenv("SOCIAL_LOGIN_PASSWORD", "")
        if not value:
            raise ConfigurationError("SOCIAL_LOGIN_PASSWORD not set in environment")
        return value

    @property
    def include_otp_code(self) -> bool:
        """Enter a TOTP code after the password."""
        return _env_bool("INCLUDE_OTP_CODE")

    @property
    def otp_secret(self) -> Optional[str]:
        """Base32 TOTP secret."""
        return os.getenv("OTP_SECRET") or None

    # Login page
    @property
    def login_url(self) -> str:
        return os.getenv("LOGIN_URL", "")

    @property
    def login_selector(self) -> str:
        return os.getenv("LOGIN_SELECTOR", "")

    @property
    def pre_login_selector(self) -> Optional[str]:
        return os.getenv("PRE_LOGIN_SELECTOR") or None

    @property
    def post_login_selector(self) -> str:
        return os.getenv("POST_LOGIN_SELECTOR", "")

    # Browser settings
    @property
    def headless_mode(self) -> bool:
        """Run browser in headless mode (default: True)."""
        return _env_bool("HEADLESS_MODE", "true")

    @property
    def launch_args(self) -> Tuple[str, ...]:
        """Extra Chromium arguments, shell-split."""
        return tuple(shlex.split(os.getenv("LAUNCH_ARGS", "")))

    @property
    def is_popup(self) -> bool:
        """Provider login opens in a popup window."""
        return _env_bool("IS_POPUP")

    # Delay settings (milliseconds)
    @property
    def popup_delay_ms(self) -> Optional[int]:
        return _env_millis("POPUP_DELAY_MS")

    @property
    def cookie_delay_ms(self) -> Optional[int]:
        return _env_millis("COOKIE_DELAY_MS")

    @property
    def login_selector_delay_ms(self) -> Optional[int]:
        return _env_millis("LOGIN_SELECTOR_DELAY_MS", DEFAULT_LOGIN_SELECTOR_DELAY)

    @property
    def selector_timeout_ms(self) -> Optional[int]:
        """Wait budget per selector (default: Playwright's own)."""
        return _env_millis("SELECTOR_TIMEOUT_MS")

    # Output settings
    @property
    def get_all_browser_cookies(self) -> bool:
        return _env_bool("GET_ALL_BROWSER_COOKIES")

    @property
    def logs(self) -> bool:
        """Log harvested cookies."""
        return _env_bool("LOGS")

    @property
    def log_level(self) -> str:
        """Logging level."""
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def log_dir(self) -> Optional[Path]:
        """Directory for component log files (optional)."""
        path_str = os.getenv("LOG_DIR")
        return Path(path_str) if path_str else None

    def validate(self) -> bool:
        """Validate that all required configuration is present.

        Returns:
            bool: True if configuration is valid

        Raises:
            ConfigurationError: If required configuration is missing
        """
        self.to_session_config().validate()
        return True

    def to_session_config(self, **overrides) -> SessionConfig:
        """Build the session configuration for one login attempt.

        Args:
            **overrides: SessionConfig fields that take precedence over the environment

        Returns:
            SessionConfig: Configuration ready for SocialLoginAuthenticator
        """
        values = dict(
            username=self.username,
            password=self.password,
            login_url=self.login_url,
            login_selector=self.login_selector,
            post_login_selector=self.post_login_selector,
            pre_login_selector=self.pre_login_selector,
            launch_args=self.launch_args,
            headless=self.headless_mode,
            is_popup=self.is_popup,
            popup_delay=self.popup_delay_ms,
            cookie_delay=self.cookie_delay_ms,
            login_selector_delay=self.login_selector_delay_ms,
            selector_timeout=self.selector_timeout_ms,
            get_all_browser_cookies=self.get_all_browser_cookies,
            include_otp_code=self.include_otp_code,
            otp_secret=self.otp_secret,
            logs=self.logs,
        )
        values.update(overrides)
        return SessionConfig(**values)


# Global config instance
_config: Optional[Config] = None


def get_config(env_file: Optional[str] = None) -> Config:
    """Get global configuration instance.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Config: Global configuration instance
    """
    global _config
    if _config is None:
        _config = Config(env_file)
    return _config
