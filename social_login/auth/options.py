"""Session configuration and result types for one social login attempt."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ConfigurationError


# Milliseconds to let the UI settle before clicking the provider button
DEFAULT_LOGIN_SELECTOR_DELAY: int = 250


@dataclass(frozen=True)
class SessionConfig:
    """Immutable description of one login attempt.

    Delays are given in milliseconds. ``None`` skips the delay entirely.
    """

    username: str
    password: str
    login_url: str
    login_selector: str
    post_login_selector: str
    pre_login_selector: Optional[str] = None
    launch_args: Tuple[str, ...] = ()
    headless: bool = False
    is_popup: bool = False
    popup_delay: Optional[int] = None
    cookie_delay: Optional[int] = None
    login_selector_delay: Optional[int] = DEFAULT_LOGIN_SELECTOR_DELAY
    selector_timeout: Optional[int] = None
    get_all_browser_cookies: bool = False
    include_otp_code: bool = False
    otp_secret: Optional[str] = field(default=None, repr=False)
    logs: bool = False

    def validate(self) -> None:
        """Check required values before any browser action.

        Raises:
            ConfigurationError: If a required value is missing
        """
        if not self.username or not self.password:
            raise ConfigurationError("Username or password missing for social login")

        for name in ("login_url", "login_selector", "post_login_selector"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} is required for social login")

        if self.include_otp_code and not self.otp_secret:
            raise ConfigurationError("otp_secret is required when include_otp_code is set")


@dataclass
class LoginResult:
    """Cookies harvested after a successful login."""

    cookies: List[Dict[str, Any]]
