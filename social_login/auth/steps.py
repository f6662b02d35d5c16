"""Ordered login steps driven against the identity provider's pages."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from ..errors import StepTimeoutError
from .options import SessionConfig
from .otp_handler import OTPHandler
from .timing import delay


logger = logging.getLogger(__name__)


class ProviderMode(Enum):
    """DOM variant the identity provider renders."""

    HEADLESS = "headless"
    HEADED = "headed"

    @classmethod
    def from_headless(cls, headless: bool) -> "ProviderMode":
        return cls.HEADLESS if headless else cls.HEADED


@dataclass(frozen=True)
class ProviderSelectors:
    """Controls that advance the provider's form in one rendering mode."""

    username_next: str
    password_next: str
    otp_next: str


PROVIDER_SELECTORS: Dict[ProviderMode, ProviderSelectors] = {
    ProviderMode.HEADLESS: ProviderSelectors(
        username_next="#next",
        password_next="#signIn",
        otp_next="#signIn",
    ),
    ProviderMode.HEADED: ProviderSelectors(
        username_next="#identifierNext",
        password_next="#passwordNext",
        otp_next="#totpNext",
    ),
}


class LoginSteps:
    """Runs the login steps in order against whatever page is passed in."""

    # Provider form fields
    USERNAME_FIELD = 'input[type="email"]'
    PASSWORD_FIELD = 'input[type="password"]'
    OTP_FIELD = 'input[type="tel"]'

    def __init__(
        self,
        config: SessionConfig,
        otp_handler: Optional[OTPHandler] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize login steps.

        Args:
            config: Session configuration for this attempt
            otp_handler: Code provider, required when config.include_otp_code is set
            log: Diagnostic logger (default: module logger)
        """
        self.config = config
        self.otp_handler = otp_handler
        self.log = log or logger
        self.mode = ProviderMode.from_headless(config.headless)
        self.selectors = PROVIDER_SELECTORS[self.mode]

    async def wait_for(self, page: Page, step: str, selector: str, visible: bool = False) -> None:
        """Wait for a selector to be attached (or visible) on the page.

        Raises:
            StepTimeoutError: If the selector does not reach that state in time
        """
        state = "visible" if visible else "attached"
        self.log.debug(f"  [{step}] waiting for '{selector}' ({state})")
        try:
            await page.wait_for_selector(selector, state=state, timeout=self.config.selector_timeout)
        except PlaywrightTimeoutError as e:
            self.log.error(f"  [{step}] timed out waiting for '{selector}' ({state})")
            raise StepTimeoutError(step, selector, visible=visible) from e

    async def click(self, page: Page, step: str, selector: str) -> None:
        """Click a selector within the configured wait budget."""
        try:
            await page.click(selector, timeout=self.config.selector_timeout)
        except PlaywrightTimeoutError as e:
            self.log.error(f"  [{step}] timed out clicking '{selector}'")
            raise StepTimeoutError(step, selector, visible=True) from e

    async def fill(self, page: Page, step: str, selector: str, value: str) -> None:
        """Fill a form field within the configured wait budget."""
        try:
            await page.fill(selector, value, timeout=self.config.selector_timeout)
        except PlaywrightTimeoutError as e:
            self.log.error(f"  [{step}] timed out filling '{selector}'")
            raise StepTimeoutError(step, selector, visible=True) from e

    async def click_pre_login(self, page: Page) -> None:
        """Click an optional element first, e.g. a cookie-consent banner."""
        selector = self.config.pre_login_selector
        if not selector:
            return
        self.log.info(f"Step 1: Clicking pre-login element '{selector}'")
        await self.wait_for(page, "pre-login", selector)
        await self.click(page, "pre-login", selector)

    async def click_provider_button(self, page: Page) -> None:
        """Click the social provider button; this may open the provider popup."""
        selector = self.config.login_selector
        self.log.info(f"Step 2: Clicking provider login button '{selector}'")
        await self.wait_for(page, "provider-login", selector)
        await delay(self.config.login_selector_delay)
        await self.click(page, "provider-login", selector)

    async def enter_username(self, page: Page) -> None:
        self.log.info("Step 3: Entering username")
        await self.wait_for(page, "username", self.USERNAME_FIELD)
        await self.fill(page, "username", self.USERNAME_FIELD, self.config.username)
        await self.wait_for(page, "username", self.selectors.username_next, visible=True)
        await self.click(page, "username", self.selectors.username_next)

    async def enter_password(self, page: Page) -> None:
        # The password field exists hidden until the slide-in animation ends
        self.log.info("Step 4: Entering password")
        await self.wait_for(page, "password", self.PASSWORD_FIELD, visible=True)
        await self.fill(page, "password", self.PASSWORD_FIELD, self.config.password)
        await self.wait_for(page, "password", self.selectors.password_next, visible=True)
        await self.click(page, "password", self.selectors.password_next)

    async def enter_otp_code(self, page: Page) -> None:
        """Enter the current one-time code into the verification form.

        The code is requested only once the field is visible so it is as
        fresh as possible when entered.
        """
        if self.otp_handler is None:
            raise RuntimeError("OTP entry requested but no OTP handler configured")

        self.log.info("Step 5: Entering one-time code")
        await self.wait_for(page, "otp", self.OTP_FIELD, visible=True)
        code = self.otp_handler.get_code()
        self.log.debug(f"  Generated one-time code ({len(code)} digits)")
        await self.fill(page, "otp", self.OTP_FIELD, code)
        await self.wait_for(page, "otp", self.selectors.otp_next, visible=True)
        await self.click(page, "otp", self.selectors.otp_next)

    async def run_pre_popup(self, page: Page) -> None:
        """Steps that run on the original page before any popup exists."""
        await self.click_pre_login(page)
        await self.click_provider_button(page)

    async def run_credentials(self, page: Page) -> None:
        """Steps that run on the provider page (popup or same tab)."""
        await self.enter_username(page)
        await self.enter_password(page)
        if self.config.include_otp_code:
            await self.enter_otp_code(page)
