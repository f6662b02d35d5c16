"""Playwright-driven social login that returns the authenticated cookies."""

import logging
from typing import Any, Callable, Optional

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from .cookies import harvest_cookies
from .options import LoginResult, SessionConfig
from .otp_handler import OTPHandler, TOTPHandler
from .steps import LoginSteps
from .timing import delay
from .windows import WindowRegistry


logger = logging.getLogger(__name__)


class SocialLoginAuthenticator:
    """Runs one login with an identity provider and harvests the cookies."""

    # Fixed size avoids responsive variants of the login page
    VIEWPORT = {"width": 1280, "height": 800}

    def __init__(
        self,
        config: SessionConfig,
        otp_handler: Optional[OTPHandler] = None,
        log: Optional[logging.Logger] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """Initialize authenticator.

        Args:
            config: Session configuration for this attempt
            otp_handler: One-time code provider (default: TOTPHandler built from config.otp_secret)
            log: Diagnostic logger (default: module logger)
            playwright_factory: Callable returning the async Playwright context manager
        """
        self.config = config
        self.otp_handler = otp_handler
        self.log = log or logger
        self.playwright_factory = playwright_factory

        self.current_page: Optional[Page] = None

    def _build_otp_handler(self) -> Optional[OTPHandler]:
        if not self.config.include_otp_code:
            return None
        if self.otp_handler is not None:
            return self.otp_handler
        return TOTPHandler(self.config.otp_secret)

    async def _launch_browser(self, playwright: Any) -> Browser:
        launch_options = {"headless": self.config.headless}
        if self.config.launch_args:
            self.log.info(f"Custom browser launch arguments passed: {list(self.config.launch_args)}")
            launch_options["args"] = list(self.config.launch_args)

        self.log.debug("Launching Chromium browser...")
        return await playwright.chromium.launch(**launch_options)

    async def authenticate(self) -> LoginResult:
        """Perform the full login flow.

        Returns:
            LoginResult: Cookies harvested after the post-login marker appeared

        Raises:
            ConfigurationError: If username or password is missing (no browser launched)
            StepTimeoutError: If a step's selector never appeared
            ConsistencyError: If the original or popup window cannot be resolved
        """
        self.config.validate()
        otp_handler = self._build_otp_handler()
        steps = LoginSteps(self.config, otp_handler=otp_handler, log=self.log)

        self.log.info("Starting social login flow")
        self.log.info(f"Browser mode: {'headless' if self.config.headless else 'headed'}")

        async with self.playwright_factory() as p:
            browser: Optional[Browser] = None
            try:
                browser = await self._launch_browser(p)
                cookies = await self._run(browser, steps)
            except Exception as e:
                self.log.error(f"Social login failed: {e}", exc_info=True)
                raise
            finally:
                if browser is not None:
                    self.log.debug("Closing browser...")
                    await browser.close()

        self.log.info("Social login completed successfully")
        return LoginResult(cookies=cookies)

    async def _run(self, browser: Browser, steps: LoginSteps):
        context: BrowserContext = await browser.new_context()
        self.current_page = await context.new_page()
        await self.current_page.set_viewport_size(self.VIEWPORT)

        self.log.info(f"Navigating to the login page: {self.config.login_url}")
        await self.current_page.goto(self.config.login_url)

        windows = WindowRegistry(context) if self.config.is_popup else None
        original = windows.snapshot(self.current_page) if windows else None

        await steps.run_pre_popup(self.current_page)

        if windows:
            await delay(self.config.popup_delay)
            self.current_page = windows.switch_to_newest(original)

        await steps.run_credentials(self.current_page)

        if windows:
            await delay(self.config.popup_delay)
            self.current_page = windows.restore(original)

        await delay(self.config.cookie_delay)
        return await harvest_cookies(context, self.current_page, self.config, log=self.log)


async def social_login(config: SessionConfig, **kwargs: Any) -> LoginResult:
    """Run a social login and return the harvested cookies.

    Args:
        config: Session configuration
        **kwargs: Passed through to SocialLoginAuthenticator

    Returns:
        LoginResult: The harvested cookies
    """
    return await SocialLoginAuthenticator(config, **kwargs).authenticate()
