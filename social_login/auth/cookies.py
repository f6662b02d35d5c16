"""Cookie extraction after login and transfer into an HTTP session."""

import logging
from typing import Any, Dict, List, Optional

import requests
from playwright.async_api import BrowserContext, Page, TimeoutError as PlaywrightTimeoutError

from ..errors import StepTimeoutError
from .options import SessionConfig


logger = logging.getLogger(__name__)


async def harvest_cookies(
    context: BrowserContext,
    page: Page,
    config: SessionConfig,
    log: Optional[logging.Logger] = None,
) -> List[Dict[str, Any]]:
    """Wait for the post-login marker, then read the browser cookies.

    Args:
        context: Browser context holding the cookie jar
        page: Current page, expected to land on the app's post-login page
        config: Session configuration
        log: Diagnostic logger (default: module logger)

    Returns:
        List of cookie dicts exactly as the browser reports them

    Raises:
        StepTimeoutError: If the post-login marker never appears
    """
    log = log or logger
    selector = config.post_login_selector

    log.info(f"Step 6: Waiting for post-login marker '{selector}'")
    try:
        await page.wait_for_selector(selector, state="attached", timeout=config.selector_timeout)
    except PlaywrightTimeoutError as e:
        log.error(f"  [post-login] timed out waiting for '{selector}'")
        raise StepTimeoutError("post-login", selector) from e

    if config.get_all_browser_cookies:
        cookies = await context.cookies()
        log.info(f"Collected {len(cookies)} cookies across all domains")
    else:
        cookies = await context.cookies(config.login_url)
        log.info(f"Collected {len(cookies)} cookies for {config.login_url}")

    if config.logs:
        log.info(f"Cookies: {cookies}")

    return cookies


def cookies_to_session(cookies: List[Dict[str, Any]]) -> requests.Session:
    """Create requests.Session carrying harvested browser cookies.

    Args:
        cookies: Cookie dicts as returned by harvest_cookies

    Returns:
        requests.Session configured with the browser cookies
    """
    session = requests.Session()

    transferred_count = 0
    for cookie in cookies:
        try:
            session.cookies.set(
                name=cookie["name"],
                value=cookie["value"],
                domain=cookie.get("domain", ""),
                path=cookie.get("path", "/"),
                secure=cookie.get("secure", False),
            )
            transferred_count += 1
        except KeyError as e:
            logger.warning(f"Skipping malformed cookie (missing {e}): {cookie.get('name', 'unknown')}")

    logger.info(f"Transferred {transferred_count}/{len(cookies)} cookies to requests session")
    if transferred_count == 0:
        logger.warning("No cookies transferred - session may not be authenticated")

    return session
