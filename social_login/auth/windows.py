"""Track the original tab and the provider popup within one browser context."""

import logging
from dataclasses import dataclass, field
from typing import Tuple

from playwright.async_api import BrowserContext, Page

from ..errors import ConsistencyError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowToken:
    """Identity of a page recorded before a window switch.

    Pages are matched by object identity, never by position, since new
    tabs can be inserted anywhere in the context's page list.
    """

    page: Page = field(compare=False)
    known_pages: Tuple[Page, ...] = field(compare=False, repr=False)
    index_at_snapshot: int = 0


class WindowRegistry:
    """Snapshot, switch to the newest page, and restore by identity."""

    def __init__(self, context: BrowserContext):
        """Initialize window registry.

        Args:
            context: Browser context whose pages are tracked
        """
        self.context = context

    def _open_pages(self) -> Tuple[Page, ...]:
        return tuple(self.context.pages)

    def snapshot(self, page: Page) -> WindowToken:
        """Record the identity of the current page among all open pages.

        Args:
            page: The page that is current before the popup appears

        Returns:
            WindowToken: Token used later to restore this page

        Raises:
            ConsistencyError: If the page is not among the open pages
        """
        pages = self._open_pages()
        for index, candidate in enumerate(pages):
            if candidate is page:
                logger.debug(f"Recorded original page at position {index} of {len(pages)}")
                return WindowToken(page=page, known_pages=pages, index_at_snapshot=index)
        raise ConsistencyError("Current page is not among the open pages of the browser context")

    def switch_to_newest(self, token: WindowToken) -> Page:
        """Return the most recently opened page, treated as the provider popup.

        Args:
            token: Snapshot taken before the popup was triggered

        Returns:
            Page: The popup page

        Raises:
            ConsistencyError: If no page was opened after the snapshot
        """
        pages = self._open_pages()
        if not pages:
            raise ConsistencyError("No open pages found while looking for the provider popup")

        newest = pages[-1]
        if any(newest is known for known in token.known_pages):
            raise ConsistencyError(
                f"No provider popup opened (still {len(pages)} page(s), newest page existed before the click)"
            )

        logger.info(f"Switched to provider popup (page {len(pages) - 1} of {len(pages)})")
        return newest

    def restore(self, token: WindowToken) -> Page:
        """Return the page recorded in the token, found by identity.

        Args:
            token: Snapshot of the original page

        Returns:
            Page: The original page

        Raises:
            ConsistencyError: If the original page is no longer open
        """
        pages = self._open_pages()
        for index, candidate in enumerate(pages):
            if candidate is token.page:
                if candidate.is_closed():
                    break
                if index != token.index_at_snapshot:
                    logger.debug(f"Original page moved from position {token.index_at_snapshot} to {index}")
                logger.info("Switched back to the original page")
                return candidate

        raise ConsistencyError(
            "Original page is no longer open after the popup flow "
            f"(was at position {token.index_at_snapshot}, {len(pages)} page(s) open now)"
        )
