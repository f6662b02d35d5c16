"""One-time code providers for identity provider two-step verification."""

import hashlib
from abc import ABC, abstractmethod

import pyotp


class OTPHandler(ABC):
    """Abstract base class for one-time code retrieval."""

    @abstractmethod
    def get_code(self) -> str:
        """Retrieve the code that is valid right now.

        Returns:
            str: The one-time code

        Raises:
            Exception: If the code cannot be produced
        """
        pass


class TOTPHandler(OTPHandler):
    """Generate time-based codes (RFC 6238) from a shared base32 secret."""

    DIGITS = 6
    PERIOD_SECONDS = 30

    def __init__(self, secret: str):
        """Initialize TOTP handler.

        Args:
            secret: Base32 shared secret from the authenticator app enrollment
        """
        if not secret:
            raise ValueError("TOTP secret cannot be empty")
        self._totp = pyotp.TOTP(
            secret,
            digits=self.DIGITS,
            interval=self.PERIOD_SECONDS,
            digest=hashlib.sha1,
        )

    def get_code(self) -> str:
        """Return the code for the current 30-second window.

        The window is not checked for remaining time, so a slow submission
        can still land after it rolls over.
        """
        return self._totp.now()
