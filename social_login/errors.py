"""Error types raised by the social login flow."""


class SocialLoginError(Exception):
    """Base class for all social login failures."""


class ConfigurationError(SocialLoginError, ValueError):
    """Raised when the login configuration is missing required values."""


class StepTimeoutError(SocialLoginError):
    """Raised when a selector never appeared (or became visible) during a login step."""

    def __init__(self, step: str, selector: str, visible: bool = False):
        self.step = step
        self.selector = selector
        self.visible = visible
        state = "visible" if visible else "present"
        super().__init__(f"Step '{step}' timed out waiting for selector '{selector}' to be {state}")


class ConsistencyError(SocialLoginError):
    """Raised when the original or popup window cannot be resolved after a window switch."""
