"""Automated identity-provider login that harvests the resulting browser cookies."""

import logging

from .auth.authenticator import SocialLoginAuthenticator, social_login
from .auth.options import SessionConfig, LoginResult
from .errors import SocialLoginError, ConfigurationError, StepTimeoutError, ConsistencyError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'SocialLoginAuthenticator',
    'social_login',
    'SessionConfig',
    'LoginResult',
    'SocialLoginError',
    'ConfigurationError',
    'StepTimeoutError',
    'ConsistencyError',
]
