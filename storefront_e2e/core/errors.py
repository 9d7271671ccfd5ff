"""Custom exceptions for the storefront E2E suite."""


class SuiteError(Exception):
    """Base exception for suite errors."""
    pass


class ConfigurationError(SuiteError):
    """Configuration error."""
    pass


class AuthenticationError(SuiteError):
    """Error while capturing or replaying an authenticated session."""
    pass


class CredentialsMissingError(AuthenticationError):
    """Required login credentials are not configured."""
    pass


class NavigationError(SuiteError):
    """Error navigating to a page."""
    pass
