class NotFoundError(ValueError):
    """Resource is missing or not visible to the caller"""


class AuthenticationError(ValueError):
    """Credentials rejected"""


class AccountInactiveError(ValueError):
    """Account exists but has been deactivated"""


class DuplicateEmailError(ValueError):
    """Email already registered"""
