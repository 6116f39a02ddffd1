"""Shared exceptions for service layer operations."""


class ReviewTooLongError(Exception):
    """Raised when review text exceeds the configured maximum length."""

    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(f"Review text must be {max_length} characters or less")


class UsernameTakenError(Exception):
    """Raised when a profile update requests a username already owned by another user."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username '{username}' is already taken")


class ProfilePrivateError(Exception):
    """Raised when a private profile is requested by someone other than its owner."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__("Profile is private")


class ExternalServiceError(Exception):
    """
    Raised when a third-party content provider cannot be reached or returns an error.

    Carries the provider name so callers can log and report which source failed.
    """

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"{service}: {message}")
