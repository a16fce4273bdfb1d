"""Identity verification for API requests."""

from .decorators import login_required, optional_auth

__all__ = ["login_required", "optional_auth"]
