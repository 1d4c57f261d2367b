from typing import Optional


class ClientError(Exception):
    """Base class for client-side failures."""
    pass


class ValidationError(ClientError):
    """Raised before any network call when user input is unusable."""
    pass


class ApiError(ClientError):
    """A non-2xx response, or a transport failure (status_code is None)."""

    def __init__(self, status_code: Optional[int], detail: str, details: Optional[str] = None):
        super().__init__(f"{status_code}: {detail}" if status_code else detail)
        self.status_code = status_code
        self.detail = detail
        self.details = details


class ActivityNotFoundError(ApiError):
    """The activity is gone or belongs to another user."""

    def __init__(self, detail: str = "Activity not found"):
        super().__init__(404, detail)
