from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        """Return error response body"""
        return {"error": self.message}

class ConfigurationError(BaseAppException):
    """Raised when a required credential is missing"""
    def __init__(self, message: str = "API key missing. Check your .env configuration."):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

class NotFoundError(BaseAppException):
    """Raised when an upstream resource does not exist"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class InvalidRatingError(BaseAppException, ValueError):
    """Raised when a rating is outside 0-5 or not on a half step"""
    def __init__(self, rating):
        super().__init__(
            f"Invalid rating {rating!r}: expected 0 to 5 in steps of 0.5",
            status.HTTP_400_BAD_REQUEST,
        )
