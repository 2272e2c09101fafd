"""Exceptions raised while turning a Request into a URL and body."""

from __future__ import annotations


class RequestKitError(Exception):
    """Base class for every error raised by requestkit."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UrlMissingError(RequestKitError):
    """Raised when a URL is requested from a Request without a base URL."""

    def __init__(self, message: str = "Request has no base URL. Set one with set_url() before dispatch."):
        super().__init__(message)


class ParameterTranslationError(RequestKitError):
    """
    Raised when a query builder cannot translate a parameter model.

    Covers objects that cannot be introspected as well as field values
    that fail to serialize or decode.
    """

    @staticmethod
    def for_model(model: object, reason: str) -> ParameterTranslationError:
        """
        Create an error naming the model type that failed.

        Args:
            model: The parameter model being translated
            reason: What went wrong

        Returns:
            ParameterTranslationError with a standardized message
        """
        return ParameterTranslationError(f"Cannot translate {type(model).__name__} into parameters: {reason}")


class EncodingError(RequestKitError):
    """Raised when a charset is unknown or a value cannot be percent-encoded in it."""

    def __init__(self, message: str, charset: str | None = None):
        self.charset = charset
        super().__init__(message)


class HttpStatusError(RequestKitError):
    """Raised by the transport when a response status is 400 or above."""

    def __init__(self, status_code: int, url: str, body: bytes = b""):
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"HTTP {status_code} for {url}")
