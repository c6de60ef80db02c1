"""CKey-Engine exception hierarchy."""


class CkeyError(Exception):
    """Base exception for all CKey errors."""

    def __init__(self, message: str = "", code: str = "CKEY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidKeyError(CkeyError):
    """Raised when a license key string cannot be parsed."""

    def __init__(self, message: str = "Invalid license key"):
        super().__init__(message, code="INVALID_KEY")


class InvalidSuffixError(CkeyError, ValueError):
    """Raised when an explicit key suffix is outside [0, 0x7fffffff]."""

    def __init__(self, message: str = "Suffix out of range"):
        super().__init__(message, code="INVALID_SUFFIX")


class RequestLimitError(CkeyError):
    """Raised when a request exceeds a configured size limit."""

    def __init__(self, message: str = "Request limit exceeded"):
        super().__init__(message, code="LIMIT_EXCEEDED")
