from typing import Optional, Any

class TvtError(Exception):
    """
    Base exception for the TVT backend.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(TvtError):
    """
    Raised when a required request field is missing or empty.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class PayloadTooLargeError(TvtError):
    """
    Raised when a request body exceeds the configured ceiling.
    """
    def __init__(self, message: str = "Request body too large", details: Optional[Any] = None):
        super().__init__(message, code="PAYLOAD_TOO_LARGE", status_code=413, details=details)

class PersistenceError(TvtError):
    """
    Raised when a MongoDB operation fails. The driver message is kept as-is.
    """
    def __init__(self, message: str = "Database operation failed", details: Optional[Any] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", status_code=500, details=details)

class ConfigurationError(TvtError):
    """
    Raised at startup when required configuration is missing.
    """
    def __init__(self, message: str = "Invalid configuration", details: Optional[Any] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", status_code=500, details=details)
