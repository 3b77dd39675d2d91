class PushDemoError(Exception):
    """
    Base exception for all push demo errors.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ConfigurationError(PushDemoError):
    def __init__(self, message: str = "Invalid demo configuration."):
        super().__init__(message)

class PushAPIError(PushDemoError):
    """
    Non-2xx answer from the push backend.
    The status code is kept so callers can tell client errors from outages.
    """
    def __init__(self, message: str = "Push API request failed.", status_code: int = 500):
        self.status_code = status_code
        super().__init__(message)

class PushValidationError(PushDemoError):
    def __init__(self, message: str = "Invalid request parameters."):
        super().__init__(message)

class MissingChannelSignerError(PushValidationError):
    """
    Raised when a channel operation is attempted without a channel signer.
    """
    def __init__(self, message: str = "A channel signer is required for this operation."):
        super().__init__(message)

class SocketConnectionError(PushDemoError):
    def __init__(self, message: str = "PushSDKSocket | Socket Connection Failed"):
        super().__init__(message)
