class ValidationError(ValueError):
    """User input that cannot become a transaction."""


class PersistenceError(Exception):
    """A write or commit against the local store failed."""


class NetworkRequestError(Exception):
    """Base class for every way the price request can fail."""


class InvalidEndpointPath(NetworkRequestError):
    pass


class InvalidResponse(NetworkRequestError):
    pass


class BadStatusCode(NetworkRequestError):
    def __init__(self, status_code: int):
        super().__init__(f"Unexpected HTTP status {status_code}")
        self.status_code = status_code


class DecodingFailed(NetworkRequestError):
    pass
