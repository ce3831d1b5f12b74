"""Custom exception classes for the relay."""


class RelayException(Exception):
    """
    Base exception class for all relay errors.
    """
    pass


class ChunkMissingError(RelayException):
    """
    Raised when an upload-chunk request carries no chunk payload.
    """
    pass


class InvalidRequestBodyError(RelayException):
    """
    Raised when a request body is not a JSON object matching the contract.
    """
    pass


class InternalRelayError(RelayException):
    """
    Raised when handling a request fails unexpectedly.
    """
    pass


class UpstreamError(InternalRelayError):
    """
    Raised when the upstream storage server fails or is unreachable.
    """
    pass
