from fastapi import status

from src.libs.result import Error, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.unauthorized: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: status.HTTP_403_FORBIDDEN,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.service_unavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.too_many_requests: status.HTTP_429_TOO_MANY_REQUESTS,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        return cls(error, status_code=STATUS_BY_KIND[error.kind])


class ServerError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> None:
    """Translate a use case error into the transport exception for its kind"""
    if error.kind in STATUS_BY_KIND:
        raise ClientError.from_error(error)
    raise ServerError(error)
