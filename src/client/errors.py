from typing import Optional

import httpx


class ApiError(Exception):
    """
    A request to the Contacts API did not succeed.

    Attributes:
        message (str): Human readable reason, taken from the server's ``detail`` when present.
        status_code (Optional[int]): HTTP status of the response, None when no response arrived.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ApiError):
    """The request never got a usable response (connection refused, DNS failure, timeout, undecodable body)."""


class AuthenticationError(ApiError):
    """Missing, expired or invalid bearer credential."""


class PermissionDeniedError(ApiError):
    """The contact belongs to another user."""


class NotFoundError(ApiError):
    """No contact with that identifier."""


class InvalidRequestError(ApiError):
    """Malformed fields or a conflicting record (e.g. an e-mail that is already registered)."""


STATUS_ERRORS = {
    400: InvalidRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: InvalidRequestError,
    422: InvalidRequestError,
}


def extract_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and "msg" in first:
            return first["msg"]
        return str(first)
    return response.text or response.reason_phrase


def error_from_response(response: httpx.Response) -> ApiError:
    """
    Map an unsuccessful response to the matching ApiError subclass.

    :param response: A response with a 4xx or 5xx status.
    :return: The error to raise.
    """
    error_class = STATUS_ERRORS.get(response.status_code, ApiError)
    return error_class(extract_message(response), status_code=response.status_code)
