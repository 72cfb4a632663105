import logging
from typing import List, Mapping, Optional, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from src.client.errors import ApiError, AuthenticationError, NetworkError, error_from_response
from src.client.session import Session
from src.conf.config import settings
from src.schemas.contact import BaseContact, Contact
from src.schemas.user import Token, UserResponse

logger = logging.getLogger(__name__)

CONTACTS_URL = "/api/contacts/"
CONTACT_FIELDS = ("name", "email", "phone")

_contact_list = TypeAdapter(List[Contact])

ContactData = Union[BaseContact, Mapping[str, str]]


def contact_body(contact: ContactData) -> dict:
    """
    Build the ``{name, email, phone}`` request body from a contact model or a plain form mapping.
    """
    if isinstance(contact, BaseContact):
        return {field: getattr(contact, field) for field in CONTACT_FIELDS}
    return {field: contact.get(field) for field in CONTACT_FIELDS if field in contact}


class ContactsApi:
    """
    Thin HTTP wrapper around the Contacts API.

    Every call is a single attempt: there is no retry, backoff or caching.
    Failures are raised as :class:`~src.client.errors.ApiError` subclasses.
    Authenticated calls take the caller's :class:`~src.client.session.Session`
    explicitly and send its bearer token.
    """

    def __init__(self, base_url: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client = httpx.AsyncClient(base_url=base_url or settings.api_base_url, transport=transport)

    async def __aenter__(self) -> "ContactsApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, url: str, session: Optional[Session] = None,
                       authenticated: bool = True, **kwargs) -> httpx.Response:
        headers = {}
        if authenticated:
            if session is None:
                raise AuthenticationError("Not logged in")
            headers.update(session.authorization_headers())
        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e) or e.__class__.__name__) from e
        if response.is_error:
            error = error_from_response(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, error.message)
            raise error
        return response

    @staticmethod
    def _parse(response: httpx.Response, validate):
        try:
            return validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("%s %s returned an unreadable body: %s",
                           response.request.method, response.request.url.path, e)
            raise ApiError("Unexpected response from the server", status_code=response.status_code) from e

    async def register(self, user_data: Mapping[str, str]) -> UserResponse:
        body = {key: user_data.get(key) for key in ("username", "email", "password")}
        response = await self._request("POST", "/api/users/register", json=body, authenticated=False)
        return self._parse(response, UserResponse.model_validate)

    async def login(self, user_data: Mapping[str, str]) -> Session:
        body = {"email": user_data.get("email"), "password": user_data.get("password")}
        response = await self._request("POST", "/api/users/login", json=body, authenticated=False)
        token = self._parse(response, Token.model_validate)
        return Session(token.access_token, token.token_type)

    async def current_user(self, session: Session) -> UserResponse:
        response = await self._request("GET", "/api/users/current", session)
        return self._parse(response, UserResponse.model_validate)

    async def list_contacts(self, session: Session) -> List[Contact]:
        response = await self._request("GET", CONTACTS_URL, session)
        return self._parse(response, _contact_list.validate_python)

    async def get_contact(self, session: Session, contact_id: str) -> Contact:
        response = await self._request("GET", f"{CONTACTS_URL}{contact_id}", session)
        return self._parse(response, Contact.model_validate)

    async def create_contact(self, session: Session, contact: ContactData) -> Contact:
        response = await self._request("POST", CONTACTS_URL, session, json=contact_body(contact))
        return self._parse(response, Contact.model_validate)

    async def update_contact(self, session: Session, contact: Contact) -> Contact:
        response = await self._request("PUT", f"{CONTACTS_URL}{contact.id}", session,
                                       json=contact_body(contact))
        return self._parse(response, Contact.model_validate)

    async def delete_contact(self, session: Session, contact: Union[Contact, str]) -> Contact:
        contact_id = contact if isinstance(contact, str) else contact.id
        response = await self._request("DELETE", f"{CONTACTS_URL}{contact_id}", session)
        return self._parse(response, Contact.model_validate)
