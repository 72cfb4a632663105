import logging
from typing import Any, Callable, Dict, Mapping, Optional

from src.client.api import ContactsApi
from src.client.errors import ApiError
from src.client.session import Session
from src.schemas.user import UserResponse

logger = logging.getLogger(__name__)


def handle_form_change(form_data: Mapping[str, Any], name: str, value: Any) -> Dict[str, Any]:
    """
    Merge one changed input into a form state mapping.

    :param form_data: Current form state.
    :param name: Name of the changed field.
    :param value: New value of the field.
    :return: A new mapping with the field replaced; ``form_data`` is left untouched.
    """
    return {**form_data, name: value}


class AuthContext:
    """
    Holds the logged-in user's session and the state of the login form.

    Attributes:
        session (Optional[Session]): The active session, None when logged out.
        error_state (Optional[str]): Message of the last failed login or registration.
        is_loading (bool): True while a login or registration request is in flight.
    """

    handle_form_change = staticmethod(handle_form_change)

    def __init__(self, api: ContactsApi, on_logout: Optional[Callable[[], None]] = None):
        self.api = api
        self.on_logout = on_logout
        self.session: Optional[Session] = None
        self.error_state: Optional[str] = None
        self.is_loading = False

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None and self.session.active

    async def login(self, user_data: Mapping[str, str]) -> Optional[Session]:
        """
        Log in with ``email`` and ``password`` from ``user_data``.

        :return: The new session, or None if the login failed (see ``error_state``).
        """
        self.is_loading = True
        self.error_state = None
        try:
            session = await self.api.login(user_data)
        except ApiError as e:
            logger.info("Login failed: %s", e.message)
            self.error_state = e.message
            return None
        finally:
            self.is_loading = False

        if self.session is not None:
            self.session.close()
        self.session = session
        return session

    async def register(self, user_data: Mapping[str, str]) -> Optional[UserResponse]:
        self.is_loading = True
        self.error_state = None
        try:
            return await self.api.register(user_data)
        except ApiError as e:
            logger.info("Registration failed: %s", e.message)
            self.error_state = e.message
            return None
        finally:
            self.is_loading = False

    def logout(self) -> None:
        if self.session is not None:
            self.session.close()
        self.session = None
        self.error_state = None
        if self.on_logout is not None:
            self.on_logout()
