import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional

from src.client.api import ContactsApi
from src.client.auth import AuthContext
from src.client.errors import ApiError
from src.client.windows import AddContactWindow, ContactWindow, UiEvent
from src.schemas.contact import Contact

logger = logging.getLogger(__name__)

LIST_ERROR_MESSAGE = "An error has occurred. Try logging in again"
CALL_NOTICE = "Calling contacts is not available yet."


class ListState(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class ContactRow:
    """
    One line of the contact list.

    ``label`` is None while an edit or a re-fetch is in flight; the view shows
    a loading indicator in place of the name then.
    """
    contact: Contact
    initial: str
    label: Optional[str]

    @property
    def is_loading(self) -> bool:
        return self.label is None


class ContactsPage:
    """
    Contact list of the logged-in user with its detail and add windows.

    The page never patches its list locally: after every successful mutation
    it re-fetches the list, so what it shows is always what the server
    returned last. Failed mutations are reported in ``mutation_error`` and
    leave the windows as they were so the user can retry.

    Attributes:
        list_state (ListState): State of the contact list query.
        contacts (List[Contact]): Contacts from the last successful fetch.
        error (Optional[str]): Message of the failed list fetch.
        mutation_error (Optional[str]): Message of the last failed create, update or delete.
        selected_contact (Optional[Contact]): Contact shown in the detail window.
        is_refetching (bool): True while the list is reloaded after the first load.
        is_edit_loading (bool): True while an update request is in flight.
    """

    def __init__(self, api: ContactsApi, auth: AuthContext):
        self.api = api
        self.auth = auth
        self.list_state = ListState.LOADING
        self.contacts: List[Contact] = []
        self.error: Optional[str] = None
        self.mutation_error: Optional[str] = None
        self.is_refetching = False
        self.is_edit_loading = False
        self.selected_contact: Optional[Contact] = None
        self.contact_window: Optional[ContactWindow] = None
        self.add_window: Optional[AddContactWindow] = None

    @property
    def is_open(self) -> bool:
        return self.contact_window is not None

    @property
    def is_add_window_open(self) -> bool:
        return self.add_window is not None

    @property
    def is_edit_disabled(self) -> bool:
        return self.contact_window is None or self.contact_window.is_edit_disabled

    @property
    def error_message(self) -> Optional[str]:
        if self.list_state is not ListState.ERROR:
            return None
        return LIST_ERROR_MESSAGE

    async def fetch_all_contacts(self) -> None:
        self.list_state = ListState.LOADING
        await self._load()

    async def refetch(self) -> None:
        self.is_refetching = True
        try:
            await self._load()
        finally:
            self.is_refetching = False

    async def _load(self) -> None:
        try:
            contacts = await self.api.list_contacts(self.auth.session)
        except ApiError as e:
            logger.warning("Could not fetch contacts: %s", e.message)
            self.list_state = ListState.ERROR
            self.error = e.message
            return
        self.contacts = contacts
        self.list_state = ListState.SUCCESS
        self.error = None

    def rows(self) -> List[ContactRow]:
        if self.list_state is not ListState.SUCCESS:
            return []
        busy = self.is_edit_loading or self.is_refetching
        return [
            ContactRow(
                contact=contact,
                initial=contact.name[:1].upper(),
                label=None if busy else contact.name,
            )
            for contact in self.contacts
        ]

    def window_open(self, contact: Contact, event: Optional[UiEvent] = None) -> None:
        if event is not None and event.propagation_stopped:
            return
        self.selected_contact = contact
        self.mutation_error = None
        self.contact_window = ContactWindow(
            contact,
            on_update=self.handle_update_contact,
            on_delete=self.handle_delete_contact,
            on_close=self.close_window,
        )

    def close_window(self) -> None:
        self.selected_contact = None
        self.contact_window = None

    def open_add_window(self) -> None:
        self.mutation_error = None
        self.add_window = AddContactWindow(on_submit=self.handle_add_contact, on_close=self.close_add_window)

    def close_add_window(self) -> None:
        self.add_window = None

    async def handle_add_contact(self, contact_data: Mapping[str, str], event: Optional[UiEvent] = None) -> bool:
        if event is not None:
            event.prevent_default()
        self.mutation_error = None
        try:
            await self.api.create_contact(self.auth.session, contact_data)
        except ApiError as e:
            logger.warning("Could not create contact: %s", e.message)
            self.mutation_error = e.message
            return False
        self.close_add_window()
        await self.refetch()
        return True

    async def handle_update_contact(self, contact: Contact, event: Optional[UiEvent] = None) -> bool:
        if event is not None:
            event.prevent_default()
        self.mutation_error = None
        self.is_edit_loading = True
        try:
            updated = await self.api.update_contact(self.auth.session, contact)
        except ApiError as e:
            logger.warning("Could not update contact %s: %s", contact.id, e.message)
            self.mutation_error = e.message
            return False
        finally:
            self.is_edit_loading = False

        await self.refetch()
        fresh = next((c for c in self.contacts if c.id == updated.id), updated)
        self.selected_contact = fresh
        if self.contact_window is not None:
            self.contact_window.reset(fresh)
        return True

    async def handle_delete_contact(self, contact: Contact, event: Optional[UiEvent] = None) -> bool:
        if event is not None:
            event.stop_propagation()
        self.mutation_error = None
        try:
            await self.api.delete_contact(self.auth.session, contact)
        except ApiError as e:
            logger.warning("Could not delete contact %s: %s", contact.id, e.message)
            self.mutation_error = e.message
            return False
        self.close_window()
        await self.refetch()
        return True

    def call_contact(self, contact: Contact, event: Optional[UiEvent] = None) -> str:
        if event is not None:
            event.stop_propagation()
        return CALL_NOTICE

    def logout(self) -> None:
        self.auth.logout()
        self.close_window()
        self.close_add_window()
        self.contacts = []
        self.list_state = ListState.LOADING
        self.error = None
        self.mutation_error = None
