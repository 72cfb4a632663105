import logging
from typing import Awaitable, Callable, Dict, Optional

from src.client.auth import handle_form_change
from src.schemas.contact import Contact

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("name", "email", "phone")


class UiEvent:
    """
    A user interaction passed from a view to its handlers.

    Handlers call :meth:`stop_propagation` so that enclosing views (a list row
    around a button) do not react to the same interaction.
    """

    def __init__(self):
        self.propagation_stopped = False
        self.default_prevented = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def prevent_default(self) -> None:
        self.default_prevented = True


def _check_field(name: str) -> None:
    if name not in CONTACT_FIELDS:
        raise ValueError(f"Unknown contact field: {name}")


class ContactWindow:
    """
    Detail window of one contact.

    Edits go to a local copy of the contact; the page persists them through
    ``on_update`` and ``on_delete``. Inputs are read-only until edit mode is
    switched on with :meth:`toggle_edit`.
    """

    def __init__(self, contact: Contact,
                 on_update: Callable[[Contact, Optional[UiEvent]], Awaitable[bool]],
                 on_delete: Callable[[Contact, Optional[UiEvent]], Awaitable[bool]],
                 on_close: Callable[[], None]):
        self.contact = contact
        self.form = contact.model_copy()
        self.is_edit_disabled = True
        self.on_update = on_update
        self.on_delete = on_delete
        self.on_close = on_close

    def toggle_edit(self) -> None:
        self.is_edit_disabled = not self.is_edit_disabled
        if self.is_edit_disabled:
            self.form = self.contact.model_copy()

    def handle_change(self, name: str, value: str) -> None:
        _check_field(name)
        if self.is_edit_disabled:
            logger.debug("Ignoring change of %s, contact window is read-only", name)
            return
        self.form = self.form.model_copy(update={name: value})

    def reset(self, contact: Contact) -> None:
        """Show a fresh server copy of the contact in read-only mode."""
        self.contact = contact
        self.form = contact.model_copy()
        self.is_edit_disabled = True

    async def submit(self, event: Optional[UiEvent] = None) -> bool:
        return await self.on_update(self.form, event)

    async def delete(self, event: Optional[UiEvent] = None) -> bool:
        return await self.on_delete(self.contact, event)

    def close(self) -> None:
        self.on_close()


class AddContactWindow:
    """Form collecting the fields of a new contact."""

    def __init__(self, on_submit: Callable[[Dict[str, str], Optional[UiEvent]], Awaitable[bool]],
                 on_close: Callable[[], None]):
        self.form: Dict[str, str] = {field: "" for field in CONTACT_FIELDS}
        self.on_submit = on_submit
        self.on_close = on_close

    def handle_change(self, name: str, value: str) -> None:
        _check_field(name)
        self.form = handle_form_change(self.form, name, value)

    async def submit(self, event: Optional[UiEvent] = None) -> bool:
        return await self.on_submit(dict(self.form), event)

    def close(self) -> None:
        self.on_close()
