from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime, timezone
from typing import Optional


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to timestamps read back without an offset (SQLite drops it).
    """
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BaseContact(BaseModel):
    """
    Fields a client supplies when creating a contact.

    Attributes:
        name (str): The name of the contact.
        email (EmailStr): The email address of the contact.
        phone (str): The phone number of the contact.
    """
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=30)


class ContactCreate(BaseContact):
    """
    Schema for creating a new contact.
    Inherits all fields from BaseContact.
    """
    pass


class ContactUpdate(BaseModel):
    """
    Schema for updating an existing contact.
    Fields left out of the request body keep their stored values.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=30)


class Contact(BaseContact):
    """
    A stored contact as it travels over the wire.

    Accepts either the ORM attribute names (``id``, ``created_at``) or the
    document field names (``_id``, ``createdAt``) and always serializes to the
    latter.

    Attributes:
        id (str): Store-assigned identifier, serialized as ``_id``.
        user_id (str): ID of the user who owns the contact.
        created_at (datetime): Server-assigned creation time.
        updated_at (datetime): Server-assigned time of the last change.
    """
    id: str = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    user_id: str
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"),
                                 serialization_alias="createdAt")
    updated_at: datetime = Field(validation_alias=AliasChoices("updatedAt", "updated_at"),
                                 serialization_alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


ContactResponse = Contact
