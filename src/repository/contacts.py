import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
from src.database import models
from src.schemas.contact import ContactCreate, ContactUpdate

__all__ = [
    "create_contact", "get_contact", "get_contacts", "update_contact", "delete_contact"
]

logger = logging.getLogger(__name__)


async def create_contact(db: AsyncSession, contact: ContactCreate, user_id: str) -> models.Contact:
    """
    Create a new contact in the database.

    :param db: Async SQLAlchemy session.
    :param contact: ContactCreate schema with contact data.
    :param user_id: ID of the user who owns the contact.
    :return: The created contact object.
    """
    db_contact = models.Contact(**contact.model_dump(), user_id=user_id)
    db.add(db_contact)
    await db.commit()
    await db.refresh(db_contact)
    logger.info("Contact %s created for user %s", db_contact.id, user_id)
    return db_contact


async def get_contact(db: AsyncSession, contact_id: str) -> Optional[models.Contact]:
    """
    Retrieve a contact by its ID regardless of its owner.

    Ownership is checked by the caller so that a missing contact and a contact
    of another user can be told apart.

    :param db: Async SQLAlchemy session.
    :param contact_id: ID of the contact to retrieve.
    :return: Contact object if found, otherwise None.
    """
    result = await db.execute(
        select(models.Contact).filter(models.Contact.id == contact_id)
    )
    return result.scalar_one_or_none()


async def get_contacts(db: AsyncSession, user_id: str) -> List[models.Contact]:
    """
    Retrieve every contact of the specified user in creation order.

    :param db: Async SQLAlchemy session.
    :param user_id: ID of the user who owns the contacts.
    :return: List of contact objects.
    """
    result = await db.execute(
        select(models.Contact)
        .filter(models.Contact.user_id == user_id)
        .order_by(models.Contact.created_at)
    )
    return list(result.scalars().all())


async def update_contact(db: AsyncSession, contact: models.Contact, updated: ContactUpdate) -> models.Contact:
    """
    Apply the fields present in ``updated`` to a contact.

    :param db: Async SQLAlchemy session.
    :param contact: The stored contact to change.
    :param updated: ContactUpdate schema; unset fields are left untouched.
    :return: The updated contact object.
    """
    for key, value in updated.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(contact, key, value)
    await db.commit()
    await db.refresh(contact)
    logger.info("Contact %s updated", contact.id)
    return contact


async def delete_contact(db: AsyncSession, contact: models.Contact) -> models.Contact:
    """
    Delete a contact.

    :param db: Async SQLAlchemy session.
    :param contact: The stored contact to remove.
    :return: The deleted contact object.
    """
    await db.delete(contact)
    await db.commit()
    logger.info("Contact %s deleted", contact.id)
    return contact
