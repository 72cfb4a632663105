from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from src.schemas.contact import ContactCreate, ContactResponse, ContactUpdate
from src.database.db import get_db
from src.auth.auth import get_current_user
from src.database.models import User, Contact as ContactModel
from src.repository import contacts as repository_contacts


router = APIRouter(prefix="/api/contacts", tags=["contacts"])


async def get_owned_contact(contact_id: str, current_user: User, db: AsyncSession) -> ContactModel:
    """
    Load a contact and make sure it belongs to the current user.

    :param contact_id: ID of the contact.
    :param current_user: Authenticated user.
    :param db: Database session.
    :return: The contact.
    :raises HTTPException: 404 if no such contact, 403 if it belongs to another user.
    """
    contact = await repository_contacts.get_contact(db, contact_id)
    if contact is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    if contact.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User doesn't have permission to access other user's contacts",
        )
    return contact


@router.get("/", response_model=List[ContactResponse])
async def get_contacts(current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """
    Get all contacts for the current authenticated user.

    :param current_user: Authenticated user.
    :param db: Database session.
    :return: List of contact objects.
    """
    contacts = await repository_contacts.get_contacts(db, current_user.id)
    return contacts

@router.post("/", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(contact: ContactCreate, current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """
    Create a new contact for the authenticated user.

    :param contact: ContactCreate schema.
    :param current_user: Authenticated user.
    :param db: Database session.
    :return: The newly created contact.
    """
    return await repository_contacts.create_contact(db, contact, current_user.id)

@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact_by_id(contact_id: str, current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """
    Retrieve a specific contact by ID.
    :param contact_id: ID of the contact.
    :param current_user: Authenticated user.
    :param db: Database session.
    :return: Contact object if found.
    """
    return await get_owned_contact(contact_id, current_user, db)

@router.put("/{contact_id}", response_model=ContactResponse)
async def update_contact(contact_id: str, updated_contact: ContactUpdate, current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """
    Update an existing contact by ID.

    :param contact_id: ID of the contact to update.
    :param updated_contact: Updated contact data.
    :param current_user: Authenticated user.
    :param db: Database session.
    :return: Updated contact object.
    """
    contact = await get_owned_contact(contact_id, current_user, db)
    return await repository_contacts.update_contact(db, contact, updated_contact)

@router.delete("/{contact_id}", response_model=ContactResponse)
async def delete_contact(contact_id: str, current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """
    Delete a contact by ID.

    :param contact_id: ID of the contact to delete.
    :param current_user: Authenticated user.
    :param db: Database session.
    :return: The deleted contact.
    """
    contact = await get_owned_contact(contact_id, current_user, db)
    return await repository_contacts.delete_contact(db, contact)
