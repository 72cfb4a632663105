from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from src.database import models
from src.schemas.user import UserCreate


async def get_user_by_email(db: AsyncSession, email: str):
    """
    Retrieve a user from the database by their email address.

    :param db: Async SQLAlchemy session.
    :param email: Email address of the user.
    :return: User object if found, otherwise None.
    """
    result = await db.execute(
        select(models.User).filter(models.User.email == email)
    )
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, user: UserCreate, hashed_password: str):
    """
    Create a new user in the database.
    :param db: Async SQLAlchemy session.
    :param user: UserCreate schema containing user input data.
    :param hashed_password: Hashed version of the user's password.
    :return: The newly created user object.
    """
    db_user = models.User(username=user.username, email=user.email, hashed_password=hashed_password)
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    return db_user
