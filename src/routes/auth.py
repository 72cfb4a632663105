import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.schemas.user import Token, UserLogin, UserCreate, UserResponse
from src.repository import users as repository_users
from src.auth.auth import (
    get_password_hash,
    verify_password,
    create_access_token,
)
from src.database.db import get_db


router = APIRouter(prefix="/api/users", tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    """
    Register a new user.
    - Hashes the password.
    - Saves the user to the database.

    :param user: UserCreate schema containing user registration data.
    :param db: Database session.
    :return: The newly registered user.
    """
    existing_user = await repository_users.get_user_by_email(db, user.email)
    if existing_user:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
    hashed_password = get_password_hash(user.password)
    new_user = await repository_users.create_user(user=user, hashed_password=hashed_password, db=db)
    logger.info("User %s registered", new_user.id)
    return new_user


@router.post("/login", response_model=Token)
async def login(user: UserLogin, db: AsyncSession = Depends(get_db)):
    """
    Authenticate user and return a bearer access token.

    :param user: UserLogin schema with email and password.
    :param db: Database session.
    :return: JWT access token.
    """
    db_user = await repository_users.get_user_by_email(db, user.email)
    if not db_user or not verify_password(user.password, db_user.hashed_password):
        logger.warning("Failed login attempt for %s", user.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_access_token(data={"sub": db_user.email})
    return Token(access_token=access_token, token_type="bearer")
