from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional

from src.schemas.contact import as_utc


class UserBase(BaseModel):
    """
    Base schema for user data.

    Attributes:
        email (EmailStr): The email address of the user.
    """
    email: EmailStr

class UserCreate(UserBase):
    """
    Schema for creating a new user.

     Attributes:
        username (str): Display name of the new user.
        password (str): The password for the new user.
    """
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=6, max_length=72)

class UserLogin(UserBase):
    """
    Schema for user login.

    Attributes:
        password (str): The user's password for authentication.
    """
    password: str

class UserResponse(UserBase):
    """
    Schema for returning user data in responses.

    Attributes:
        id (str): The unique identifier of the user, serialized as ``_id``.
        username (str): Display name of the user.
        created_at (Optional[datetime]): When the user was created, serialized as ``createdAt``.
    """
    id: str = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    username: str
    created_at: Optional[datetime] = Field(default=None,
                                           validation_alias=AliasChoices("createdAt", "created_at"),
                                           serialization_alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class Token(BaseModel):
    """
    Schema for authentication tokens.

    Attributes:
        access_token (str): The JWT access token.
        token_type (str): The type of the token (default: "bearer").
    """
    access_token: str
    token_type: str = "bearer"

class TokenData(BaseModel):
    """
    Schema for token payload data.

    Attributes:
        email (Optional[str]): The email extracted from the token.
    """
    email: Optional[str] = None
