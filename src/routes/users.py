from fastapi import APIRouter, Depends

from src.auth.auth import get_current_user
from src.database.models import User
from src.schemas.user import UserResponse

router = APIRouter(
    prefix="/api/users",
    tags=["users"]
)


@router.get("/current", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Retrieve the user identified by the bearer token.

    :param current_user: Authenticated user.
    :return: The authenticated user.
    """
    return current_user
