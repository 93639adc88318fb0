from uuid import UUID
from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserProfile
from src.app.use_cases.users import LoadProfileUseCase
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/auth/check", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def check_auth(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check Session

    Returns the signed-in user's profile based on the session cookie.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session cookie
        - 404 Not Found: Account no longer exists
        - 500 Internal Server Error: Server error
    """
    user_id = UUID(current_user["user_id"])

    use_case = LoadProfileUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
