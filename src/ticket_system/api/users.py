"""User API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..dependencies import get_user_api
from ..modules.user.contracts import CreateUserRequest, UpdateUserRequest, UserDataContract
from ..modules.user.facade import UserModuleApi
from .middleware import ProblemDetailsException
from .schemas import CreatedResponse, ProblemDetails

router = APIRouter(tags=["users"])

_NOT_FOUND = {404: {"model": ProblemDetails, "description": "User not found"}}


def _user_not_found(detail: str) -> ProblemDetailsException:
    return ProblemDetailsException(
        status_code=status.HTTP_404_NOT_FOUND, title="User Not Found", detail=detail
    )


@router.post(
    "/v1/users",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ProblemDetails, "description": "Email already in use"},
        422: {"model": ProblemDetails, "description": "Invalid user data"},
    },
)
async def create_user(
    request: CreateUserRequest, users: UserModuleApi = Depends(get_user_api)
) -> CreatedResponse:
    user_id = await users.create_user(request)
    return CreatedResponse(id=user_id)


@router.get("/v1/users", response_model=List[UserDataContract])
async def list_users(
    ids: Optional[List[int]] = Query(None, description="Restrict to these user IDs"),
    users: UserModuleApi = Depends(get_user_api),
):
    """List all users, or the given ones when ``ids`` is passed."""
    if ids:
        return await users.get_users_by_ids(ids)
    return await users.get_all_users()


# Declared before /{user_id} so "by-email" is not parsed as an ID
@router.get("/v1/users/by-email", response_model=UserDataContract, responses=_NOT_FOUND)
async def find_user_by_email(
    email: str = Query(..., description="Email address (case-insensitive)"),
    users: UserModuleApi = Depends(get_user_api),
):
    user = await users.find_user_by_email(email)
    if user is None:
        raise _user_not_found(f"User with email '{email}' not found.")
    return user


@router.get("/v1/users/{user_id}", response_model=UserDataContract, responses=_NOT_FOUND)
async def get_user(user_id: int, users: UserModuleApi = Depends(get_user_api)):
    user = await users.get_user(user_id)
    if user is None:
        raise _user_not_found(f"User with ID '{user_id}' not found.")
    return user


@router.put(
    "/v1/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def update_user(
    user_id: int, request: UpdateUserRequest, users: UserModuleApi = Depends(get_user_api)
):
    await users.update_user(user_id, request)


@router.post(
    "/v1/users/{user_id}/deactivate",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def deactivate_user(user_id: int, users: UserModuleApi = Depends(get_user_api)):
    await users.deactivate_user(user_id)


@router.post(
    "/v1/users/{user_id}/activate",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def activate_user(user_id: int, users: UserModuleApi = Depends(get_user_api)):
    await users.activate_user(user_id)


@router.delete(
    "/v1/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **_NOT_FOUND,
        409: {"model": ProblemDetails, "description": "Permanent deletion is disabled"},
    },
)
async def delete_user(user_id: int, users: UserModuleApi = Depends(get_user_api)):
    await users.delete_user(user_id)
