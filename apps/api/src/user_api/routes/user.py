"""User API routes.

Validation failures and missing users are returned as responses, never
raised: 400 carries the validator message as a JSON string and 404 has an
empty body.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from user_api.services import get_user_store
from user_common.models.user import User, UserPayload
from user_common.services.user_store import UserStore
from user_common.services.user_validator import validate_user

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


def _bad_request(message: str | None) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=message)


def _not_found() -> Response:
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.get("", response_model=list[User])
async def list_users(store: UserStore = Depends(get_user_store)) -> list[User]:
    return store.list_users()


@router.get("/{user_id}", response_model=User, responses={404: {"description": "User not found"}})
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)):
    user = store.get_user(user_id)
    if user is None:
        return _not_found()
    return user


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation failed"}},
)
async def create_user(payload: UserPayload, response: Response, store: UserStore = Depends(get_user_store)):
    validation = validate_user(payload)
    if not validation.is_valid:
        return _bad_request(validation.error_message)
    user = store.create_user(payload)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.put(
    "/{user_id}",
    response_model=User,
    responses={400: {"description": "Validation failed"}, 404: {"description": "User not found"}},
)
async def update_user(user_id: int, payload: UserPayload, store: UserStore = Depends(get_user_store)):
    validation = validate_user(payload)
    if not validation.is_valid:
        return _bad_request(validation.error_message)
    user = store.update_user(user_id, payload)
    if user is None:
        return _not_found()
    return user


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "User not found"}},
)
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)) -> Response:
    if not store.delete_user(user_id):
        return _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
