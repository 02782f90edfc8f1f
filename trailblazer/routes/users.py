"""
User profile routes. Every route requires the token of the user named in
the path.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from trailblazer.models import UserStore
from trailblazer.routes.deps import ensure_correct_user, get_user_store
from trailblazer.schemas import UserEnvelope, UserUpdateRequest

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=UserEnvelope)
async def get_user(
    username: str,
    _: Dict[str, Any] = Depends(ensure_correct_user),
    users: UserStore = Depends(get_user_store),
):
    return {"user": await users.get(username)}


@router.patch("/{username}", response_model=UserEnvelope)
async def update_user(
    username: str,
    request: UserUpdateRequest,
    _: Dict[str, Any] = Depends(ensure_correct_user),
    users: UserStore = Depends(get_user_store),
):
    """Update first_name, email and/or password"""
    data = request.model_dump(exclude_none=True)
    if "email" in data:
        data["email"] = str(data["email"])
    return {"user": await users.update(username, data)}


@router.delete("/{username}")
async def delete_user(
    username: str,
    _: Dict[str, Any] = Depends(ensure_correct_user),
    users: UserStore = Depends(get_user_store),
):
    await users.remove(username)
    return {"deleted": username}
