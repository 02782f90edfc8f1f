"""
Authentication routes

- POST /auth/token: log in, returns a JWT
- POST /auth/register: create a user, returns a JWT and the user
"""
import logging

from fastapi import APIRouter, Depends, status

from trailblazer.models import UserStore
from trailblazer.routes.deps import get_token_manager, get_user_store
from trailblazer.schemas import Registration, Token, UserAuthRequest, UserRegisterRequest
from trailblazer.utils.security import TokenManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=Token)
async def login(
    request: UserAuthRequest,
    users: UserStore = Depends(get_user_store),
    tokens: TokenManager = Depends(get_token_manager),
):
    """Exchange username/password for a token"""
    user = await users.authenticate(request.username, request.password)
    return {"token": tokens.create_token(user)}


@router.post("/register", response_model=Registration, status_code=status.HTTP_201_CREATED)
async def register(
    request: UserRegisterRequest,
    users: UserStore = Depends(get_user_store),
    tokens: TokenManager = Depends(get_token_manager),
):
    """Create an account and log it in"""
    user = await users.register(
        username=request.username,
        password=request.password,
        email=str(request.email),
        first_name=request.first_name,
    )
    logger.info(f"Registered user {user['username']}")
    return {"token": tokens.create_token(user), "user": user}
