# Identity API routes for user registration and login

from fastapi import APIRouter, Depends, status

from app.controllers.user import UserController
from app.dependencies.services import get_user_controller
from app.schemas import LoginResponse, UserLogin, UserRead, UserRegister

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserRegister,
    controller: UserController = Depends(get_user_controller),
):
    """Register a new user; the password is stored as a bcrypt hash."""
    return await controller.register(user_data.model_dump())


@router.post("/login", response_model=LoginResponse)
async def login_user(
    user_data: UserLogin,
    controller: UserController = Depends(get_user_controller),
):
    """Authenticate with ``user`` and ``password`` and return a JWT token."""
    return await controller.login(user_data.user, user_data.password)
