from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tasktracker.core.errors import InvalidInput
from tasktracker.db.session import get_session
from tasktracker.models.user import User
from tasktracker.schemas.user import AuthResponse, UserLogin, UserRead, UserRegister
from tasktracker.stores.credentials import authenticate_user, register_user
from ...deps import get_current_user

router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_register: UserRegister, session: Session = Depends(get_session)):
    user = register_user(
        session,
        email=user_register.email,
        password=user_register.password,
        name=user_register.name,
    )
    return AuthResponse(message="User created successfully", user=UserRead.model_validate(user))

@router.post("/login", response_model=AuthResponse)
def login(user_credentials: UserLogin, session: Session = Depends(get_session)):
    if not user_credentials.email or not user_credentials.password:
        raise InvalidInput("Email and password are required")

    user = authenticate_user(session, user_credentials.email, user_credentials.password)
    return AuthResponse(message="Login successful", user=UserRead.model_validate(user))

@router.get("/me", response_model=UserRead)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    return current_user
