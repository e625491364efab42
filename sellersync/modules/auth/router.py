from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import get_auth_context
from sellersync.modules.auth.service import AuthService
from sellersync.modules.auth.schemas import (
    UserCreate, UserLogin, UserOut, TokenResponse, PasswordChange, AuthContext
)

auth_router = APIRouter()

@auth_router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user (role defaults to viewer)."""
    return AuthService(db).create_user(user_data)

@auth_router.post("/login", response_model=TokenResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Exchange username and password for a bearer token."""
    return AuthService(db).login(credentials.username, credentials.password)

@auth_router.get("/profile", response_model=UserOut)
def profile(
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return AuthService(db).get_user(auth_context.user_id)

@auth_router.put("/password", response_model=dict)
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    AuthService(db).change_password(auth_context.user_id, data)
    return {"message": "Password changed successfully."}
