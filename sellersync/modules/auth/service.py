from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sellersync.common.exceptions import ConflictStateError, NotFoundError
from sellersync.common.transactions import committing
from sellersync.modules.auth.models import User
from sellersync.modules.auth.schemas import UserCreate, TokenResponse, UserOut, PasswordChange
from sellersync.modules.auth.utils import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)


class AuthService:
    """User registration, login and password management."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, user_data: UserCreate) -> User:
        existing = self.db.query(User).filter(User.username == user_data.username).first()
        if existing:
            raise ConflictStateError("Username already exists.", code="USERNAME_TAKEN")

        user = User(
            username=user_data.username,
            password=hash_password(user_data.password),
            full_name=user_data.full_name,
            email=user_data.email,
            role=user_data.role.value,
        )
        with committing(self.db, "registering user"):
            self.db.add(user)
        self.db.refresh(user)
        logger.info(f"User {user.username} registered with role {user.role}")
        return user

    def login(self, username: str, password: str) -> TokenResponse:
        user = self.db.query(User).filter(User.username == username).first()

        if not user or not verify_password(password, user.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials."
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is inactive."
            )

        with committing(self.db, "updating last login"):
            user.last_login = datetime.now(timezone.utc)
        self.db.refresh(user)

        token = create_access_token({
            "sub": str(user.id),
            "username": user.username,
            "role": user.role,
        })
        return TokenResponse(access_token=token, user=UserOut.model_validate(user))

    def get_user(self, user_id) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def change_password(self, user_id, data: PasswordChange) -> None:
        user = self.get_user(user_id)
        if not verify_password(data.current_password, user.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect."
            )
        with committing(self.db, "changing password"):
            user.password = hash_password(data.new_password)
        logger.info(f"Password changed for user {user.username}")

    def ensure_admin(self, password: str, full_name: Optional[str] = "Administrator",
                     email: Optional[str] = None) -> User:
        """Create the ``admin`` user, or reset its password if it already exists."""
        user = self.db.query(User).filter(User.username == "admin").first()
        with committing(self.db, "setting up admin"):
            if user:
                user.password = hash_password(password)
                user.role = "admin"
                user.is_active = True
            else:
                user = User(
                    username="admin",
                    password=hash_password(password),
                    full_name=full_name,
                    email=email,
                    role="admin",
                )
                self.db.add(user)
        self.db.refresh(user)
        return user
