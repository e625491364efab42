"""
Authentication dependencies for FastAPI.
"""
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import jwt

from sellersync.database.database import get_db
from sellersync.modules.auth.models import User
from sellersync.modules.auth.policy import can_write, WRITE_ROLES
from sellersync.modules.auth.schemas import AuthContext
from sellersync.modules.auth.utils import decode_access_token

# Security scheme
security = HTTPBearer()

class AuthDependencies:
    """Reusable authentication dependencies."""

    @staticmethod
    def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        db: Session = Depends(get_db)
    ) -> User:
        """Resolve the active user behind the bearer token."""
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

        try:
            payload = decode_access_token(credentials.credentials)
            user_id: str = payload.get("sub")
            if user_id is None or payload.get("type") != "access":
                raise credentials_exception
            user_uuid = UUID(user_id)
        except (jwt.PyJWTError, ValueError):
            raise credentials_exception

        user = db.query(User).filter(User.id == user_uuid).first()
        if user is None or not user.is_active:
            raise credentials_exception

        return user

    @staticmethod
    def get_auth_context(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        db: Session = Depends(get_db)
    ) -> AuthContext:
        """Identity and role of the caller for this request only."""
        user = AuthDependencies.get_current_user(credentials, db)
        return AuthContext(user_id=user.id, username=user.username, role=user.role)

    @staticmethod
    def require_manager():
        """Dependency for write operations on ledger records."""
        def manager_checker(auth_context: AuthContext = Depends(AuthDependencies.get_auth_context)):
            if not can_write(auth_context.role):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"One of these roles is required: {', '.join(sorted(WRITE_ROLES))}"
                )
            return auth_context
        return manager_checker

    @staticmethod
    def require_authenticated():
        """Dependency for read-only endpoints: any active user."""
        return AuthDependencies.get_auth_context

# Dependency instances
get_auth_context = AuthDependencies.get_auth_context
