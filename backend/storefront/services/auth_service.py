"""
Authentication Service.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from storefront.core import security
from storefront.exceptions import ConflictError
from storefront.models.user import User, UserRole

logger = logging.getLogger(__name__)


class AuthService:
    def authenticate_user(
        self, db: Session, email: str, password: str
    ) -> Optional[User]:
        """Authenticate a user by email and password."""
        user = self.get_user_by_email(db, email)
        if not user:
            return None
        if not security.verify_password(password, user.hashed_password):
            return None
        return user

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def create_user(
        self,
        db: Session,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        role: UserRole = UserRole.MERCHANT,
    ) -> User:
        """Create a new account. Self-registration always yields merchants."""
        if self.get_user_by_email(db, email):
            raise ConflictError(f"User with email {email} already exists")

        user = User(
            email=email,
            hashed_password=security.get_password_hash(password),
            full_name=full_name,
            role=role.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"User registered: {user.id} ({user.role})")
        return user

    def create_user_token(self, user: User) -> dict:
        access_token = security.create_access_token(
            data={"sub": user.email, "user_id": user.id, "role": user.role}
        )
        return {"access_token": access_token, "token_type": "bearer"}


auth_service = AuthService()
