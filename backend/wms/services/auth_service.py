"""
Auth Service - registration and password login
"""
import logging

from sqlalchemy.orm import Session

from wms.config import settings
from wms.database import unit_of_work
from wms.exceptions import AuthError, ConflictError, NotFoundError
from wms.models import User
from wms.repositories.catalog import UserRepository
from wms.schemas.user import TokenResponse, UserLogin, UserRegister, UserResponse
from wms.utils.auth_internal import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def register(self, payload: UserRegister) -> User:
        email = payload.email.strip().lower()
        if self.repo.email_taken(email):
            raise ConflictError("Email %s is already registered" % email)
        with unit_of_work(self.db):
            user = self.repo.add(User(
                name=payload.name.strip(),
                email=email,
                password_hash=hash_password(payload.password),
                is_active=True,
            ))
        logger.info("User %s registered (%s)", user.id, email)
        return user

    def login(self, payload: UserLogin) -> TokenResponse:
        user = self.repo.get_by_email(payload.email)
        # Same message for unknown email and wrong password
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.warning("Failed login for %s", payload.email)
            raise AuthError("Invalid email or password")
        if not user.is_active:
            raise AuthError("User account is disabled")
        token = create_access_token(user.id, user.email)
        logger.info("User %s logged in", user.id)
        return TokenResponse(
            access_token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=UserResponse.model_validate(user),
        )

    def get_user(self, user_id: int) -> User:
        user = self.repo.get(user_id)
        if user is None:
            raise NotFoundError("User %s not found" % user_id)
        return user
