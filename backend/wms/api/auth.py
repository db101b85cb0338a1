"""
Authentication API routes
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wms.api.responses import created, ok
from wms.dependencies import get_current_user, get_db
from wms.models import User
from wms.schemas.user import UserLogin, UserRegister, UserResponse
from wms.services.auth_service import AuthService

router = APIRouter()


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """Create a user account"""
    user = AuthService(db).register(payload)
    return created(UserResponse.model_validate(user), "User registered")


@router.post("/auth/login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    """Exchange email and password for a Bearer access token"""
    return ok(AuthService(db).login(payload), "Login successful")


@router.get("/auth/me")
def me(user: User = Depends(get_current_user)):
    return ok(UserResponse.model_validate(user), "Current user")
