"""Auth: register, login, logout.

- Password hashing with bcrypt
- Password strength validation
- httpOnly, SameSite cookies (Secure in production)
"""
import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from mediserve.api.deps import get_db, get_current_user
from mediserve.core.config import settings
from mediserve.core.exceptions import BusinessError
from mediserve.core.security import verify_password, get_password_hash, create_access_token
from mediserve.models.pharmacy import Pharmacy
from mediserve.models.user import User
from mediserve.schemas.user import UserRegister, UserLogin, UserResponse, Token

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_password_strength(password: str) -> None:
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise BusinessError.bad_request(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )
    if settings.REQUIRE_NUMBERS and not any(c.isdigit() for c in password):
        raise BusinessError.bad_request("Password must contain at least one number")


@router.post("/register", response_model=UserResponse, status_code=201)
def register(data: UserRegister, db: Session = Depends(get_db)):
    """Create the owner account and its pharmacy profile in one step."""
    if db.query(User).filter(User.email == data.email).first():
        raise BusinessError.conflict("Email already registered")

    _check_password_strength(data.password)

    user = User(
        email=data.email,
        hashed_password=get_password_hash(data.password),
        name=data.owner_name,
    )
    db.add(user)
    db.flush()
    db.add(Pharmacy(
        owner_id=user.id,
        owner_name=data.owner_name,
        pharmacy_name=data.pharmacy_name,
        email=data.email,
        is_open=True,
    ))
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id} with pharmacy '{data.pharmacy_name}'")
    return user


@router.post("/login", response_model=Token)
def login(data: UserLogin, response: Response, db: Session = Depends(get_db)):
    """
    Login: token in an httpOnly cookie and in the body.

    Generic error message, whichever field is wrong.
    """
    user = db.query(User).filter(User.email == data.email).first()
    if not user or not verify_password(data.password, user.hashed_password):
        raise BusinessError.unauthorized(f"failed login for {data.email}")

    token = create_access_token(subject=str(user.id))

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        secure=settings.SECURE_COOKIES,
        httponly=True,
        samesite=settings.SAME_SITE_COOKIE,
    )
    return Token(access_token=token)


@router.post("/logout")
def logout(response: Response, current_user: User = Depends(get_current_user)):
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        secure=settings.SECURE_COOKIES,
        httponly=True,
        samesite=settings.SAME_SITE_COOKIE,
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return current_user
