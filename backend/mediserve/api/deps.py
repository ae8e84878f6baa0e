"""FastAPI dependencies: DB session, current user and their pharmacy.

JWT accepted from:
1. Authorization header (for API clients)
2. httpOnly cookie (for the web dashboard)
"""
from typing import Generator, Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from mediserve.core.config import settings
from mediserve.core.exceptions import BusinessError
from mediserve.core.security import decode_access_token
from mediserve.db.session import SessionLocal
from mediserve.models.pharmacy import Pharmacy
from mediserve.models.user import User
from mediserve.services.notification_service import NotificationCenter

security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Header takes precedence over cookie."""
    token = None

    if credentials:
        token = credentials.credentials
    elif settings.AUTH_COOKIE_NAME in request.cookies:
        token = request.cookies[settings.AUTH_COOKIE_NAME]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    sub = decode_access_token(token)
    if not sub:
        raise BusinessError.unauthorized("invalid or expired token")

    try:
        return int(sub)
    except ValueError:
        raise BusinessError.unauthorized(f"non-numeric subject {sub!r}")


def get_current_user(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> User:
    """Load current user from DB."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise BusinessError.unauthorized(f"user {user_id} no longer exists")
    return user


def get_current_pharmacy(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Pharmacy:
    pharmacy = db.query(Pharmacy).filter(Pharmacy.owner_id == current_user.id).first()
    if not pharmacy:
        raise BusinessError.not_found("Pharmacy", reason=f"user {current_user.id} has no pharmacy")
    return pharmacy


def get_notification_center(
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
) -> NotificationCenter:
    return NotificationCenter.load(db, pharmacy)
