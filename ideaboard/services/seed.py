import logging

from sqlalchemy.orm import Session

from ideaboard.models.user import Role, User
from ideaboard.services.users import create_user, find_by_username

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, username: str = "admin", password: str = "admin123") -> User:
    """Find or create the default administrator. Safe to call on every boot."""
    existing = find_by_username(db, username)
    if existing:
        return existing

    user = create_user(db, username, password, role=Role.ADMIN)
    logger.info("Seeded default admin account '%s'", username)
    return user
