import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ideaboard.auth.passwords import hash_password, verify_password
from ideaboard.errors import Conflict, Forbidden, NotFound, Unauthenticated
from ideaboard.models.idea import Idea, Vote
from ideaboard.models.user import Role, User

logger = logging.getLogger(__name__)


def find_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at, User.username).all()


def create_user(db: Session, username: str, password: str, role: Role = Role.USER) -> User:
    """Create an account with a hashed password. Usernames are unique."""
    if find_by_username(db, username):
        raise Conflict(f"Username '{username}' is already taken")

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=Role(role).value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with another signup for the same name
        db.rollback()
        raise Conflict(f"Username '{username}' is already taken") from None
    db.refresh(user)
    logger.info("Created %s user %s", user.role, user.username)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    user = find_by_username(db, username)
    if not user:
        raise Unauthenticated("User not found")
    if not verify_password(password, user.password_hash):
        raise Unauthenticated("Invalid credentials")
    return user


def update_role(db: Session, target_user_id: str, new_role: Role, requester_id: str) -> User:
    """Change another user's role. Nobody may change their own role."""
    if str(target_user_id) == str(requester_id):
        raise Forbidden("You cannot change your own role")

    user = db.get(User, str(target_user_id))
    if not user:
        raise NotFound(f"User #{target_user_id} not found")

    user.role = Role(new_role).value
    db.commit()
    logger.info("User %s is now %s (changed by %s)", user.username, user.role, requester_id)
    return user


def voted_ideas(db: Session, user_id: str) -> list[Idea]:
    return (
        db.query(Idea)
        .join(Vote, Vote.idea_id == Idea.id)
        .options(joinedload(Idea.creator))
        .filter(Vote.user_id == user_id)
        .order_by(Vote.created_at)
        .all()
    )


def voted_idea_ids(db: Session, user_id: str) -> list[str]:
    rows = (
        db.query(Vote.idea_id)
        .filter(Vote.user_id == user_id)
        .order_by(Vote.created_at)
        .all()
    )
    return [row.idea_id for row in rows]
