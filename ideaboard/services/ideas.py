"""Idea lifecycle and voting.

Every operation that acts on behalf of a user takes the authenticated
``Principal`` as an argument. Ownership rules:

- only the creator may retitle an idea;
- the creator or an admin may delete it;
- each user votes at most once per idea, enforced by the
  ``uq_vote_user_idea`` constraint.
"""
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from ideaboard.auth.access import Principal
from ideaboard.errors import Conflict, Forbidden, NotFound, Unauthenticated
from ideaboard.models.idea import Idea, Vote
from ideaboard.models.user import Role, User
from ideaboard.schemas.idea import IdeaReport

logger = logging.getLogger(__name__)


def _load(db: Session, idea_id: str, *options) -> Idea:
    idea = db.query(Idea).options(*options).filter(Idea.id == str(idea_id)).first()
    if not idea:
        raise NotFound(f"Idea #{idea_id} not found")
    return idea


def _require_account(db: Session, principal: Principal) -> User:
    # The token may outlive the account it was issued for
    user = db.get(User, principal.id)
    if not user:
        raise Unauthenticated("Account no longer exists")
    return user


def _has_voted(db: Session, idea_id: str, user_id: str) -> bool:
    return (
        db.query(Vote.id)
        .filter(Vote.idea_id == idea_id, Vote.user_id == user_id)
        .first()
        is not None
    )


def create_idea(db: Session, title: str, creator: Principal) -> Idea:
    user = _require_account(db, creator)
    idea = Idea(title=title, votes=0, creator=user)
    db.add(idea)
    db.commit()
    db.refresh(idea)
    logger.info("Idea %s created by %s", idea.id, user.username)
    return idea


def list_ideas(db: Session) -> list[Idea]:
    return (
        db.query(Idea)
        .options(joinedload(Idea.creator))
        .order_by(Idea.created_at, Idea.id)
        .all()
    )


def cast_vote(db: Session, idea_id: str, voter: Principal) -> Idea:
    """Record ``voter``'s vote and bump the idea's counter in one transaction."""
    idea = _load(db, idea_id, joinedload(Idea.creator))
    _require_account(db, voter)

    if _has_voted(db, idea.id, voter.id):
        raise Conflict("You have already voted on this idea")

    db.add(Vote(idea_id=idea.id, user_id=voter.id))
    try:
        db.flush()
    except IntegrityError:
        # A concurrent request inserted the same (user, idea) pair first
        db.rollback()
        raise Conflict("You have already voted on this idea") from None

    db.execute(
        update(Idea)
        .where(Idea.id == idea.id)
        .values(votes=Idea.votes + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    db.refresh(idea)
    return idea


def update_title(db: Session, idea_id: str, new_title: str, requester: Principal) -> Idea:
    idea = _load(db, idea_id, joinedload(Idea.creator))
    if idea.creator_id != requester.id:
        raise Forbidden("Only the creator can change this idea's title")

    idea.title = new_title
    db.commit()
    db.refresh(idea)
    return idea


def delete_idea(db: Session, idea_id: str, requester: Principal) -> None:
    idea = _load(db, idea_id, joinedload(Idea.creator))

    is_creator = idea.creator_id == requester.id
    is_admin = requester.role == Role.ADMIN.value
    if not is_creator and not is_admin:
        raise Forbidden("Only the creator or an administrator can delete this idea")

    db.delete(idea)
    db.commit()
    logger.info("Idea %s deleted by %s", idea_id, requester.username)


def get_report(db: Session, idea_id: str) -> IdeaReport:
    idea = _load(
        db,
        idea_id,
        joinedload(Idea.creator),
        selectinload(Idea.vote_records).joinedload(Vote.user),
    )
    return IdeaReport(
        id=idea.id,
        title=idea.title,
        creator=idea.creator.username,
        votes_count=idea.votes,
        voters=[vote.user.username for vote in idea.vote_records],
    )
