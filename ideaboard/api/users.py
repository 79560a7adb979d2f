import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ideaboard.auth.access import Principal, guard
from ideaboard.database import get_db
from ideaboard.schemas.idea import IdeaOut
from ideaboard.schemas.user import Message, RoleUpdate, UserOut
from ideaboard.services import users as users_service

router = APIRouter()


@router.get("", response_model=list[UserOut], dependencies=[Depends(guard("users.list"))])
def list_users(db: Session = Depends(get_db)):
    """All accounts, without password hashes. Admins only."""
    return [UserOut.model_validate(u) for u in users_service.list_users(db)]


@router.get("/me/votes", response_model=list[IdeaOut])
def my_votes(
    principal: Principal = Depends(guard("users.my_votes")),
    db: Session = Depends(get_db),
):
    return [IdeaOut.model_validate(i) for i in users_service.voted_ideas(db, principal.id)]


@router.patch("/{user_id}/role", response_model=Message)
def update_role(
    user_id: uuid.UUID,
    data: RoleUpdate,
    principal: Principal = Depends(guard("users.update_role")),
    db: Session = Depends(get_db),
):
    """Change another user's role. Admins cannot change their own."""
    user = users_service.update_role(db, str(user_id), data.role, principal.id)
    return Message(message=f"User {user.id} is now {user.role}")
