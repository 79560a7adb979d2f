import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ideaboard.auth.access import Principal, guard
from ideaboard.database import get_db
from ideaboard.schemas.idea import IdeaCreate, IdeaOut, IdeaReport, TitleUpdate
from ideaboard.services import ideas as ideas_service

router = APIRouter()


@router.get("", response_model=list[IdeaOut], dependencies=[Depends(guard("ideas.list"))])
def list_ideas(db: Session = Depends(get_db)):
    return [IdeaOut.model_validate(i) for i in ideas_service.list_ideas(db)]


@router.post("", status_code=201, response_model=IdeaOut)
def create_idea(
    data: IdeaCreate,
    principal: Principal = Depends(guard("ideas.create")),
    db: Session = Depends(get_db),
):
    idea = ideas_service.create_idea(db, data.title, principal)
    return IdeaOut.model_validate(idea)


@router.post(
    "/{idea_id}/vote",
    response_model=IdeaOut,
    responses={404: {"description": "Idea not found"}, 409: {"description": "Already voted"}},
)
def vote(
    idea_id: uuid.UUID,
    principal: Principal = Depends(guard("ideas.vote")),
    db: Session = Depends(get_db),
):
    """One vote per user per idea."""
    idea = ideas_service.cast_vote(db, str(idea_id), principal)
    return IdeaOut.model_validate(idea)


@router.get(
    "/{idea_id}/report",
    response_model=IdeaReport,
    dependencies=[Depends(guard("ideas.report"))],
    responses={404: {"description": "Idea not found"}},
)
def report(idea_id: uuid.UUID, db: Session = Depends(get_db)):
    """Creator, vote count and voter usernames of an idea."""
    return ideas_service.get_report(db, str(idea_id))


@router.patch(
    "/{idea_id}",
    response_model=IdeaOut,
    responses={403: {"description": "Only the creator may retitle"}, 404: {"description": "Idea not found"}},
)
def update_title(
    idea_id: uuid.UUID,
    data: TitleUpdate,
    principal: Principal = Depends(guard("ideas.update_title")),
    db: Session = Depends(get_db),
):
    idea = ideas_service.update_title(db, str(idea_id), data.new_title, principal)
    return IdeaOut.model_validate(idea)


@router.delete(
    "/{idea_id}",
    status_code=204,
    response_class=Response,
    responses={403: {"description": "Not the creator or an admin"}, 404: {"description": "Idea not found"}},
)
def delete_idea(
    idea_id: uuid.UUID,
    principal: Principal = Depends(guard("ideas.delete")),
    db: Session = Depends(get_db),
):
    ideas_service.delete_idea(db, str(idea_id), principal)
    return Response(status_code=204)
