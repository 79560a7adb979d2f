from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ideaboard.auth.access import guard
from ideaboard.database import get_db
from ideaboard.schemas.user import Credentials, LoginResult, UserOut
from ideaboard.services import users as users_service

router = APIRouter()


@router.post(
    "/signup",
    status_code=201,
    response_model=UserOut,
    dependencies=[Depends(guard("auth.signup"))],
)
def signup(data: Credentials, db: Session = Depends(get_db)):
    """Create a new account with the ``user`` role."""
    user = users_service.create_user(db, data.username, data.password)
    return UserOut.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResult,
    dependencies=[Depends(guard("auth.login"))],
)
def login(data: Credentials, request: Request, db: Session = Depends(get_db)):
    """Check credentials and return a bearer token plus the ids of ideas already voted on."""
    user = users_service.authenticate(db, data.username, data.password)
    token = request.app.state.token_issuer.issue(user)
    return LoginResult(
        access_token=token,
        voted_polls=users_service.voted_idea_ids(db, user.id),
    )
