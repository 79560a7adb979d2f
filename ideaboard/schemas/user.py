from pydantic import BaseModel, Field

from ideaboard.models.user import Role


class Credentials(BaseModel):
    """Body of both signup and login."""

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=6)


class UserOut(BaseModel):
    id: str
    username: str
    role: Role

    model_config = {"from_attributes": True}


class RoleUpdate(BaseModel):
    role: Role


class LoginResult(BaseModel):
    access_token: str
    voted_polls: list[str] = Field(default_factory=list, alias="votedPolls")

    model_config = {"populate_by_name": True}


class Message(BaseModel):
    message: str
