from pydantic import BaseModel, Field

from ideaboard.schemas.user import UserOut


class IdeaCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)


class TitleUpdate(BaseModel):
    new_title: str = Field(min_length=1, max_length=255, alias="newTitle")


class IdeaOut(BaseModel):
    id: str
    title: str
    votes: int
    creator: UserOut

    model_config = {"from_attributes": True}


class IdeaReport(BaseModel):
    id: str
    title: str
    creator: str  # username
    votes_count: int = Field(alias="votesCount")
    voters: list[str] = []

    model_config = {"populate_by_name": True}
