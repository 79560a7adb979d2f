from ideaboard.models.user import Role, User
from ideaboard.models.idea import Idea, Vote

__all__ = [
    "Role", "User",
    "Idea", "Vote",
]
