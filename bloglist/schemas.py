# bloglist/schemas.py

from pydantic import BaseModel, ConfigDict


# -------------------------------
# Response Shapes
# -------------------------------
# Internal columns (password_hash, user_id, created_at) are never listed here,
# so they can't leak into a response.

class OwnerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    name: str | None = None


class PostSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    author: str | None = None
    url: str
    likes: int


class PostOut(PostSummary):
    user: OwnerOut | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    name: str | None = None
    posts: list[PostSummary] = []


class LoginOut(BaseModel):
    token: str
    username: str
    name: str | None = None
