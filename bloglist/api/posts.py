# bloglist/api/posts.py

import logging
import uuid
from pydantic import BaseModel, Field, field_validator
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session, joinedload

from bloglist.core.errors import ForbiddenError, MalformattedIdError
from bloglist.core.middleware import require_user
from bloglist.database import get_db
from bloglist.models.post import Post
from bloglist.models.user import User
from bloglist.schemas import PostOut


logger = logging.getLogger(__name__)

router = APIRouter()

# largest value a signed 64-bit INTEGER column holds
MAX_LIKES = 2**63 - 1


class PostCreate(BaseModel):
    title: str = Field(min_length=1)
    author: str | None = None
    url: str = Field(min_length=1)
    likes: int | None = Field(default=None, ge=0, le=MAX_LIKES)


class PostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    author: str | None = None
    url: str | None = Field(default=None, min_length=1)
    likes: int | None = Field(default=None, ge=0, le=MAX_LIKES)

    @field_validator("title", "url", "likes")
    @classmethod
    def reject_null(cls, value):
        # only runs for values that were actually sent
        if value is None:
            raise ValueError("is required")
        return value


# -------------------------------
# Helpers
# -------------------------------

def parse_post_id(post_id: str) -> str:
    try:
        return uuid.UUID(post_id).hex
    except ValueError as exc:
        raise MalformattedIdError() from exc


def find_post(db: Session, post_id: str) -> Post | None:
    return (
        db.query(Post)
        .options(joinedload(Post.user))
        .filter(Post.id == parse_post_id(post_id))
        .first()
    )


# -------------------------------
# Post Endpoints
# -------------------------------

@router.get("/posts", response_model=list[PostOut])
def list_posts(db: Session = Depends(get_db)):
    posts = (
        db.query(Post)
        .options(joinedload(Post.user))
        .order_by(Post.created_at.asc())
        .all()
    )
    return [PostOut.model_validate(post) for post in posts]


@router.get("/posts/{post_id}", response_model=PostOut)
def get_post(post_id: str, db: Session = Depends(get_db)):
    post = find_post(db, post_id)
    if post is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return PostOut.model_validate(post)


@router.post("/posts", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Creates a post owned by the caller. Requires a valid bearer token.
    """
    post = Post(
        title=payload.title,
        author=payload.author,
        url=payload.url,
        likes=payload.likes or 0,
    )
    user.posts.append(post)
    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info("User %s created post %s", user.username, post.id)
    return PostOut.model_validate(post)


@router.put("/posts/{post_id}", response_model=PostOut)
def update_post(post_id: str, payload: PostUpdate, db: Session = Depends(get_db)):
    """
    Replaces the fields present in the body. Fields left out keep their
    stored value; the owner is never changed here.
    """
    post = find_post(db, post_id)
    if post is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(post, field, value)
    db.commit()
    db.refresh(post)

    return PostOut.model_validate(post)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Deletes a post owned by the caller. Deleting a post that no longer
    exists still reports success.
    """
    post = find_post(db, post_id)
    if post is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    if post.user_id != user.id:
        logger.warning("User %s tried to delete post %s owned by someone else", user.username, post.id)
        raise ForbiddenError("you are not authorized to delete this post")

    # user.posts is backed by posts.user_id, so the row delete also drops it there
    db.delete(post)
    db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
