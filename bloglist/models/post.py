# bloglist/models/post.py

import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from . import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    title = Column(String, nullable=False)
    author = Column(String, nullable=True)
    url = Column(String, nullable=False)
    likes = Column(Integer, nullable=False, default=0)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User", back_populates="posts")
