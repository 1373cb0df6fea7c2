# bloglist/models/user.py

import uuid
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from . import Base


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for blog users.
    Stores the username, display name and bcrypt hash used at login,
    plus the posts the user owns.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    username = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)

    posts = relationship("Post", back_populates="user", order_by="Post.created_at")
