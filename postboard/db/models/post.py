from sqlalchemy import Column, Integer, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from postboard.db.base import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="posts")
    # Children are removed explicitly by crud.post.delete_post, not by ORM cascade
    images = relationship("Image", back_populates="post", order_by="Image.id")
    likes = relationship("Like", back_populates="post")
    comments = relationship("Comment", back_populates="post")
