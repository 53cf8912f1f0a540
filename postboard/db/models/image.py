from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from postboard.db.base import Base


class Image(Base):
    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)
    # bare stored filename inside the upload dir, never a URL
    file = Column(String, nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)

    post = relationship("Post", back_populates="images")
