from sqlalchemy import JSON, Column, Text

from blog_api.db.base import BaseModel


class BlogPost(BaseModel):
    __tablename__ = "blog_posts"

    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    # {"firstName": ..., "lastName": ...}
    author = Column(JSON, nullable=False)
