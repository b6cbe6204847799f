from blog_api.db.base import Base
from blog_api.db.models.post import BlogPost

__all__ = ["Base", "BlogPost"]
