from blog_api.db.repositories.post_repository import BlogPostRepository

__all__ = ["BlogPostRepository"]
