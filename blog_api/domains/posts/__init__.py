from blog_api.domains.posts.entities import Author, BlogPost
from blog_api.domains.posts.exceptions import PostError, PostNotFoundError, PostValidationError
from blog_api.domains.posts.schemas import AuthorInput, PostCreate, PostResponse, PostUpdate

__all__ = [
    "Author", "BlogPost",
    "PostError", "PostNotFoundError", "PostValidationError",
    "AuthorInput", "PostCreate", "PostResponse", "PostUpdate"
]
