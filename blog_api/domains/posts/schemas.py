from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_api.domains.posts.entities import Author, BlogPost, as_utc


class AuthorInput(BaseModel):
    """Author as sent by clients"""
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")

    model_config = ConfigDict(populate_by_name=True)

    def to_entity(self) -> Author:
        return Author(first_name=self.first_name, last_name=self.last_name)


class PostCreate(BaseModel):
    """Body of POST /posts"""
    title: str
    content: str
    author: AuthorInput
    created: Optional[datetime] = None

    @field_validator("created")
    @classmethod
    def validate_created(cls, v):
        return as_utc(v) if v is not None else v


class PostUpdate(BaseModel):
    """Body of PUT /posts/{id}; every field may be left out, but not sent as null"""
    id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[AuthorInput] = None

    @field_validator("title", "content", "author")
    @classmethod
    def validate_not_null(cls, v):
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Fields to apply, without the id and without absent fields"""
        changes: Dict[str, Any] = {}
        if self.title is not None:
            changes["title"] = self.title
        if self.content is not None:
            changes["content"] = self.content
        if self.author is not None:
            changes["author"] = self.author.to_entity()
        return changes


class PostResponse(BaseModel):
    """Post as returned to clients; author is flattened to a display name"""
    id: str
    title: str
    content: str
    author: str
    created: datetime

    @classmethod
    def from_entity(cls, post: BlogPost) -> "PostResponse":
        return cls(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author=post.author_name,
            created=post.created
        )
