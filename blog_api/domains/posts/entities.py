import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def as_utc(value: datetime) -> datetime:
    """Same instant in UTC; naive values are taken to be UTC already"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Author:
    """Structured post author; the stored source of truth for the display name"""

    def __init__(self, first_name: str, last_name: str):
        self.first_name = first_name
        self.last_name = last_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_document(self) -> Dict[str, str]:
        return {"firstName": self.first_name, "lastName": self.last_name}

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Author":
        return cls(
            first_name=document.get("firstName", ""),
            last_name=document.get("lastName", "")
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Author):
            return False
        return (self.first_name, self.last_name) == (other.first_name, other.last_name)

    def __repr__(self) -> str:
        return f"Author(first_name={self.first_name}, last_name={self.last_name})"


class BlogPost:
    """Blog post entity"""

    def __init__(
        self,
        id: uuid.UUID,
        title: str,
        content: str,
        author: Author,
        created: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.content = content
        self.author = author
        self.created = as_utc(created) if created else datetime.now(timezone.utc)

    @property
    def author_name(self) -> str:
        """Display name, always derived from the structured author"""
        return self.author.full_name

    def apply_update(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        author: Optional[Author] = None
    ) -> None:
        """Replace only the fields that were given"""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if author is not None:
            self.author = author

    @classmethod
    def create_post(
        cls,
        title: str,
        content: str,
        author: Author,
        created: Optional[datetime] = None
    ) -> "BlogPost":
        return cls(
            id=uuid.uuid4(),
            title=title,
            content=content,
            author=author,
            created=created
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, BlogPost):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"BlogPost(id={self.id}, title={self.title}, author={self.author_name})"
