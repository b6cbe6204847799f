import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models.post import BlogPost as BlogPostModel
from blog_api.domains.posts.entities import Author, BlogPost, as_utc
from blog_api.domains.posts.exceptions import PostNotFoundError, PostValidationError

logger = logging.getLogger(__name__)

PostId = Union[uuid.UUID, str]

UPDATABLE_FIELDS = ("title", "content", "author")


def parse_post_id(post_id: PostId) -> Optional[uuid.UUID]:
    """Normalize an id; malformed ids match nothing"""
    if isinstance(post_id, uuid.UUID):
        return post_id
    try:
        return uuid.UUID(str(post_id))
    except ValueError:
        return None


class BlogPostRepository:
    """Store for blog post documents"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: BlogPost) -> BlogPost:
        """Insert a new post; id and created are filled in when absent"""
        self._check_required(post)

        db_post = BlogPostModel(
            id=post.id or uuid.uuid4(),
            title=post.title,
            content=post.content,
            author=post.author.to_document(),
            created=as_utc(post.created or datetime.now(timezone.utc))
        )

        self.session.add(db_post)
        await self._commit()
        await self.session.refresh(db_post)
        logger.info(f"Created post {db_post.id}")
        return self._to_domain(db_post)

    async def get_all(self) -> List[BlogPost]:
        """All posts, newest first"""
        result = await self.session.execute(
            select(BlogPostModel).order_by(BlogPostModel.created.desc())
        )
        return [self._to_domain(db_post) for db_post in result.scalars().all()]

    async def get_by_id(self, post_id: PostId) -> Optional[BlogPost]:
        """Post by id, or None"""
        post_uuid = parse_post_id(post_id)
        if post_uuid is None:
            return None

        result = await self.session.execute(
            select(BlogPostModel).where(BlogPostModel.id == post_uuid)
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    async def update_by_id(self, post_id: PostId, changes: Dict[str, Any]) -> None:
        """Replace only the given fields of an existing post"""
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise PostValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                fields=tuple(sorted(unknown))
            )

        post_uuid = parse_post_id(post_id)
        if post_uuid is None:
            raise PostNotFoundError(post_id)

        values = dict(changes)
        if "author" in values:
            author = values["author"]
            if not isinstance(author, Author) or not author.first_name or not author.last_name:
                raise PostValidationError("Author needs firstName and lastName", fields=("author",))
            values["author"] = author.to_document()

        if not values:
            if not await self._exists(post_uuid):
                raise PostNotFoundError(post_id)
            return

        result = await self.session.execute(
            update(BlogPostModel).where(BlogPostModel.id == post_uuid).values(**values)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise PostNotFoundError(post_id)

        await self._commit()
        logger.info(f"Updated post {post_uuid}: {', '.join(sorted(values))}")

    async def delete_by_id(self, post_id: PostId) -> bool:
        """Remove a post; a missing id is not an error, the result just says so"""
        post_uuid = parse_post_id(post_id)
        if post_uuid is None:
            return False

        result = await self.session.execute(
            delete(BlogPostModel).where(BlogPostModel.id == post_uuid)
        )
        await self._commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted post {post_uuid}")
        return deleted

    async def delete_all(self) -> int:
        """Empty the collection"""
        result = await self.session.execute(delete(BlogPostModel))
        await self._commit()
        return result.rowcount

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(BlogPostModel.id)))
        return result.scalar()

    async def _exists(self, post_uuid: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(func.count(BlogPostModel.id)).where(BlogPostModel.id == post_uuid)
        )
        return result.scalar() > 0

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Post store write failed, rolled back")
            raise

    @staticmethod
    def _check_required(post: BlogPost) -> None:
        missing = [name for name in ("title", "content") if getattr(post, name, None) is None]

        author = getattr(post, "author", None)
        if author is None or not author.first_name or not author.last_name:
            missing.append("author")

        if missing:
            raise PostValidationError(
                f"Missing required fields: {', '.join(missing)}",
                fields=tuple(missing)
            )

    @staticmethod
    def _to_domain(db_post: BlogPostModel) -> BlogPost:
        return BlogPost(
            id=db_post.id,
            title=db_post.title,
            content=db_post.content,
            author=Author.from_document(db_post.author or {}),
            # SQLite drops the offset; stored values are always UTC
            created=as_utc(db_post.created)
        )
