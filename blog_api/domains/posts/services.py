import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.repositories.post_repository import BlogPostRepository, parse_post_id
from blog_api.domains.posts.entities import BlogPost
from blog_api.domains.posts.exceptions import PostNotFoundError, PostValidationError
from blog_api.domains.posts.schemas import PostCreate, PostUpdate

logger = logging.getLogger(__name__)


class PostService:
    """Blog post use cases"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.post_repository = BlogPostRepository(session)

    async def list_posts(self) -> List[BlogPost]:
        return await self.post_repository.get_all()

    async def get_post(self, post_id: str) -> BlogPost:
        post = await self.post_repository.get_by_id(post_id)
        if post is None:
            logger.warning(f"Post {post_id} not found")
            raise PostNotFoundError(post_id)
        return post

    async def create_post(self, post_data: PostCreate) -> BlogPost:
        post = BlogPost.create_post(
            title=post_data.title,
            content=post_data.content,
            author=post_data.author.to_entity(),
            created=post_data.created
        )
        return await self.post_repository.create(post)

    async def update_post(self, post_id: str, update_data: PostUpdate) -> None:
        """Apply the fields present in the request to an existing post"""
        if update_data.id is not None and parse_post_id(update_data.id) != parse_post_id(post_id):
            raise PostValidationError(
                f"Request path id ({post_id}) and request body id ({update_data.id}) must match",
                fields=("id",)
            )

        try:
            await self.post_repository.update_by_id(post_id, update_data.changes())
        except PostNotFoundError:
            logger.warning(f"Update of unknown post {post_id}")
            raise

    async def delete_post(self, post_id: str) -> None:
        """Delete a post; an unknown id is reported as not found"""
        if not await self.post_repository.delete_by_id(post_id):
            logger.warning(f"Delete of unknown post {post_id}")
            raise PostNotFoundError(post_id)
