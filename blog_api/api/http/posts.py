from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.db import get_db
from blog_api.domains.posts.schemas import PostCreate, PostResponse, PostUpdate
from blog_api.domains.posts.services import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=List[PostResponse])
async def list_posts(db: AsyncSession = Depends(get_db)):
    """All blog posts"""
    posts = await PostService(db).list_posts()
    return [PostResponse.from_entity(post) for post in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: AsyncSession = Depends(get_db)):
    """A single blog post"""
    post = await PostService(db).get_post(post_id)
    return PostResponse.from_entity(post)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(post_data: PostCreate, db: AsyncSession = Depends(get_db)):
    """Create a blog post"""
    post = await PostService(db).create_post(post_data)
    return PostResponse.from_entity(post)


@router.put("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_post(post_id: str, update_data: PostUpdate, db: AsyncSession = Depends(get_db)):
    """Update the fields sent over, leave the rest alone"""
    await PostService(db).update_post(post_id, update_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_post(post_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a blog post"""
    await PostService(db).delete_post(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
