"""Test configuration and fixtures for the blog API.

Every test gets:
- a fresh SQLite database file under tmp_path
- 10 seeded posts
- an httpx client talking to the app in-process
The posts table is emptied after each test.
"""
import random
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from blog_api.core.config import Settings
from blog_api.core.db import Database
from blog_api.db.repositories.post_repository import BlogPostRepository
from blog_api.domains.posts.entities import Author, BlogPost
from blog_api.main import create_app

SEED_COUNT = 10

TITLES = ["Cloud Atlas", "The Matrix", "Interstellar", "Dr. Strange", "La La Land"]
CONTENTS = ["The movie is good.", "The movie is okay.", "The movie is bad."]
FIRST_NAMES = ["Peter", "Waleed", "Thomas", "Kyle", "Alan", "Quang"]
LAST_NAMES = ["Yu", "Hamied", "Sinh", "Zinn", "Andersen", "Nguyen"]


def generate_post_data() -> Dict:
    """Wire-shaped body for POST /posts"""
    return {
        "title": f"{random.choice(TITLES)} {uuid.uuid4().hex[:6]}",
        "content": random.choice(CONTENTS),
        "author": {
            "firstName": random.choice(FIRST_NAMES),
            "lastName": random.choice(LAST_NAMES)
        }
    }


def generate_post() -> BlogPost:
    data = generate_post_data()
    return BlogPost.create_post(
        title=data["title"],
        content=data["content"],
        author=Author(data["author"]["firstName"], data["author"]["lastName"]),
        created=datetime.now(timezone.utc) - timedelta(days=random.randint(1, 365))
    )


class StoreProbe:
    """Direct store access for assertions; one short session per call"""

    def __init__(self, database: Database):
        self.database = database

    async def get_by_id(self, post_id) -> Optional[BlogPost]:
        async with self.database.session() as session:
            return await BlogPostRepository(session).get_by_id(post_id)

    async def get_all(self) -> List[BlogPost]:
        async with self.database.session() as session:
            return await BlogPostRepository(session).get_all()

    async def first(self) -> BlogPost:
        posts = await self.get_all()
        if not posts:
            pytest.fail("seeding did not work")
        return posts[0]

    async def count(self) -> int:
        async with self.database.session() as session:
            return await BlogPostRepository(session).count()

    async def create(self, post: BlogPost) -> BlogPost:
        async with self.database.session() as session:
            return await BlogPostRepository(session).create(post)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database"""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test-blog.db'}",
        log_level="DEBUG"
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Connected database; emptied and closed after the test"""
    database = Database(settings.database_url)
    await database.connect()

    yield database

    async with database.session() as session:
        await BlogPostRepository(session).delete_all()
    await database.disconnect()


@pytest_asyncio.fixture
async def store(database: Database) -> StoreProbe:
    return StoreProbe(database)


@pytest_asyncio.fixture
async def seeded_posts(store: StoreProbe) -> List[BlogPost]:
    """Seed the collection with generated posts"""
    return [await store.create(generate_post()) for _ in range(SEED_COUNT)]


@pytest_asyncio.fixture
async def client(settings: Settings, database: Database) -> AsyncGenerator[httpx.AsyncClient, None]:
    """In-process HTTP client sharing the test database handle"""
    app = create_app(settings, database)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
