"""Pytest configuration and fixtures."""

import random
from typing import AsyncGenerator, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from url_expander.common.logging_config import setup_logging
from url_expander.config import Config
from url_expander.database.cache import RedisCache
from url_expander.database.memory import InMemoryLinkStore
from url_expander.errors import StoreUnavailable
from url_expander.resolver import RedirectResolver
from url_expander.service import ExpandService
from url_expander.tokens import TokenGenerator
from url_expander.web_app import create_app

BASE_URL = "http://testserver"


class ScriptedTokenGenerator:
    """Token generator that hands out a fixed sequence of tokens."""

    def __init__(self, tokens: List[str]):
        self.tokens = list(tokens)
        self.calls: List[int] = []

    def generate(self, length: int) -> str:
        self.calls.append(length)
        return self.tokens.pop(0)


class UnavailableStore(InMemoryLinkStore):
    """Store whose backend is down."""

    async def find_by_original(self, original_url):
        raise StoreUnavailable("connection refused")

    async def upsert(self, original_url, expanded_url, description):
        raise StoreUnavailable("connection refused")

    async def health_check(self):
        return False


class FakeRedisClient:
    """Dict-backed stand-in for the redis.asyncio client."""

    def __init__(self):
        self.data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self.data[key] = value
        return True

    async def delete(self, key: str) -> int:
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        pass


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger) -> AsyncGenerator[InMemoryLinkStore, None]:
    """Create in-memory link store."""
    store = InMemoryLinkStore(logger=logger)
    yield store
    await store.close()


@pytest.fixture
def token_generator():
    """Create seeded token generator."""
    return TokenGenerator(rng=random.Random(1234))


@pytest.fixture
def cache(logger):
    """Create Redis cache wired to an in-process fake client."""
    cache = RedisCache(redis_url="redis://fake:6379/0", ttl_seconds=60, logger=logger)
    cache.client = FakeRedisClient()
    return cache


@pytest.fixture
def service(store, token_generator, logger) -> ExpandService:
    """Create expand service."""
    return ExpandService(
        store=store,
        base_url=BASE_URL,
        token_generator=token_generator,
        logger=logger,
    )


@pytest.fixture
def resolver(store, logger) -> RedirectResolver:
    """Create redirect resolver."""
    return RedirectResolver(store=store, base_url=BASE_URL, logger=logger)


@pytest.fixture
def config():
    """Create test configuration (ignores any .env file)."""
    return Config(_env_file=None, base_url=BASE_URL, database_url=None, redis_url=None)


@pytest.fixture
def app(store, service, resolver, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        cache_instance=None,
        service_instance=service,
        resolver_instance=resolver,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/article",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
