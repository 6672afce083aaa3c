from collections.abc import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings


def to_async_database_url(database_url: str) -> str:
    """Use asyncpg for async FastAPI. asyncpg does not accept psycopg params like sslmode/channel_binding."""
    parsed = urlparse(database_url)
    scheme = "postgresql+asyncpg" if parsed.scheme in ("postgresql", "postgres") else parsed.scheme
    query = parse_qs(parsed.query, keep_blank_values=True)
    ssl_required = query.pop("sslmode", ["disable"])[0] in ("require", "verify-ca", "verify-full")
    query.pop("channel_binding", None)
    new_query = urlencode(query, doseq=True)
    url = urlunparse((scheme, parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment))
    if ssl_required:
        return url + ("&" if new_query else "?") + "ssl=require"
    return url


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        to_async_database_url(settings.database_url),
        echo=settings.env == "development",
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session per request, taken from the factory the app owns."""
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
