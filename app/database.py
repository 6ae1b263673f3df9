from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.middleware import install_query_counter

# Module-level engine variables allow tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)
install_query_counter(engine)

if settings.READ_DATABASE_URL:
    read_engine = create_async_engine(
        settings.READ_DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
    )
    install_query_counter(read_engine)
else:
    read_engine = engine

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

read_session = async_sessionmaker(
    read_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_read_db():
    # The read side never writes, so there is nothing to commit.
    async with read_session() as session:
        yield session
