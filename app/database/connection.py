from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.engine.url import make_url
from app.config import settings


def is_postgres_url(url) -> bool:
    return url.drivername.startswith("postgres")


def get_database_url():
    """Parse database URL and convert Postgres URLs to asyncpg-compatible format"""
    original_url = make_url(settings.DATABASE_URL)

    # Non-Postgres async URLs (e.g. sqlite+aiosqlite for local runs) are used as-is
    if not is_postgres_url(original_url):
        return settings.DATABASE_URL

    port = original_url.port or 5432

    # Build the connection string manually to preserve special characters in password
    database_url = (
        f"postgresql+asyncpg://{original_url.username}:{original_url.password}"
        f"@{original_url.host}:{port}/{original_url.database}"
    )

    # Add query parameters (excluding sslmode which we handle in connect_args)
    query_params = {}
    if original_url.query:
        for key, value in original_url.query.items():
            if key not in ['sslmode', 'channel_binding']:
                query_params[key] = value

    if query_params:
        query_string = '&'.join([f"{k}={v}" for k, v in query_params.items()])
        database_url += f"?{query_string}"

    return database_url


def get_connect_args():
    """Get connection arguments, including the per-statement timeout"""
    url = make_url(settings.DATABASE_URL)
    connect_args = {}

    if is_postgres_url(url):
        connect_args['command_timeout'] = settings.DB_COMMAND_TIMEOUT_SECONDS
        if url.query and url.query.get('sslmode') == 'require':
            connect_args['ssl'] = 'require'
    elif url.drivername.startswith("sqlite"):
        # sqlite3 busy timeout
        connect_args['timeout'] = settings.DB_COMMAND_TIMEOUT_SECONDS

    return connect_args


def get_engine_options():
    url = make_url(settings.DATABASE_URL)
    options = {
        "echo": settings.DEBUG,
        "future": True,
        "connect_args": get_connect_args(),
    }
    if is_postgres_url(url):
        options.update(
            pool_pre_ping=True,  # Verify connections before using them
            pool_recycle=3600,  # Recycle connections after 1 hour
            pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
        )
    return options


engine = create_async_engine(get_database_url(), **get_engine_options())

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)

Base = declarative_base()


async def close_db():
    """Close database connections"""
    await engine.dispose()
