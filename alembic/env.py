from logging.config import fileConfig

from alembic import context

from src.db.config import get_db_settings
from src.db.database import Base, get_sync_engine

# Models must be imported so their tables are registered on Base.metadata
from src.db.conversations.model import Conversation  # noqa: F401
from src.db.knowledge_sources.model import KnowledgeSource  # noqa: F401

config = context.config
# ConfigParser interpolates %, so percent-encoded passwords are escaped
config.set_main_option(
    "sqlalchemy.url", get_db_settings().get_sync_url().replace("%", "%%")
)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL without a connection)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    with get_sync_engine().connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
