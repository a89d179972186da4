from logging import getLogger
from logging.config import fileConfig
from typing import Sequence, Union

from alembic import context
from alembic.operations import ops
from alembic.autogenerate import rewriter
from alembic.script import ScriptDirectory
from sqlalchemy import engine_from_config, pool, MetaData

logger = getLogger(__name__)
config = context.config

writer_rename_migration = rewriter.Rewriter()


@writer_rename_migration.rewrites(ops.MigrationScript)
def rename_migration_script(migration_context, revision, migration_script):
    # extract current head revision
    head_revision = ScriptDirectory.from_config(migration_context.config).get_current_head()
    if head_revision is None:
        # edge case with first migration
        new_rev_id = 1
    else:
        # default branch with incrementation
        last_rev_id = int(head_revision.lstrip('0'))
        new_rev_id = last_rev_id + 1
    # fill zeros up to 4 digits: 1 -> 0001
    migration_script.rev_id = '{0:04}'.format(new_rev_id)
    return migration_script


def run_migrations_offline(target_metadata):
    """Run migrations in 'offline' mode.

    Configures the context with just a URL, no DBAPI needed.
    Calls to context.execute() emit the given string to the script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        process_revision_directives=writer_rename_migration,
        literal_binds=True,
        render_as_batch=url.startswith('sqlite'),
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(target_metadata):
    """Run migrations in 'online' mode.

    Creates an Engine and associates a connection with the context.
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            process_revision_directives=writer_rename_migration,
            # SQLite can't ALTER most things in place
            render_as_batch=connection.dialect.name == 'sqlite',
        )

        with context.begin_transaction():
            context.run_migrations()


def run_alembic(sqlalchemy_url: str, target_metadata: Union[MetaData, Sequence[MetaData]]):
    # Interpret the config file for Python logging.
    if config.config_file_name is not None:
        fileConfig(config.config_file_name, disable_existing_loggers=False)

    config.set_main_option('sqlalchemy.url', sqlalchemy_url)

    if context.is_offline_mode():
        run_migrations_offline(target_metadata)
    else:
        run_migrations_online(target_metadata)


from app.models import base
from app.database import get_sync_url, ensure_sqlite_dir
from settings.config import AppConfig

_url = get_sync_url(AppConfig.TEST_DB_URL or AppConfig.DB_URL)
ensure_sqlite_dir(_url)
run_alembic(sqlalchemy_url=_url, target_metadata=base.meta)
