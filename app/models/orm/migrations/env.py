"""env.py.

Alembic ENV module isort:skip_file
"""

# Native libraries
import sys

sys.path.extend(["./"])

######################## --- MODELS FOR MIGRATIONS --- ########################
from app.application import db

# To include a model in migrations, add a line here.
from app.models.orm.areas import Area  # noqa: F401

###############################################################################

# Third party packages
from alembic import context
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool


# App imports
from app.settings.globals import ALEMBIC_CONFIG


config = context.config
fileConfig(config.config_file_name)
target_metadata = db
database_url = ALEMBIC_CONFIG.url.__to_string__(hide_password=False)


def run_migrations_offline():
    """Emit the migrations as SQL script, without a database connection."""
    context.configure(
        url=database_url, target_metadata=target_metadata, literal_binds=True
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run the migrations against the writer database.

    Pass `-x dry-run` to roll back once all migrations ran.
    """
    connectable = engine_from_config(
        {"sqlalchemy.url": database_url},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction() as transaction:
            context.run_migrations()
            if "dry-run" in context.get_x_argument():
                print("Dry-run succeeded; now rolling back transaction")
                transaction.rollback()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
