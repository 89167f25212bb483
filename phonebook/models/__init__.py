"""ORM Models — SQLAlchemy declarative models.

Imported here so Base.metadata is populated before create_all / alembic autogenerate.
"""

from phonebook.models.person import Person  # noqa: F401
