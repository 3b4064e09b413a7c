"""Seed the default promotional tasks.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from rewards.services.seeding import DEFAULT_TASKS

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

tasks = sa.table(
    "tasks",
    sa.column("title", sa.String),
    sa.column("description", sa.Text),
    sa.column("points", sa.Integer),
    sa.column("task_type", sa.String),
    sa.column("is_active", sa.Boolean),
)


def upgrade() -> None:
    op.bulk_insert(tasks, [{**task, "is_active": True} for task in DEFAULT_TASKS])


def downgrade() -> None:
    titles = [task["title"] for task in DEFAULT_TASKS]
    op.execute(tasks.delete().where(tasks.c.title.in_(titles)))
