"""Initial schema: users, training_sessions, training_session_participants, personal_trainings.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("USER", "TRAINER", "ADMIN", name="userrole")
training_status = sa.Enum("PENDING", "CONFIRMED", "CANCELLED", "REJECTED", name="trainingstatus")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("role", user_role, nullable=False, server_default="USER"),
        sa.Column("specialization", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("price_per_session", sa.Float(), nullable=True),
        sa.Column("hashed_password", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)

    op.create_table(
        "training_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("trainer_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(), nullable=False),
        sa.Column("end_time", sa.String(), nullable=False),
        sa.Column("max_participants", sa.Integer(), nullable=False),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default="false"),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_training_sessions_trainer_id"), "training_sessions", ["trainer_id"], unique=False)
    op.create_index(op.f("ix_training_sessions_date"), "training_sessions", ["date"], unique=False)

    op.create_table(
        "training_session_participants",
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["session_id"], ["training_sessions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("session_id", "user_id"),
    )

    op.create_table(
        "personal_trainings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("trainer_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(), nullable=False),
        sa.Column("status", training_status, nullable=False, server_default="PENDING"),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_personal_trainings_trainer_id"), "personal_trainings", ["trainer_id"], unique=False)
    op.create_index(op.f("ix_personal_trainings_client_id"), "personal_trainings", ["client_id"], unique=False)
    op.create_index(op.f("ix_personal_trainings_date"), "personal_trainings", ["date"], unique=False)
    op.create_index(op.f("ix_personal_trainings_status"), "personal_trainings", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_personal_trainings_status"), table_name="personal_trainings")
    op.drop_index(op.f("ix_personal_trainings_date"), table_name="personal_trainings")
    op.drop_index(op.f("ix_personal_trainings_client_id"), table_name="personal_trainings")
    op.drop_index(op.f("ix_personal_trainings_trainer_id"), table_name="personal_trainings")
    op.drop_table("personal_trainings")
    op.drop_table("training_session_participants")
    op.drop_index(op.f("ix_training_sessions_date"), table_name="training_sessions")
    op.drop_index(op.f("ix_training_sessions_trainer_id"), table_name="training_sessions")
    op.drop_table("training_sessions")
    op.drop_index(op.f("ix_users_role"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
    training_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
