"""Add quiz_attempts, attempt_answers, course_standings and certificates tables.

Course content and users are owned by the catalog service; these tables
only reference them.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ACTIVE_ATTEMPT_CONDITION = "state IN ('started', 'in_progress')"
CURRENT_CERTIFICATE_CONDITION = "is_current"


def upgrade() -> None:
    """Create assessment, progress and certification tables."""
    op.create_table(
        "quiz_attempts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("learner_id", sa.Integer(), nullable=False),
        sa.Column("quiz_id", sa.Integer(), nullable=False),
        sa.Column("state", sa.String(20), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scored_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("abandoned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("correct_count", sa.Integer(), nullable=True),
        sa.Column("total_questions", sa.Integer(), nullable=True),
        sa.Column("percent_correct", sa.Integer(), nullable=True),
        sa.Column("min_passing_score", sa.Integer(), nullable=True),
        sa.Column("passed", sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(["learner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_quiz_attempts_id"), "quiz_attempts", ["id"], unique=False)
    op.create_index(op.f("ix_quiz_attempts_state"), "quiz_attempts", ["state"], unique=False)
    op.create_index(
        "ix_quiz_attempts_learner_quiz", "quiz_attempts", ["learner_id", "quiz_id"], unique=False
    )
    op.create_index(
        "uq_quiz_attempts_active_learner_quiz",
        "quiz_attempts",
        ["learner_id", "quiz_id"],
        unique=True,
        postgresql_where=sa.text(ACTIVE_ATTEMPT_CONDITION),
        sqlite_where=sa.text(ACTIVE_ATTEMPT_CONDITION),
    )

    op.create_table(
        "attempt_answers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("attempt_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("selected_option_ids", sa.JSON(), nullable=False),
        sa.Column("correct_option_ids", sa.JSON(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("answered_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["attempt_id"], ["quiz_attempts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "attempt_id", "question_id", name="uq_attempt_answers_attempt_question"
        ),
    )
    op.create_index(op.f("ix_attempt_answers_id"), "attempt_answers", ["id"], unique=False)
    op.create_index(
        op.f("ix_attempt_answers_attempt_id"), "attempt_answers", ["attempt_id"], unique=False
    )

    op.create_table(
        "course_standings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("learner_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("quiz_standings", sa.JSON(), nullable=False),
        sa.Column("completion_percent", sa.Integer(), nullable=False),
        sa.Column("overall_score", sa.Integer(), nullable=False),
        sa.Column("proficiency_level", sa.String(50), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("computed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["learner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "learner_id", "course_id", name="uq_course_standings_learner_course"
        ),
    )
    op.create_index(op.f("ix_course_standings_id"), "course_standings", ["id"], unique=False)
    op.create_index(
        op.f("ix_course_standings_learner_id"), "course_standings", ["learner_id"], unique=False
    )
    op.create_index(
        op.f("ix_course_standings_course_id"), "course_standings", ["course_id"], unique=False
    )

    op.create_table(
        "certificates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("certificate_id", sa.String(40), nullable=False),
        sa.Column("learner_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("learner_name", sa.String(200), nullable=False),
        sa.Column("learner_email", sa.String(320), nullable=False),
        sa.Column("course_title", sa.String(300), nullable=False),
        sa.Column("language_tested", sa.String(100), nullable=False),
        sa.Column("proficiency_level", sa.String(50), nullable=False),
        sa.Column("final_score", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("certificate_url", sa.String(1000), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("is_current", sa.Boolean(), nullable=False),
        sa.Column("supersedes_id", sa.Integer(), nullable=True),
        sa.Column("superseded_by", sa.String(40), nullable=True),
        sa.Column("superseded_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["learner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["supersedes_id"], ["certificates.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("certificate_id"),
        sa.UniqueConstraint("supersedes_id"),
    )
    op.create_index(op.f("ix_certificates_id"), "certificates", ["id"], unique=False)
    op.create_index(
        "ix_certificates_learner_course", "certificates", ["learner_id", "course_id"], unique=False
    )
    op.create_index(
        "uq_certificates_current_learner_course",
        "certificates",
        ["learner_id", "course_id"],
        unique=True,
        postgresql_where=sa.text(CURRENT_CERTIFICATE_CONDITION),
        sqlite_where=sa.text(CURRENT_CERTIFICATE_CONDITION),
    )


def downgrade() -> None:
    """Drop assessment, progress and certification tables."""
    op.drop_index("uq_certificates_current_learner_course", table_name="certificates")
    op.drop_index("ix_certificates_learner_course", table_name="certificates")
    op.drop_index(op.f("ix_certificates_id"), table_name="certificates")
    op.drop_table("certificates")

    op.drop_index(op.f("ix_course_standings_course_id"), table_name="course_standings")
    op.drop_index(op.f("ix_course_standings_learner_id"), table_name="course_standings")
    op.drop_index(op.f("ix_course_standings_id"), table_name="course_standings")
    op.drop_table("course_standings")

    op.drop_index(op.f("ix_attempt_answers_attempt_id"), table_name="attempt_answers")
    op.drop_index(op.f("ix_attempt_answers_id"), table_name="attempt_answers")
    op.drop_table("attempt_answers")

    op.drop_index("uq_quiz_attempts_active_learner_quiz", table_name="quiz_attempts")
    op.drop_index("ix_quiz_attempts_learner_quiz", table_name="quiz_attempts")
    op.drop_index(op.f("ix_quiz_attempts_state"), table_name="quiz_attempts")
    op.drop_index(op.f("ix_quiz_attempts_id"), table_name="quiz_attempts")
    op.drop_table("quiz_attempts")
