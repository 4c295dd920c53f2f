# File: backend/alembic/versions/20261016_000001_add_scan_tables.py
# Version: v0.1.0
"""
Create tables: scan_runs, scan_candidates
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20261016_000001"
down_revision = None
branch_labels = None
depends_on = None

_RUN_STATUS = sa.Enum("COMPLETED", "EMPTY", name="runstatus")


def upgrade():
    op.create_table(
        "scan_runs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("mode", sa.String(16), nullable=False),
        sa.Column("motif_pattern", sa.String(32), nullable=False),
        sa.Column("step", sa.Integer(), nullable=False),
        sa.Column("sequence_len", sa.Integer(), nullable=True),
        sa.Column("source_count", sa.Integer(), nullable=False),
        sa.Column("candidate_count", sa.Integer(), nullable=False),
        sa.Column("parameters_json", sa.JSON(), nullable=False),
        sa.Column("summary_json", sa.JSON(), nullable=True),
        sa.Column("status", _RUN_STATUS, nullable=False),
        sa.Column("note", sa.String(255), nullable=True),
    )
    op.create_table(
        "scan_candidates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("run_id", sa.String(36), sa.ForeignKey("scan_runs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("source", sa.String(255), nullable=True),
        sa.Column("sequence_location", sa.Integer(), nullable=True),
        sa.Column("protospacer", sa.Text(), nullable=False),
        sa.Column("pam", sa.String(32), nullable=False),
        sa.Column("lambda_score", sa.Float(), nullable=False),
        sa.Column("factorizations_json", sa.JSON(), nullable=True),
    )
    op.create_index("ix_scan_candidates_run_id", "scan_candidates", ["run_id"])


def downgrade():
    op.drop_index("ix_scan_candidates_run_id", table_name="scan_candidates")
    op.drop_table("scan_candidates")
    op.drop_table("scan_runs")
    _RUN_STATUS.drop(op.get_bind(), checkfirst=True)
