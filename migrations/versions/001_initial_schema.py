"""Initial schema: profiles, providers and the two request tables.

Revision ID: 001
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── profiles ──────────────────────────────────────────────────────
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("first_name", sa.String(120), nullable=True),
        sa.Column("last_name", sa.String(120), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── hospital_profiles ─────────────────────────────────────────────
    op.create_table(
        "hospital_profiles",
        sa.Column(
            "id", sa.String(36), sa.ForeignKey("profiles.id"), primary_key=True
        ),
        sa.Column("hospital_name", sa.String(255), nullable=False),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column(
            "is_available", sa.Boolean, nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_hospitals_available", "hospital_profiles", ["is_available"]
    )

    # ── responder_details ─────────────────────────────────────────────
    op.create_table(
        "responder_details",
        sa.Column(
            "id", sa.String(36), sa.ForeignKey("profiles.id"), primary_key=True
        ),
        sa.Column("current_location", sa.Text, nullable=True),
        sa.Column(
            "is_verified", sa.Boolean, nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "is_on_duty", sa.Boolean, nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_responders_duty", "responder_details", ["is_verified", "is_on_duty"]
    )

    # ── sos_requests ──────────────────────────────────────────────────
    op.create_table(
        "sos_requests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False
        ),
        sa.Column("user_name", sa.String(255), nullable=False),
        sa.Column("user_phone", sa.String(32), nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("emergency_type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("user_address", sa.String(255), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="pending"
        ),
        sa.Column(
            "assigned_hospital_id",
            sa.String(36),
            sa.ForeignKey("hospital_profiles.id"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_sos_hospital_status",
        "sos_requests",
        ["assigned_hospital_id", "status"],
    )
    op.create_index("idx_sos_user", "sos_requests", ["user_id"])

    # ── emergency_alerts ──────────────────────────────────────────────
    op.create_table(
        "emergency_alerts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False
        ),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("location_lat", sa.Float, nullable=False),
        sa.Column("location_lng", sa.Float, nullable=False),
        sa.Column("location_description", sa.String(255), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="active"
        ),
        sa.Column(
            "responder_id",
            sa.String(36),
            sa.ForeignKey("responder_details.id"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_alerts_responder_status",
        "emergency_alerts",
        ["responder_id", "status"],
    )
    op.create_index("idx_alerts_user", "emergency_alerts", ["user_id"])


def downgrade() -> None:
    op.drop_table("emergency_alerts")
    op.drop_table("sos_requests")
    op.drop_table("responder_details")
    op.drop_table("hospital_profiles")
    op.drop_table("profiles")
