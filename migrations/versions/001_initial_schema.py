"""Initial schema: drivers, locations, stops and rides.

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
    # ── drivers ───────────────────────────────────────────────────────
    op.create_table(
        "drivers",
        sa.Column("pseudonym", sa.String(64), primary_key=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── locations ─────────────────────────────────────────────────────
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column(
            "driver_pseudonym",
            sa.String(64),
            sa.ForeignKey("drivers.pseudonym"),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "driver_pseudonym", "name", name="uq_locations_driver_name"
        ),
    )
    op.create_index("idx_locations_driver", "locations", ["driver_pseudonym"])

    # ── stops ─────────────────────────────────────────────────────────
    op.create_table(
        "stops",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("moment", sa.DateTime(timezone=True), nullable=False),
        sa.Column("odometer_value", sa.Integer, nullable=False),
        sa.Column(
            "location_id",
            sa.Integer,
            sa.ForeignKey("locations.id"),
            nullable=False,
        ),
    )
    op.create_index("idx_stops_location", "stops", ["location_id"])

    # ── rides ─────────────────────────────────────────────────────────
    op.create_table(
        "rides",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "departure_id", sa.Integer, sa.ForeignKey("stops.id"), nullable=False
        ),
        sa.Column(
            "arrival_id", sa.Integer, sa.ForeignKey("stops.id"), nullable=True
        ),
        sa.Column(
            "driver_pseudonym",
            sa.String(64),
            sa.ForeignKey("drivers.pseudonym"),
            nullable=False,
        ),
        sa.Column(
            "traffic_condition",
            sa.Enum("CALM", "NORMAL", "HEAVY", "JAMMED", name="trafficcondition"),
            default="NORMAL",
            nullable=False,
        ),
        sa.Column("comment", sa.Text, nullable=True),
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
        sa.UniqueConstraint(
            "departure_id",
            "arrival_id",
            "driver_pseudonym",
            name="uq_rides_departure_arrival_driver",
        ),
    )
    op.create_index("idx_rides_driver", "rides", ["driver_pseudonym"])


def downgrade() -> None:
    op.drop_table("rides")
    op.drop_table("stops")
    op.drop_table("locations")
    op.drop_table("drivers")
    op.execute("DROP TYPE IF EXISTS trafficcondition")
