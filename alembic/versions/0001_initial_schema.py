"""initial schema: projects, reference entities, join tables, moderation queues, documents

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


_EMPTY_ARRAY = sa.text("'[]'::jsonb")

# (table, fk column) for every project join table
_LINK_TABLES = (
    ("project_agencies", "agency_id"),
    ("project_executing_agencies", "agency_id"),
    ("project_implementing_entities", "entity_id"),
    ("project_delivery_partners", "partner_id"),
    ("project_locations", "location_id"),
    ("project_funding_sources", "funding_source_id"),
    ("project_sdgs", "sdg_id"),
)

_PENDING_ID_COLUMNS = (
    "agency_ids",
    "implementing_entity_ids",
    "executing_agency_ids",
    "delivery_partner_ids",
    "location_ids",
    "funding_source_ids",
    "sdg_ids",
)


def _ts(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))


def _project_columns() -> list:
    return [
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("status", sa.String(length=64), nullable=False),
        sa.Column("approval_fy", sa.String(length=16), nullable=False),
        sa.Column("beginning", sa.String(length=32), nullable=True),
        sa.Column("closing", sa.String(length=32), nullable=True),
        sa.Column("total_cost_usd", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("gef_grant", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("cofinancing", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("loan_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("objectives", sa.Text(), nullable=True),
        sa.Column("direct_beneficiaries", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("indirect_beneficiaries", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("beneficiary_description", sa.Text(), nullable=True),
        sa.Column("gender_inclusion", sa.Text(), nullable=True),
        sa.Column("equity_marker", sa.String(length=128), nullable=True),
        sa.Column("equity_marker_description", sa.Text(), nullable=True),
        sa.Column("assessment", sa.Text(), nullable=True),
        sa.Column("alignment_nap", sa.Text(), nullable=True),
        sa.Column("alignment_cff", sa.Text(), nullable=True),
        sa.Column("climate_relevance_score", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("climate_relevance_category", sa.String(length=128), nullable=True),
        sa.Column("climate_relevance_justification", sa.Text(), nullable=True),
        sa.Column("wash_component_description", sa.Text(), nullable=True),
        sa.Column("supporting_document", sa.String(length=512), nullable=True),
        sa.Column("sector", sa.String(length=128), nullable=True),
        sa.Column("vulnerability_type", sa.String(length=128), nullable=True),
        sa.Column("additional_location_info", sa.Text(), nullable=True),
        sa.Column("portfolio_type", sa.String(length=128), nullable=True),
        sa.Column("funding_source_name", sa.String(length=256), nullable=True),
        sa.Column("geographic_division", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
        sa.Column("districts", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
        sa.Column("type", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
        sa.Column("location_segregation", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
        sa.Column("activities", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
        sa.Column("hotspot_types", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
    ]


def _document_columns() -> list:
    return [
        sa.Column("categories", postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY),
        sa.Column("heading", sa.String(length=512), nullable=False),
        sa.Column("sub_heading", sa.String(length=512), nullable=True),
        sa.Column("agency_name", sa.String(length=256), nullable=True),
        sa.Column("programme_code", sa.String(length=128), nullable=True),
        sa.Column("document_size", sa.String(length=64), nullable=True),
        sa.Column("document_link", sa.String(length=512), nullable=True),
        sa.Column("supporting_link", sa.String(length=1024), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    ]


def upgrade():
    # projects
    op.create_table(
        "projects",
        sa.Column("project_id", sa.String(length=36), primary_key=True, nullable=False),
        *_project_columns(),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_projects_status", "projects", ["status"])

    op.create_table(
        "wash_components",
        sa.Column("project_id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("presence", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("wash_percentage", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("description", sa.Text(), nullable=True),
    )

    # name-keyed reference entities
    for table, pk in (
        ("agencies", "agency_id"),
        ("executing_agencies", "agency_id"),
        ("implementing_entities", "entity_id"),
        ("delivery_partners", "partner_id"),
    ):
        op.create_table(
            table,
            sa.Column(pk, sa.String(length=36), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=256), nullable=False),
            _ts("created_at"),
        )
        op.create_index(f"ix_{table}_name", table, ["name"])

    op.create_table(
        "locations",
        sa.Column("location_id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("region", sa.String(length=128), nullable=True),
        _ts("created_at"),
    )
    op.create_index("ix_locations_name", "locations", ["name"])

    op.create_table(
        "funding_sources",
        sa.Column("funding_source_id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("dev_partner", sa.String(length=256), nullable=True),
        sa.Column("type", sa.String(length=128), nullable=True),
        sa.Column("non_grant_instrument", sa.String(length=256), nullable=True),
        _ts("created_at"),
    )
    op.create_index("ix_funding_sources_name", "funding_sources", ["name"])

    op.create_table(
        "sdg_alignments",
        sa.Column("sdg_id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("sdg_number", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.UniqueConstraint("sdg_number", name="uq_sdg_alignments_number"),
    )

    # join tables
    for table, fk in _LINK_TABLES:
        op.create_table(
            table,
            sa.Column("project_id", sa.String(length=36), primary_key=True, nullable=False),
            sa.Column(fk, sa.String(length=36), primary_key=True, nullable=False),
        )
    op.create_index("ix_project_agencies_agency", "project_agencies", ["agency_id"])
    op.create_index("ix_project_executing_agencies_agency", "project_executing_agencies", ["agency_id"])
    op.create_index("ix_project_implementing_entities_entity", "project_implementing_entities", ["entity_id"])
    op.create_index("ix_project_delivery_partners_partner", "project_delivery_partners", ["partner_id"])
    op.create_index("ix_project_locations_location", "project_locations", ["location_id"])
    op.create_index("ix_project_funding_sources_source", "project_funding_sources", ["funding_source_id"])
    op.create_index("ix_project_sdgs_sdg", "project_sdgs", ["sdg_id"])

    # moderation queue
    op.create_table(
        "pending_projects",
        sa.Column("pending_id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("submitter_email", sa.String(length=320), nullable=True),
        *_project_columns(),
        *[
            sa.Column(c, postgresql.JSONB, nullable=False, server_default=_EMPTY_ARRAY)
            for c in _PENDING_ID_COLUMNS
        ],
        sa.Column("wash_component", postgresql.JSONB, nullable=True),
        _ts("submitted_at"),
    )

    # documents
    op.create_table(
        "document_repository",
        sa.Column("repo_id", sa.String(length=36), primary_key=True, nullable=False),
        *_document_columns(),
    )
    op.create_table(
        "pending_document_repository",
        sa.Column("repo_id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("submitter_email", sa.String(length=320), nullable=True),
        *_document_columns(),
    )

    # feedback
    op.create_table(
        "feedbacks",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("issue_type", sa.String(length=128), nullable=False),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default=sa.text("'Medium'")),
        sa.Column("issue_title", sa.String(length=512), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("user_name", sa.String(length=256), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_feedbacks_created_at", "feedbacks", ["created_at"])

    # admin accounts
    op.create_table(
        "admin_users",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default=sa.text("'ADMIN'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _ts("created_at"),
        sa.UniqueConstraint("email", name="uq_admin_users_email"),
    )


def downgrade():
    op.drop_table("admin_users")
    op.drop_index("ix_feedbacks_created_at", table_name="feedbacks")
    op.drop_table("feedbacks")
    op.drop_table("pending_document_repository")
    op.drop_table("document_repository")
    op.drop_table("pending_projects")
    for table, _ in reversed(_LINK_TABLES):
        op.drop_table(table)
    op.drop_table("sdg_alignments")
    op.drop_index("ix_funding_sources_name", table_name="funding_sources")
    op.drop_table("funding_sources")
    op.drop_index("ix_locations_name", table_name="locations")
    op.drop_table("locations")
    for table in ("delivery_partners", "implementing_entities", "executing_agencies", "agencies"):
        op.drop_index(f"ix_{table}_name", table_name=table)
        op.drop_table(table)
    op.drop_table("wash_components")
    op.drop_index("ix_projects_status", table_name="projects")
    op.drop_table("projects")
