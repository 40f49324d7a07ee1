"""Initial database schema: accounts, sessions, analyses, medications."""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, index=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column(
            "role",
            sa.Enum("user", "admin", name="account_role", native_enum=False),
            nullable=False,
            server_default="user",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )

    op.create_table(
        "sessions",
        sa.Column("token", sa.String(length=128), primary_key=True),
        sa.Column(
            "account_id",
            sa.String(length=36),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("expires_at", sa.DateTime(), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "analyses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False, index=True),
        sa.Column("image_ref", sa.String(length=1024), nullable=False),
        sa.Column("disease", sa.String(length=255), nullable=False, index=True),
        sa.Column("confidence", sa.Float, nullable=False),
        sa.Column(
            "severity",
            sa.Enum("Low", "Medium", "High", name="analysis_severity", native_enum=False),
            nullable=False,
        ),
        sa.Column("description", sa.Text),
        sa.Column("symptoms", sa.Text, nullable=False),
        sa.Column("recommendations", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, index=True),
        sa.CheckConstraint("confidence >= 0 AND confidence <= 100", name="ck_analyses_confidence_range"),
    )

    op.create_table(
        "medications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "analysis_id",
            sa.Integer,
            sa.ForeignKey("analyses.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("dosage", sa.String(length=255), nullable=False),
        sa.Column("frequency", sa.String(length=255), nullable=False),
    )


def downgrade():
    op.drop_table("medications")
    op.drop_table("analyses")
    op.drop_table("sessions")
    op.drop_table("accounts")
