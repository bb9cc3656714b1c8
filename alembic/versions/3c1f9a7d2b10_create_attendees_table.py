from alembic import op
import sqlalchemy as sa

revision = '3c1f9a7d2b10'
down_revision = None
branch_labels = None
depends_on = None

attendeerole_enum = sa.Enum('attendee', 'staff', name='attendeerole')


def upgrade():
    op.create_table(
        'attendees',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', attendeerole_enum, nullable=False),
        sa.Column('qr_token', sa.String(length=128), nullable=False),
        sa.Column('checked_in', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "(checked_in = true AND checked_in_at IS NOT NULL) OR "
            "(checked_in = false AND checked_in_at IS NULL)",
            name='ck_attendees_checked_in_at',
        ),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_attendees_id', 'attendees', ['id'])
    op.create_index('ix_attendees_email', 'attendees', ['email'], unique=True)
    op.create_index('ix_attendees_qr_token', 'attendees', ['qr_token'], unique=True)


def downgrade():
    op.drop_index('ix_attendees_qr_token', table_name='attendees')
    op.drop_index('ix_attendees_email', table_name='attendees')
    op.drop_index('ix_attendees_id', table_name='attendees')
    op.drop_table('attendees')
    attendeerole_enum.drop(op.get_bind(), checkfirst=True)
