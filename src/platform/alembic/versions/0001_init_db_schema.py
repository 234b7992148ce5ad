"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Schema:
- event: Events with price and ticket inventory (available_tickets <= total_tickets)
- order: Purchase records, UUID7 primary key, FK to event
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create event and order tables."""

    op.create_table(
        'event',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('organizer_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('venue_name', sa.String(length=255), nullable=False),
        sa.Column('event_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        sa.Column('ticket_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_tickets', sa.Integer(), nullable=False),
        sa.Column('available_tickets', sa.Integer(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('ticket_price >= 0', name='ck_event_ticket_price_non_negative'),
        sa.CheckConstraint('total_tickets > 0', name='ck_event_total_tickets_positive'),
        sa.CheckConstraint('available_tickets >= 0', name='ck_event_available_tickets_non_negative'),
        sa.CheckConstraint(
            'available_tickets <= total_tickets', name='ck_event_available_within_total'
        ),
    )
    op.create_index(op.f('ix_event_organizer_id'), 'event', ['organizer_id'])
    op.create_index(op.f('ix_event_status'), 'event', ['status'])

    op.create_table(
        'order',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('buyer_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.CheckConstraint('quantity > 0', name='ck_order_quantity_positive'),
        sa.CheckConstraint('total_amount >= 0', name='ck_order_total_amount_non_negative'),
    )
    op.create_index('ix_order_buyer_id_created_at', 'order', ['buyer_id', 'created_at'])
    op.create_index('ix_order_event_id_created_at', 'order', ['event_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_order_event_id_created_at', table_name='order')
    op.drop_index('ix_order_buyer_id_created_at', table_name='order')
    op.drop_table('order')
    op.drop_index(op.f('ix_event_status'), table_name='event')
    op.drop_index(op.f('ix_event_organizer_id'), table_name='event')
    op.drop_table('event')
