"""create_knowledge_sources_and_conversations

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-12-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13; older servers need pgcrypto
    op.execute('CREATE EXTENSION IF NOT EXISTS pgcrypto')

    # Create knowledge_sources table
    op.create_table('knowledge_sources',
    sa.Column('id', sa.UUID(as_uuid=False), server_default=sa.text('gen_random_uuid()'), nullable=False, comment='Knowledge source UUID'),
    sa.Column('title', sa.Text(), nullable=False, comment='Display title used in citations'),
    sa.Column('url', sa.Text(), nullable=True, comment='Public URL of the source document'),
    sa.Column('content', sa.Text(), nullable=False, comment='Plain text searched and injected into prompts'),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Record creation timestamp'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'idx_knowledge_sources_content_fts',
        'knowledge_sources',
        [sa.text("to_tsvector('english', content)")],
        unique=False,
        postgresql_using='gin',
    )

    # Create conversations table
    op.create_table('conversations',
    sa.Column('id', sa.UUID(as_uuid=False), server_default=sa.text('gen_random_uuid()'), nullable=False, comment='Conversation record UUID'),
    sa.Column('question', sa.Text(), nullable=False, comment='Question as submitted by the user'),
    sa.Column('answer', sa.Text(), nullable=False, comment='Answer returned to the user'),
    sa.Column('sources_used', postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'[]'::jsonb"), nullable=False, comment='IDs of the knowledge sources used as context, in search order'),
    sa.Column('session_id', sa.String(length=255), nullable=True, comment='Opaque client session identifier'),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Record creation timestamp'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_conversations_session_created', 'conversations', ['session_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_conversations_session_created', table_name='conversations')
    op.drop_table('conversations')

    op.drop_index('idx_knowledge_sources_content_fts', table_name='knowledge_sources')
    op.drop_table('knowledge_sources')
