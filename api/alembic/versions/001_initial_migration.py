"""Initial migration: create languages, translation_keys and translations

Revision ID: 001_initial_migration
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_migration'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create languages table
    op.create_table(
        'languages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=2), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_languages_code'), 'languages', ['code'], unique=True)

    # Create translation_keys table
    op.create_table(
        'translation_keys',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_translation_keys_key'), 'translation_keys', ['key'], unique=True)

    # Create translations table
    # No ON DELETE CASCADE: owners are deleted together with their cells in one transaction
    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('translation_key_id', sa.Integer(), nullable=False),
        sa.Column('language_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['translation_key_id'], ['translation_keys.id'], ),
        sa.ForeignKeyConstraint(['language_id'], ['languages.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('translation_key_id', 'language_id', name='uq_translation_key_language')
    )
    op.create_index(op.f('ix_translations_translation_key_id'), 'translations', ['translation_key_id'], unique=False)
    op.create_index(op.f('ix_translations_language_id'), 'translations', ['language_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_translations_language_id'), table_name='translations')
    op.drop_index(op.f('ix_translations_translation_key_id'), table_name='translations')
    op.drop_table('translations')
    op.drop_index(op.f('ix_translation_keys_key'), table_name='translation_keys')
    op.drop_table('translation_keys')
    op.drop_index(op.f('ix_languages_code'), table_name='languages')
    op.drop_table('languages')
