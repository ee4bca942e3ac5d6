# playground/models/share_table.py
# Table backing the db store provider: one JSON document per share link

from sqlalchemy import Table, Column, Text, TIMESTAMP, Index

from playground.db.base import metadata


playground_share = Table(
    'playground_share',
    metadata,
    Column('share_id', Text, primary_key=True),
    # json.dumps of a StoreItem or legacy SharedState; \u0000 escapes must survive
    Column('payload', Text, nullable=False),
    Column('created_at', TIMESTAMP(timezone=True), nullable=False),
    # retention job deletes by age
    Index('ix_playground_share_created_at', 'created_at'),
    schema='public',
)
