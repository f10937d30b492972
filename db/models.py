"""
db.models - SQLAlchemy ORM declarations.

Tables
------
kv_store - one row per named blob.  The catalog tables (artwork rows,
           recipes, colors, known keys) are stored whole as JSON text
           and are always read and written in full.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class KVEntry(Base):
    __tablename__ = "kv_store"

    key   = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False, default="null")

    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    def get_value(self):
        return json.loads(self.value) if self.value else None

    def set_value(self, value) -> None:
        self.value = json.dumps(value, ensure_ascii=False)
