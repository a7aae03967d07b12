from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from fastapi_users_db_sqlalchemy import SQLAlchemyBaseUserTableUUID
from sqlalchemy import TIMESTAMP, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.models import Account, Base as AppBase, utcnow


class UserTable(SQLAlchemyBaseUserTableUUID, AppBase):
    __tablename__ = "users"

    username: Mapped[Optional[str]] = mapped_column(String(50), unique=True, nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="user")
    balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0.00"))
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    accounts: Mapped[list[Account]] = relationship(cascade="all, delete-orphan", passive_deletes=True, lazy="noload")
