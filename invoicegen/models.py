from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel, create_engine, Session

from . import config


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RenderStatus(str, Enum):
    READY = "READY"
    FAILED = "FAILED"


class RenderLog(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(index=True)
    template_id: str
    requested_template: str = ""
    invoice_number: str = ""
    tax_rate: float = 0.0
    # Decimal string, two places
    total: str = "0.00"
    status: RenderStatus = Field(default=RenderStatus.READY)
    fail_code: Optional[str] = None
    fail_detail: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)


class Artifact(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    render_id: int = Field(foreign_key="renderlog.id")
    type: str
    path: str
    created_at: datetime = Field(default_factory=_utcnow)


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)
