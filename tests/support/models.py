"""Domain records and imperative SQLAlchemy mappings used by the writer tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from functools import cache
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, Integer, String, Table, Uuid, orm

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@dataclass(eq=False, kw_only=True)
class Customer:
    """Database-generated primary key: new while ``id`` is unset."""

    name: str
    id: int | None = None


@dataclass(eq=False, kw_only=True)
class Invoice:
    """Domain-assigned id with a version counter."""

    reference: str
    id: UUID = field(default_factory=uuid4)
    version: int | None = None


@dataclass(eq=False, kw_only=True)
class Ticket:
    """Decides on its own whether it was stored before."""

    title: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime | None = None

    @property
    def is_new(self) -> bool:
        return self.created_at is None


class Unmapped:
    pass


mapper_registry = orm.registry()

customer_table = Table(
    "customer",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
)

invoice_table = Table(
    "invoice",
    mapper_registry.metadata,
    Column("id", Uuid, primary_key=True),
    Column("reference", String(100), nullable=False),
    Column("version", Integer, nullable=False),
)

ticket_table = Table(
    "ticket",
    mapper_registry.metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String(100), nullable=False),
    Column("created_at", DateTime(timezone=True)),
)


@cache
def start_mappers() -> orm.registry:
    mapper_registry.map_imperatively(Customer, customer_table)
    mapper_registry.map_imperatively(
        Invoice,
        invoice_table,
        version_id_col=invoice_table.c.version,
    )
    mapper_registry.map_imperatively(Ticket, ticket_table)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    mapper_registry.metadata.create_all(engine)
