from __future__ import annotations

from datetime import UTC, datetime

import pytest
from sqlalchemy.orm import Session  # noqa: TC002

from batchpersist.adapters.sqlalchemy import SqlAlchemyPersistenceSession, describe_entity
from batchpersist.config import ConfigurationError
from tests.support.models import Customer, Invoice, Ticket, Unmapped


@pytest.fixture
def persistence_session(sqlite_session: Session) -> SqlAlchemyPersistenceSession:
    return SqlAlchemyPersistenceSession(sqlite_session)


def test_describe_entity_reads_primary_key(
    persistence_session: SqlAlchemyPersistenceSession,
) -> None:
    information = describe_entity(Customer, persistence_session)

    assert information.id_attributes == ("id",)
    assert information.version_attribute is None


def test_customer_is_new_until_id_assigned(
    persistence_session: SqlAlchemyPersistenceSession,
) -> None:
    information = describe_entity(Customer, persistence_session)

    assert information.is_new(Customer(name="Ada")) is True
    assert information.is_new(Customer(name="Ada", id=7)) is False


def test_versioned_entity_uses_version_counter(
    persistence_session: SqlAlchemyPersistenceSession,
) -> None:
    information = describe_entity(Invoice, persistence_session)

    assert information.version_attribute == "version"
    assert information.is_new(Invoice(reference="INV-1")) is True
    assert information.is_new(Invoice(reference="INV-1", version=3)) is False


def test_persistable_items_decide_for_themselves(
    persistence_session: SqlAlchemyPersistenceSession,
) -> None:
    information = describe_entity(Ticket, persistence_session)

    assert information.is_new(Ticket(title="open")) is True
    assert information.is_new(Ticket(title="seen", created_at=datetime.now(tz=UTC))) is False


def test_describe_entity_rejects_unmapped_types(
    persistence_session: SqlAlchemyPersistenceSession,
) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        describe_entity(Unmapped, persistence_session)

    assert "Unmapped" in str(excinfo.value)


class _MethodFlag:
    def __init__(self, *, stored: bool) -> None:
        self.stored = stored

    def is_new(self) -> bool:
        return not self.stored


def test_is_new_methods_are_called(
    persistence_session: SqlAlchemyPersistenceSession,
) -> None:
    information = describe_entity(Customer, persistence_session)

    assert information.is_new(_MethodFlag(stored=False)) is True  # type: ignore[arg-type]
    assert information.is_new(_MethodFlag(stored=True)) is False  # type: ignore[arg-type]
