"""Identity checks derived from SQLAlchemy mapper metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from batchpersist.config.errors import ConfigurationError
from batchpersist.domain.ports import Persistable

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper

    from batchpersist.domain.ports import PersistenceSession


class SqlAlchemyEntityInformation[T]:
    """Decide whether an instance of a mapped class has been stored before.

    Resolution order:

    * items exposing ``is_new`` (see ``Persistable``) answer for themselves,
      whether it is an attribute, a property or a method;
    * mappers with a version counter treat a missing version as new, which
      covers entities whose ids are assigned in the domain;
    * otherwise an item is new while any primary-key attribute is ``None``.
    """

    def __init__(self, domain_type: type[T], mapper: Mapper[Any]) -> None:
        self.domain_type = domain_type
        self.id_attributes: tuple[str, ...] = tuple(
            mapper.get_property_by_column(column).key for column in mapper.primary_key
        )
        version_column = mapper.version_id_col
        self.version_attribute: str | None = (
            mapper.get_property_by_column(version_column).key
            if version_column is not None
            else None
        )

    def is_new(self, item: T) -> bool:
        if isinstance(item, Persistable):
            flag: object = item.is_new
            # plain methods are accepted as well as properties
            return bool(flag() if callable(flag) else flag)
        if self.version_attribute is not None:
            return getattr(item, self.version_attribute, None) is None
        return any(getattr(item, name, None) is None for name in self.id_attributes)


def describe_entity[T](
    domain_type: type[T], session: PersistenceSession
) -> SqlAlchemyEntityInformation[T]:
    """Build the identity check for ``domain_type``; it must be a mapped class."""

    _ = session
    try:
        mapper: Mapper[Any] = inspect(domain_type)
    except NoInspectionAvailable as exc:
        raise ConfigurationError(f"{domain_type.__name__} is not a mapped class") from exc
    return SqlAlchemyEntityInformation(domain_type, mapper)


if TYPE_CHECKING:
    from batchpersist.domain.ports import IdentityCheckerProvider

    _provider_check: IdentityCheckerProvider = describe_entity
