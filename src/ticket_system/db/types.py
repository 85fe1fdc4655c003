"""Custom column types shared by the module tables."""

from enum import IntEnum
from typing import Type

from sqlalchemy import BigInteger, DateTime, Integer
from sqlalchemy.types import TypeDecorator

from ..core.clock import ensure_utc

# 64-bit identities; SQLite only autoincrements "INTEGER PRIMARY KEY"
IdentityColumn = BigInteger().with_variant(Integer(), "sqlite")


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime, also on backends that drop tzinfo (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return ensure_utc(value)

    def process_result_value(self, value, dialect):
        return ensure_utc(value)


class IntEnumType(TypeDecorator):
    """Stores an IntEnum as its ordinal and loads it back as the enum member."""

    impl = Integer
    cache_ok = True

    def __init__(self, enum_class: Type[IntEnum], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enum_class = enum_class

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return int(self.enum_class(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return self.enum_class(value)
