"""Render built entity metadata as SQLAlchemy tables."""
import logging
from typing import Dict, Optional
import sqlalchemy as sa
from datamapper.metadata.definitions import Column, Entity, Table
from datamapper.metadata.types import ColumnType

log = logging.getLogger(__name__)

DEFAULT_STRING_LENGTH = 255

_SIMPLE_TYPES = {
    ColumnType.INCREMENTS: sa.Integer,
    ColumnType.BIG_INCREMENTS: sa.BigInteger,
    ColumnType.INTEGER: sa.Integer,
    ColumnType.BIG_INTEGER: sa.BigInteger,
    ColumnType.SMALL_INTEGER: sa.SmallInteger,
    ColumnType.TINY_INTEGER: sa.SmallInteger,
    ColumnType.TEXT: sa.Text,
    ColumnType.LONG_TEXT: sa.Text,
    ColumnType.BOOLEAN: sa.Boolean,
    ColumnType.FLOAT: sa.Float,
    ColumnType.DOUBLE: sa.Double,
    ColumnType.DATE: sa.Date,
    ColumnType.DATE_TIME: sa.DateTime,
    ColumnType.TIME: sa.Time,
    ColumnType.TIMESTAMP: sa.TIMESTAMP,
    ColumnType.JSON: sa.JSON,
    ColumnType.BINARY: sa.LargeBinary,
    ColumnType.UUID: sa.Uuid,
}


def sqlalchemy_type(column: Column) -> sa.types.TypeEngine:
    options = column.options
    if column.type == ColumnType.STRING:
        return sa.String(options.length or DEFAULT_STRING_LENGTH)
    if column.type == ColumnType.CHAR:
        return sa.CHAR(options.length or 1)
    if column.type == ColumnType.DECIMAL:
        return sa.Numeric(precision=options.precision, scale=options.scale)
    return _SIMPLE_TYPES[column.type]()


def sqlalchemy_column(column: Column) -> sa.Column:
    return sa.Column(
        column.name,
        sqlalchemy_type(column),
        primary_key=column.primary,
        nullable=column.nullable and not column.primary,
        unique=column.unique or None,
        index=column.index or None,
        default=column.default,
        autoincrement=True if column.options.auto_increment else "auto",
    )


def add_table(metadata: sa.MetaData, table: Table) -> sa.Table:
    return sa.Table(
        table.name,
        metadata,
        *(sqlalchemy_column(column) for column in table.columns.values()),
    )


def to_sqlalchemy(entities: Dict[str, Entity], metadata: Optional[sa.MetaData] = None) -> sa.MetaData:
    """
    Add one table per entity and per pivot table to ``metadata``.

    Both sides of a many-to-many association may describe the same pivot
    table; the first description wins.
    """
    metadata = metadata if metadata is not None else sa.MetaData()

    for entity in entities.values():
        add_table(metadata, entity.table)

    for entity in entities.values():
        for relation in entity.relations.values():
            pivot = relation.pivot_table
            if pivot is None:
                continue
            if pivot.name in metadata.tables:
                log.debug("Pivot table %s already defined", pivot.name, extra={"entity_class": entity.class_name})
                continue
            add_table(metadata, pivot)

    return metadata
