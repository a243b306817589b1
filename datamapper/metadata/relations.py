"""
Schema implied by relation annotations.

belongsTo and morphTo store the key of the related row on the owner's table,
so they contribute columns to it. belongsToMany and morphToMany keep their keys
in a pivot table owned by the relation. Every other kind only needs metadata.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from datamapper.core.errors import ColumnCollisionError, InvalidPropertyError
from datamapper.annotations import (
    BelongsTo,
    BelongsToMany,
    MorphTo,
    MorphToMany,
    RelationAnnotation,
)
from datamapper.metadata.definitions import Column, ColumnOptions, Table
from datamapper.metadata.naming import (
    class_basename,
    foreign_key_name,
    morph_column_names,
    pivot_table_name,
)
from datamapper.metadata.types import ColumnType


@dataclass
class RelationSchema:
    """Columns to add to the owner's table and the pivot table, if any."""
    columns: List[Column] = field(default_factory=list)
    pivot_table: Optional[Table] = None


def key_column(name: str) -> Column:
    return Column(name=name, type=ColumnType.INTEGER, options=ColumnOptions(unsigned=True))


def type_column(name: str) -> Column:
    return Column(name=name, type=ColumnType.STRING)


def expand_relation(
    name: str,
    annotation: RelationAnnotation,
    owner_class: str,
    owner_table: str,
) -> RelationSchema:
    """Derive the schema a relation property implies for its owner."""
    match annotation:
        case BelongsTo():
            return RelationSchema(columns=belongs_to_columns(name, annotation, owner_class))
        case MorphTo():
            return RelationSchema(columns=morph_to_columns(name, annotation))
        case BelongsToMany():
            return RelationSchema(
                pivot_table=belongs_to_many_pivot_table(name, annotation, owner_class, owner_table)
            )
        case MorphToMany():
            return RelationSchema(
                pivot_table=morph_to_many_pivot_table(name, annotation, owner_class, owner_table)
            )
        case _:
            return RelationSchema()


def related_class(name: str, annotation: RelationAnnotation, owner_class: str) -> str:
    if not annotation.related:
        kind = type(annotation).__name__
        raise InvalidPropertyError(owner_class, name, f"@{kind} needs a related class")
    return annotation.related


def belongs_to_columns(name: str, annotation: BelongsTo, owner_class: str) -> List[Column]:
    column_name = annotation.other_key or foreign_key_name(related_class(name, annotation, owner_class))
    return [key_column(column_name)]


def morph_to_columns(name: str, annotation: MorphTo) -> List[Column]:
    morph_name = annotation.name or name
    default_id, default_type = morph_column_names(morph_name)
    return [
        key_column(annotation.id or default_id),
        type_column(annotation.type or default_type),
    ]


def belongs_to_many_pivot_table(
    name: str,
    annotation: BelongsToMany,
    owner_class: str,
    owner_table: str,
) -> Table:
    related = related_class(name, annotation, owner_class)
    table_name = annotation.table or pivot_table_name(
        owner_table, class_basename(related, lcfirst_name=True)
    )
    foreign_key = annotation.foreign_key or foreign_key_name(owner_class)
    other_key = annotation.other_key or foreign_key_name(related)

    return _pivot(owner_class, table_name, [key_column(foreign_key), key_column(other_key)])


def morph_to_many_pivot_table(
    name: str,
    annotation: MorphToMany,
    owner_class: str,
    owner_table: str,
) -> Table:
    morph_name = annotation.name or name
    default_id, morph_type = morph_column_names(morph_name)

    table_name = annotation.table or pivot_table_name(owner_table, morph_name)
    foreign_key = annotation.foreign_key or foreign_key_name(owner_class)
    morph_id = annotation.other_key or default_id

    return _pivot(
        owner_class, table_name, [key_column(foreign_key), key_column(morph_id), type_column(morph_type)]
    )


def _pivot(owner_class: str, table_name: str, columns: List[Column]) -> Table:
    by_name = {}
    for column in columns:
        # self-referencing relations need explicit keys
        if column.name in by_name:
            raise ColumnCollisionError(owner_class, table_name, column.name)
        by_name[column.name] = column
    return Table(name=table_name, columns=by_name)
