"""Immutable metadata records produced by the builder."""
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datamapper.core.errors import UnknownKeyError
from datamapper.metadata.types import ColumnType, RelationType


class Definition(BaseModel):
    """Base record: frozen, with a closed set of keys."""
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            unknown = set(data) - set(cls.model_fields)
            if unknown:
                raise UnknownKeyError(cls.__name__, unknown)
        return data


class ColumnOptions(Definition):
    """Type-specific column facets; None means not declared."""
    scale: Optional[int] = None
    precision: Optional[int] = None
    length: Optional[int] = None
    unsigned: Optional[bool] = None
    auto_increment: Optional[bool] = None


class Column(Definition):
    name: str
    type: ColumnType
    nullable: bool = False
    primary: bool = False
    unique: bool = False
    index: bool = False
    default: Any = None
    options: ColumnOptions = Field(default_factory=ColumnOptions)


class Table(Definition):
    name: str
    columns: Dict[str, Column] = Field(default_factory=dict)

    def primary_columns(self) -> List[Column]:
        return [column for column in self.columns.values() if column.primary]


class Attribute(Definition):
    name: str


class EmbeddedClass(Definition):
    name: str
    class_name: str
    attributes: Dict[str, Attribute] = Field(default_factory=dict)


class RelationOptions(Definition):
    """Relation settings copied from the annotation; None means not declared."""
    name: Optional[str] = None
    type: Optional[str] = None
    table: Optional[str] = None
    through: Optional[str] = None
    foreign_key: Optional[str] = None
    other_key: Optional[str] = None
    local_key: Optional[str] = None
    first_key: Optional[str] = None
    second_key: Optional[str] = None
    inverse: Optional[bool] = None
    id: Optional[str] = None
    relation: Optional[str] = None


class Relation(Definition):
    name: str
    type: RelationType
    related_class: Optional[str] = None
    pivot_table: Optional[Table] = None
    options: RelationOptions = Field(default_factory=RelationOptions)


class Entity(Definition):
    class_name: str
    table: Table
    attributes: Dict[str, Attribute] = Field(default_factory=dict)
    embeddeds: Dict[str, EmbeddedClass] = Field(default_factory=dict)
    relations: Dict[str, Relation] = Field(default_factory=dict)
    soft_deletes: bool = False
    timestamps: bool = False
    versionable: bool = False
    hidden: Tuple[str, ...] = ()
    visible: Tuple[str, ...] = ()
    touches: Tuple[str, ...] = ()

    @property
    def primary_key(self) -> Optional[Column]:
        """The single primary column, or None when there is not exactly one."""
        primary = self.table.primary_columns()
        return primary[0] if len(primary) == 1 else None
