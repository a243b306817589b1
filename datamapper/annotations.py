"""
Annotation variants understood by the metadata builder.

Every annotation is a frozen dataclass. Class-level variants mark or configure
an entity; property-level variants fall into three families (embedded,
attribute, relation). Fields left at ``None`` were not declared, which keeps
"absent" distinguishable from ``False`` or an empty value.

Annotations are attached to Python classes with the ``annotate`` decorator and
``typing.Annotated`` hints::

    @annotate(Entity(), Timestamps())
    class Post:
        id: Annotated[int, Increments()]
        title: Annotated[str, String(length=120)]
        author: Annotated["User", BelongsTo("app.models.User")]
"""
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Tuple
from datamapper.metadata.types import ColumnType, RelationType

ANNOTATIONS_ATTR = "__datamapper_annotations__"


@dataclass(frozen=True)
class Annotation:
    """Base class of every annotation variant."""


# ---------------------------------------------------------------------------
# Class-level annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Entity(Annotation):
    """Marks a class as a persisted entity."""


@dataclass(frozen=True)
class Embeddable(Annotation):
    """Marks a value class whose attributes can be embedded in an entity."""


@dataclass(frozen=True)
class Table(Annotation):
    name: str


@dataclass(frozen=True)
class SoftDeletes(Annotation):
    pass


@dataclass(frozen=True)
class Timestamps(Annotation):
    pass


@dataclass(frozen=True)
class Versionable(Annotation):
    pass


@dataclass(frozen=True)
class _NameList(Annotation):
    def __post_init__(self):
        # accept lists or a single name from manifests, store tuples
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, f.name, tuple(value))


@dataclass(frozen=True)
class Hidden(_NameList):
    attributes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Visible(_NameList):
    attributes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Touches(_NameList):
    relations: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Property-level annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Embedded(Annotation):
    class_name: str


@dataclass(frozen=True)
class AttributeAnnotation(Annotation):
    """A persisted scalar property; the variant decides the column type."""
    column_type: ClassVar[ColumnType]

    nullable: bool | None = None
    default: Any = None
    primary: bool | None = None
    unique: bool | None = None
    index: bool | None = None
    scale: int | None = None
    precision: int | None = None
    length: int | None = None
    unsigned: bool | None = None
    auto_increment: bool | None = None


@dataclass(frozen=True)
class Increments(AttributeAnnotation):
    column_type = ColumnType.INCREMENTS
    primary: bool | None = True
    unsigned: bool | None = True
    auto_increment: bool | None = True


@dataclass(frozen=True)
class BigIncrements(AttributeAnnotation):
    column_type = ColumnType.BIG_INCREMENTS
    primary: bool | None = True
    unsigned: bool | None = True
    auto_increment: bool | None = True


@dataclass(frozen=True)
class Integer(AttributeAnnotation):
    column_type = ColumnType.INTEGER


@dataclass(frozen=True)
class BigInteger(AttributeAnnotation):
    column_type = ColumnType.BIG_INTEGER


@dataclass(frozen=True)
class SmallInteger(AttributeAnnotation):
    column_type = ColumnType.SMALL_INTEGER


@dataclass(frozen=True)
class TinyInteger(AttributeAnnotation):
    column_type = ColumnType.TINY_INTEGER


@dataclass(frozen=True)
class String(AttributeAnnotation):
    column_type = ColumnType.STRING


@dataclass(frozen=True)
class Char(AttributeAnnotation):
    column_type = ColumnType.CHAR


@dataclass(frozen=True)
class Text(AttributeAnnotation):
    column_type = ColumnType.TEXT


@dataclass(frozen=True)
class LongText(AttributeAnnotation):
    column_type = ColumnType.LONG_TEXT


@dataclass(frozen=True)
class Boolean(AttributeAnnotation):
    column_type = ColumnType.BOOLEAN


@dataclass(frozen=True)
class Float(AttributeAnnotation):
    column_type = ColumnType.FLOAT


@dataclass(frozen=True)
class Double(AttributeAnnotation):
    column_type = ColumnType.DOUBLE


@dataclass(frozen=True)
class Decimal(AttributeAnnotation):
    column_type = ColumnType.DECIMAL


@dataclass(frozen=True)
class Date(AttributeAnnotation):
    column_type = ColumnType.DATE


@dataclass(frozen=True)
class DateTime(AttributeAnnotation):
    column_type = ColumnType.DATE_TIME


@dataclass(frozen=True)
class Time(AttributeAnnotation):
    column_type = ColumnType.TIME


@dataclass(frozen=True)
class Timestamp(AttributeAnnotation):
    column_type = ColumnType.TIMESTAMP


@dataclass(frozen=True)
class Json(AttributeAnnotation):
    column_type = ColumnType.JSON


@dataclass(frozen=True)
class Binary(AttributeAnnotation):
    column_type = ColumnType.BINARY


@dataclass(frozen=True)
class Uuid(AttributeAnnotation):
    column_type = ColumnType.UUID


@dataclass(frozen=True)
class RelationAnnotation(Annotation):
    """An association to another class; the variant decides the relation type."""
    relation_type: ClassVar[RelationType]

    related: str | None = None
    name: str | None = None
    type: str | None = None
    table: str | None = None
    through: str | None = None
    foreign_key: str | None = None
    other_key: str | None = None
    local_key: str | None = None
    first_key: str | None = None
    second_key: str | None = None
    inverse: bool | None = None
    id: str | None = None
    relation: str | None = None


@dataclass(frozen=True)
class HasOne(RelationAnnotation):
    relation_type = RelationType.HAS_ONE


@dataclass(frozen=True)
class HasMany(RelationAnnotation):
    relation_type = RelationType.HAS_MANY


@dataclass(frozen=True)
class HasManyThrough(RelationAnnotation):
    relation_type = RelationType.HAS_MANY_THROUGH


@dataclass(frozen=True)
class BelongsTo(RelationAnnotation):
    relation_type = RelationType.BELONGS_TO


@dataclass(frozen=True)
class BelongsToMany(RelationAnnotation):
    relation_type = RelationType.BELONGS_TO_MANY


@dataclass(frozen=True)
class MorphTo(RelationAnnotation):
    relation_type = RelationType.MORPH_TO


@dataclass(frozen=True)
class MorphOne(RelationAnnotation):
    relation_type = RelationType.MORPH_ONE


@dataclass(frozen=True)
class MorphMany(RelationAnnotation):
    relation_type = RelationType.MORPH_MANY


@dataclass(frozen=True)
class MorphToMany(RelationAnnotation):
    relation_type = RelationType.MORPH_TO_MANY


@dataclass(frozen=True)
class MorphedByMany(RelationAnnotation):
    relation_type = RelationType.MORPHED_BY_MANY


def _concrete_kinds() -> Dict[str, type]:
    abstract = {Annotation, AttributeAnnotation, RelationAnnotation, _NameList}
    kinds = {}
    pending = list(Annotation.__subclasses__())
    while pending:
        cls = pending.pop(0)
        pending.extend(cls.__subclasses__())
        if cls not in abstract:
            kinds[cls.__name__] = cls
    return kinds


# variant name -> class, used when annotations are read from data
ANNOTATION_KINDS: Dict[str, type] = _concrete_kinds()


def annotate(*annotations: Annotation):
    """Class decorator attaching class-level annotations."""
    def decorator(cls):
        setattr(cls, ANNOTATIONS_ATTR, tuple(annotations))
        return cls
    return decorator
