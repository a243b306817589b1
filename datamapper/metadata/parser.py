"""Turns the annotations of one class into an Entity definition."""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple
from pydantic import ValidationError
from datamapper import annotations as ann
from datamapper.core.errors import (
    ColumnCollisionError,
    InvalidPropertyError,
    MissingAnnotationError,
)
from datamapper.metadata.definitions import (
    Attribute,
    Column,
    ColumnOptions,
    EmbeddedClass,
    Entity,
    Relation,
    RelationOptions,
    Table,
)
from datamapper.metadata.naming import table_name_from_class
from datamapper.metadata.relations import expand_relation
from datamapper.readers.base import BaseAnnotationReader

log = logging.getLogger(__name__)


class PropertyRole(str, Enum):
    # declaration order is the precedence order
    EMBEDDED = "embedded"
    ATTRIBUTE = "attribute"
    RELATION = "relation"


def classify_property(
    annotations: Sequence[ann.Annotation],
) -> Optional[Tuple[PropertyRole, ann.Annotation]]:
    """
    Pick the role of a property from its annotations.

    A property carrying annotations of several families is embedded before it
    is an attribute, and an attribute before it is a relation. Within one
    family the first annotation wins.
    """
    found: Dict[PropertyRole, ann.Annotation] = {}
    for annotation in annotations:
        match annotation:
            case ann.Embedded():
                found.setdefault(PropertyRole.EMBEDDED, annotation)
            case ann.AttributeAnnotation():
                found.setdefault(PropertyRole.ATTRIBUTE, annotation)
            case ann.RelationAnnotation():
                found.setdefault(PropertyRole.RELATION, annotation)

    for role in PropertyRole:
        if role in found:
            return role, found[role]
    return None


def describe_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in error.errors()
    )


def attribute_from_annotation(name: str, annotation: ann.AttributeAnnotation) -> Attribute:
    return Attribute(name=name)


def column_from_annotation(name: str, annotation: ann.AttributeAnnotation) -> Column:
    return Column(
        name=name,
        type=annotation.column_type,
        nullable=bool(annotation.nullable),
        primary=bool(annotation.primary),
        unique=bool(annotation.unique),
        index=bool(annotation.index),
        default=annotation.default,
        options=ColumnOptions(
            scale=annotation.scale,
            precision=annotation.precision,
            length=annotation.length,
            unsigned=annotation.unsigned,
            auto_increment=annotation.auto_increment,
        ),
    )


def relation_options(annotation: ann.RelationAnnotation) -> RelationOptions:
    return RelationOptions(
        name=annotation.name,
        type=annotation.type,
        table=annotation.table,
        through=annotation.through,
        foreign_key=annotation.foreign_key,
        other_key=annotation.other_key,
        local_key=annotation.local_key,
        first_key=annotation.first_key,
        second_key=annotation.second_key,
        inverse=annotation.inverse,
        id=annotation.id,
        relation=annotation.relation,
    )


@dataclass
class EntityBuilder:
    """Mutable state of one entity while its class is being parsed."""
    class_name: str
    table_name: str
    columns: Dict[str, Column] = field(default_factory=dict)
    attributes: Dict[str, Attribute] = field(default_factory=dict)
    embeddeds: Dict[str, EmbeddedClass] = field(default_factory=dict)
    relations: Dict[str, Relation] = field(default_factory=dict)
    soft_deletes: bool = False
    timestamps: bool = False
    versionable: bool = False
    hidden: Tuple[str, ...] = ()
    visible: Tuple[str, ...] = ()
    touches: Tuple[str, ...] = ()

    def add_column(self, column: Column) -> None:
        if column.name in self.columns:
            raise ColumnCollisionError(self.class_name, self.table_name, column.name)
        self.columns[column.name] = column

    def build(self) -> Entity:
        return Entity(
            class_name=self.class_name,
            table=Table(name=self.table_name, columns=dict(self.columns)),
            attributes=dict(self.attributes),
            embeddeds=dict(self.embeddeds),
            relations=dict(self.relations),
            soft_deletes=self.soft_deletes,
            timestamps=self.timestamps,
            versionable=self.versionable,
            hidden=self.hidden,
            visible=self.visible,
            touches=self.touches,
        )


class EntityParser:
    def __init__(self, reader: BaseAnnotationReader, namespace_depth: int = 2):
        self.reader = reader
        self.namespace_depth = namespace_depth

    def parse_class(self, class_name: str) -> Optional[Entity]:
        """Parse a class, or return None when it is not marked as an entity."""
        class_annotations = self.reader.get_class_annotations(class_name)
        if not any(isinstance(a, ann.Entity) for a in class_annotations):
            log.debug("Skipping class without @Entity", extra={"entity_class": class_name})
            return None
        return self.parse_entity(class_name, class_annotations)

    def parse_entity(
        self,
        class_name: str,
        class_annotations: Optional[Sequence[ann.Annotation]] = None,
    ) -> Entity:
        if class_annotations is None:
            class_annotations = self.reader.get_class_annotations(class_name)

        builder = EntityBuilder(
            class_name=class_name,
            table_name=table_name_from_class(class_name, self.namespace_depth),
        )

        for annotation in class_annotations:
            self._apply_class_annotation(builder, annotation)

        for name in self.reader.get_properties(class_name):
            self._parse_property(builder, name)

        entity = builder.build()
        log.debug(
            "Parsed entity into table %s (%d columns, %d relations)",
            entity.table.name, len(entity.table.columns), len(entity.relations),
            extra={"entity_class": class_name},
        )
        return entity

    def _apply_class_annotation(self, builder: EntityBuilder, annotation: ann.Annotation) -> None:
        match annotation:
            case ann.Table(name=name):
                builder.table_name = name
            case ann.SoftDeletes():
                builder.soft_deletes = True
            case ann.Timestamps():
                builder.timestamps = True
            case ann.Versionable():
                builder.versionable = True
            case ann.Hidden(attributes=attributes):
                builder.hidden = tuple(attributes)
            case ann.Visible(attributes=attributes):
                builder.visible = tuple(attributes)
            case ann.Touches(relations=relations):
                builder.touches = tuple(relations)
            case _:
                pass

    def _parse_property(self, builder: EntityBuilder, name: str) -> None:
        classified = classify_property(
            self.reader.get_property_annotations(builder.class_name, name)
        )
        if classified is None:
            return

        role, annotation = classified
        try:
            match role:
                case PropertyRole.EMBEDDED:
                    builder.embeddeds[name] = self._parse_embedded(builder, name, annotation)
                case PropertyRole.ATTRIBUTE:
                    builder.attributes[name] = attribute_from_annotation(name, annotation)
                    builder.add_column(column_from_annotation(name, annotation))
                case PropertyRole.RELATION:
                    builder.relations[name] = self._parse_relation(builder, name, annotation)
        except ValidationError as e:
            raise InvalidPropertyError(builder.class_name, name, describe_errors(e)) from e

    def _parse_embedded(
        self,
        builder: EntityBuilder,
        name: str,
        annotation: ann.Embedded,
    ) -> EmbeddedClass:
        embedded_class = annotation.class_name
        if self.reader.get_class_annotation(embedded_class, ann.Embeddable) is None:
            raise MissingAnnotationError(embedded_class, "Embeddable", "Embedded")

        attributes = {}
        for property_name in self.reader.get_properties(embedded_class):
            classified = classify_property(
                self.reader.get_property_annotations(embedded_class, property_name)
            )
            if classified is None or classified[0] is not PropertyRole.ATTRIBUTE:
                continue
            attribute_annotation = classified[1]
            try:
                column = column_from_annotation(property_name, attribute_annotation)
            except ValidationError as e:
                raise InvalidPropertyError(
                    embedded_class,
                    property_name,
                    f"{describe_errors(e)} (embedded in {builder.class_name})",
                ) from e
            attributes[property_name] = attribute_from_annotation(property_name, attribute_annotation)
            # embedded columns live on the owner's table
            builder.add_column(column)

        return EmbeddedClass(name=name, class_name=embedded_class, attributes=attributes)

    def _parse_relation(
        self,
        builder: EntityBuilder,
        name: str,
        annotation: ann.RelationAnnotation,
    ) -> Relation:
        schema = expand_relation(name, annotation, builder.class_name, builder.table_name)
        for column in schema.columns:
            builder.add_column(column)

        return Relation(
            name=name,
            type=annotation.relation_type,
            related_class=annotation.related,
            pivot_table=schema.pivot_table,
            options=relation_options(annotation),
        )
