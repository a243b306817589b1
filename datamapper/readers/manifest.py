"""
Annotation reader backed by a manifest instead of Python classes.

A manifest maps class identifiers to their annotations::

    app.models.Post:
      annotations:
        - Entity
        - Timestamps
        - Table: posts
      properties:
        id:
          - Increments
        title:
          - String: {length: 120}
        author:
          - BelongsTo: {related: app.models.User, otherKey: writer_id}

An annotation is either its kind name or a one-entry mapping of kind name to
its fields. A scalar or list in place of the fields sets the first field, so
``Table: posts`` is ``Table(name="posts")``. Field names may be camelCase.
"""
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple
import yaml
from datamapper.annotations import ANNOTATION_KINDS, Annotation
from datamapper.core.errors import (
    ClassResolutionError,
    ConfigurationError,
    UnknownAnnotationError,
    UnknownKeyError,
)
from datamapper.metadata.naming import to_snake_case
from datamapper.readers.base import BaseAnnotationReader

log = logging.getLogger(__name__)

CLASS_KEYS = {"annotations", "properties"}


@dataclass
class ClassDeclaration:
    annotations: Tuple[Annotation, ...] = ()
    properties: Dict[str, Tuple[Annotation, ...]] = field(default_factory=dict)


def parse_annotation(spec: Any, class_name: str) -> Annotation:
    """Build one annotation from its manifest form."""
    if isinstance(spec, str):
        kind, values = spec, {}
    elif isinstance(spec, Mapping) and len(spec) == 1:
        kind, values = next(iter(spec.items()))
    else:
        raise ConfigurationError(f"Malformed annotation {spec!r} in class {class_name}.")

    annotation_cls = ANNOTATION_KINDS.get(kind)
    if annotation_cls is None:
        raise UnknownAnnotationError(kind, class_name)

    field_names = [f.name for f in fields(annotation_cls)]
    if values is None:
        values = {}
    elif not isinstance(values, Mapping):
        if not field_names:
            raise ConfigurationError(f"@{kind} takes no value (class {class_name}).")
        values = {field_names[0]: values}

    kwargs = {to_snake_case(str(key)): value for key, value in values.items()}
    unknown = set(kwargs) - set(field_names)
    if unknown:
        raise UnknownKeyError(f"@{kind} in class {class_name}", unknown)

    try:
        return annotation_cls(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid @{kind} in class {class_name}: {e}") from e


def parse_class_declaration(class_name: str, body: Any) -> ClassDeclaration:
    body = body or {}
    if not isinstance(body, Mapping):
        raise ConfigurationError(f"Declaration of class {class_name} must be a mapping.")

    unknown = set(body) - CLASS_KEYS
    if unknown:
        raise UnknownKeyError(f"class {class_name}", unknown)

    annotations = tuple(parse_annotation(spec, class_name) for spec in body.get("annotations") or [])
    properties = {
        str(name): tuple(parse_annotation(spec, class_name) for spec in specs or [])
        for name, specs in (body.get("properties") or {}).items()
    }
    return ClassDeclaration(annotations=annotations, properties=properties)


class ManifestAnnotationReader(BaseAnnotationReader):
    def __init__(self, manifest: Mapping[str, Any]):
        self._classes: Dict[str, ClassDeclaration] = {
            str(class_name): parse_class_declaration(str(class_name), body)
            for class_name, body in (manifest or {}).items()
        }
        log.debug("Loaded manifest with %d classes", len(self._classes))

    @classmethod
    def from_yaml(cls, text: str) -> "ManifestAnnotationReader":
        return cls(yaml.safe_load(text) or {})

    @classmethod
    def from_path(cls, path: Path) -> "ManifestAnnotationReader":
        with open(path, "r", encoding="utf-8") as f:
            return cls(yaml.safe_load(f) or {})

    @property
    def class_names(self) -> List[str]:
        return list(self._classes)

    def _declaration(self, class_name: str) -> ClassDeclaration:
        declaration = self._classes.get(class_name)
        if declaration is None:
            raise ClassResolutionError(class_name, "not declared in manifest")
        return declaration

    def get_class_annotations(self, class_name: str) -> Sequence[Annotation]:
        return self._declaration(class_name).annotations

    def get_properties(self, class_name: str) -> List[str]:
        return list(self._declaration(class_name).properties)

    def get_property_annotations(self, class_name: str, property_name: str) -> Sequence[Annotation]:
        return self._declaration(class_name).properties.get(property_name, ())
