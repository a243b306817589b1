from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional
from datamapper.core.config import Settings, settings as default_settings
from datamapper.core.errors import ConfigurationError, PrimaryKeyError
from datamapper.metadata.definitions import Column, Entity
from datamapper.metadata.naming import namespace_to_path, strip_namespace
from datamapper.metadata.parser import EntityParser
from datamapper.readers.base import BaseAnnotationReader, BaseClassFinder

log = logging.getLogger(__name__)


class Builder:
    """Builds validated entity metadata for the classes of an application."""

    def __init__(
        self,
        reader: BaseAnnotationReader,
        finder: Optional[BaseClassFinder] = None,
        settings: Optional[Settings] = None,
    ):
        self.reader = reader
        self.finder = finder
        self.settings = settings or default_settings
        self.parser = EntityParser(reader, namespace_depth=self.settings.namespace_depth)

    def build(self, classes: Iterable[str]) -> Dict[str, Entity]:
        """
        Build metadata for every entity class in ``classes``.

        Classes outside the root namespace and classes without the Entity
        annotation are skipped. Any configuration error aborts the whole build.

        Returns:
            Mapping of class identifier to Entity, in input order
        """
        entities: Dict[str, Entity] = {}

        for class_name in classes:
            if not strip_namespace(class_name, self.settings.root_namespace):
                log.debug(
                    "Skipping class outside namespace %s", self.settings.root_namespace,
                    extra={"entity_class": class_name},
                )
                continue

            entity = self.parser.parse_class(class_name)
            if entity is not None:
                entities[class_name] = entity

        self.validate(entities)

        log.info("Built metadata for %d entities", len(entities))
        return entities

    def validate(self, entities: Dict[str, Entity]) -> None:
        """Check that every entity table has exactly one primary key."""
        for entity in entities.values():
            count = self.count_primary_keys(entity.table.columns.values())
            if count != 1:
                log.error(
                    "Invalid primary key count %d", count,
                    extra={"entity_class": entity.class_name},
                )
                raise PrimaryKeyError(entity.class_name, count)

    @staticmethod
    def count_primary_keys(columns: Iterable[Column]) -> int:
        return sum(1 for column in columns if column.primary)

    def get_classes_from_namespace(self, namespace: Optional[str] = None) -> List[str]:
        """List the classes the finder reports for a namespace below the root."""
        if self.finder is None:
            raise ConfigurationError("No class finder configured")

        namespace = namespace or self.settings.root_namespace
        directory = namespace_to_path(
            namespace, self.settings.root_namespace, self.settings.app_path
        )
        if directory is None:
            raise ConfigurationError(
                f"Namespace {namespace} is outside the application namespace "
                f"{self.settings.root_namespace}"
            )

        return self.finder.find_classes(directory)

    def build_namespace(self, namespace: Optional[str] = None) -> Dict[str, Entity]:
        return self.build(self.get_classes_from_namespace(namespace))
