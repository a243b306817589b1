"""Exceptions raised while building entity metadata."""
from typing import Iterable


class MetadataError(Exception):
    """Base class for metadata build failures."""


class ConfigurationError(MetadataError):
    """Annotations or settings describe something that cannot be mapped."""


class MissingAnnotationError(ConfigurationError):
    def __init__(self, class_name: str, annotation: str, role: str):
        self.class_name = class_name
        self.annotation = annotation
        super().__init__(f"{role} class {class_name} has no @{annotation} annotation.")


class PrimaryKeyError(ConfigurationError):
    def __init__(self, class_name: str, count: int):
        self.class_name = class_name
        self.count = count
        if count == 0:
            message = f"No primary key defined in class {class_name}."
        else:
            message = f"No composite primary keys allowed for class {class_name}."
        super().__init__(message)


class UnknownKeyError(ConfigurationError):
    def __init__(self, target: str, keys: Iterable[str]):
        self.target = target
        self.keys = sorted(keys)
        super().__init__(f"Unknown key(s) for {target}: {', '.join(self.keys)}")


class UnknownAnnotationError(ConfigurationError):
    def __init__(self, kind: str, class_name: str | None = None):
        self.kind = kind
        self.class_name = class_name
        where = f" in class {class_name}" if class_name else ""
        super().__init__(f"Unknown annotation @{kind}{where}.")


class ColumnCollisionError(ConfigurationError):
    def __init__(self, class_name: str, table: str, column: str):
        self.class_name = class_name
        self.table = table
        self.column = column
        super().__init__(
            f"Column {column} is defined more than once on table {table} (class {class_name})."
        )


class ClassResolutionError(ConfigurationError):
    def __init__(self, class_name: str, reason: str = "not found"):
        self.class_name = class_name
        super().__init__(f"Cannot resolve class {class_name}: {reason}")


class InvalidPropertyError(ConfigurationError):
    def __init__(self, class_name: str, property_name: str, reason: str):
        self.class_name = class_name
        self.property_name = property_name
        super().__init__(f"Invalid property {property_name} in class {class_name}: {reason}")
