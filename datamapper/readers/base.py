from pathlib import Path
from typing import List, Optional, Sequence, Type, TypeVar
from datamapper.annotations import Annotation

A = TypeVar("A", bound=Annotation)


class BaseAnnotationReader:
    """Supplies the annotations declared on a class and on its properties."""

    def get_class_annotations(self, class_name: str) -> Sequence[Annotation]:
        raise NotImplementedError

    def get_properties(self, class_name: str) -> List[str]:
        """Property names in declaration order."""
        raise NotImplementedError

    def get_property_annotations(self, class_name: str, property_name: str) -> Sequence[Annotation]:
        raise NotImplementedError

    def get_class_annotation(self, class_name: str, kind: Type[A]) -> Optional[A]:
        for annotation in self.get_class_annotations(class_name):
            if isinstance(annotation, kind):
                return annotation
        return None


class BaseClassFinder:
    """Enumerates the class identifiers defined below a directory."""

    def find_classes(self, path: Path) -> List[str]:
        raise NotImplementedError
