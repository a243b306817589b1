"""
Annotation reader for live Python classes.

Class-level annotations come from the ``annotate`` decorator; property-level
annotations are the Annotation objects found in ``typing.Annotated`` hints.
"""
import importlib
import inspect
import logging
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    get_args,
    get_origin,
    get_type_hints,
)
from datamapper.annotations import ANNOTATIONS_ATTR, Annotation
from datamapper.core.errors import ClassResolutionError
from datamapper.metadata.naming import split_class
from datamapper.readers.base import BaseAnnotationReader

log = logging.getLogger(__name__)


def class_identifier(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class DeclarativeAnnotationReader(BaseAnnotationReader):
    def __init__(self, classes: Iterable[type] = ()):
        self._registry: Dict[str, type] = {}
        self._hints: Dict[str, Dict[str, Any]] = {}
        for cls in classes:
            self.register(cls)

    def register(self, cls: type, class_name: Optional[str] = None) -> str:
        """Make ``cls`` resolvable as ``class_name`` (default: its dotted path)."""
        class_name = class_name or class_identifier(cls)
        self._registry[class_name] = cls
        self._hints.pop(class_name, None)
        return class_name

    @property
    def class_names(self) -> List[str]:
        return list(self._registry)

    def resolve(self, class_name: str) -> type:
        if class_name in self._registry:
            return self._registry[class_name]

        parts = split_class(class_name)
        for i in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:i])
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                # only a missing prefix means "try a shorter module path"
                if e.name and not (module_name == e.name or module_name.startswith(e.name + ".")):
                    raise
                continue

            target: Any = module
            for attr in parts[i:]:
                target = getattr(target, attr, None)
                if target is None:
                    raise ClassResolutionError(class_name, f"{attr} not found in module {module_name}")
            if not inspect.isclass(target):
                raise ClassResolutionError(class_name, "not a class")

            log.debug("Resolved class from module %s", module_name, extra={"entity_class": class_name})
            self._registry[class_name] = target
            return target

        raise ClassResolutionError(class_name, "no importable module")

    def get_class_annotations(self, class_name: str) -> Sequence[Annotation]:
        cls = self.resolve(class_name)
        # own annotations only, a base entity does not make its subclasses entities
        return tuple(cls.__dict__.get(ANNOTATIONS_ATTR, ()))

    def get_properties(self, class_name: str) -> List[str]:
        return list(self._type_hints(class_name))

    def get_property_annotations(self, class_name: str, property_name: str) -> Sequence[Annotation]:
        hint = self._type_hints(class_name).get(property_name)
        if get_origin(hint) is not Annotated:
            return ()
        return tuple(arg for arg in get_args(hint)[1:] if isinstance(arg, Annotation))

    def _type_hints(self, class_name: str) -> Dict[str, Any]:
        if class_name not in self._hints:
            cls = self.resolve(class_name)
            try:
                hints = get_type_hints(cls, include_extras=True)
            except NameError as e:
                raise ClassResolutionError(class_name, f"unresolvable type hint ({e})") from e
            self._hints[class_name] = {
                name: hint for name, hint in hints.items()
                if get_origin(hint) is not ClassVar
            }
        return self._hints[class_name]
