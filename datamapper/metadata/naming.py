"""Naming conventions for tables, keys and pivot tables."""
import re
from pathlib import Path
from typing import List, Optional, Tuple

_SEPARATORS = re.compile(r"[.\\/]")
_WORD_BOUNDARY = re.compile(r"(?<=\w)(?=[A-Z])")


def split_class(class_name: str) -> List[str]:
    """Split a class identifier into its namespace segments and base name."""
    return [segment for segment in _SEPARATORS.split(class_name) if segment]


def lcfirst(text: str) -> str:
    if not text:
        return text
    return text[0].lower() + text[1:]


def to_snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return s2.lower()


def class_basename(class_name: str, lcfirst_name: bool = False) -> str:
    segments = split_class(class_name)
    basename = segments[-1] if segments else ""
    return lcfirst(basename) if lcfirst_name else basename


def _squash(segment: str) -> str:
    return segment.replace("_", "").lower()


def table_name_from_class(class_name: str, depth: int = 2) -> str:
    """
    Derive a table name from a class identifier.

    The first ``depth`` segments (the application root) are dropped, a
    module named after its class is dropped, and the base name is split
    into words. ``app.models.blog.BlogPost`` becomes ``blog_post``.
    """
    segments = split_class(class_name)
    remaining = segments[depth:] or segments[-1:]

    # a module named after its class: blog_post.BlogPost, user.User
    if len(remaining) >= 2 and _squash(remaining[-2]) == _squash(remaining[-1]):
        del remaining[-2]

    basename = remaining.pop()
    words = [w.lower() for w in remaining + _WORD_BOUNDARY.split(basename) if w]

    parts: List[str] = []
    for word in words:
        # "blog" + "BlogPost" must not read blog_blog_post
        if not parts or parts[-1] != word:
            parts.append(word)
    return "_".join(parts)


def foreign_key_name(class_name: str) -> str:
    return f"{class_basename(class_name, lcfirst_name=True)}_id"


def morph_column_names(morph_name: str) -> Tuple[str, str]:
    return f"{morph_name}_id", f"{morph_name}_type"


def pivot_table_name(owner_table: str, suffix: str) -> str:
    return f"{owner_table}_{suffix}_pivot"


def strip_namespace(class_name: str, namespace: str) -> Optional[str]:
    """
    Return what follows ``namespace`` in ``class_name``.

    Returns "" when both are equal and None when the class lies outside the
    namespace. Matching is segment-aligned: ``application.X`` is not inside ``app``.
    """
    class_segments = split_class(class_name)
    namespace_segments = split_class(namespace)
    if class_segments[:len(namespace_segments)] != namespace_segments:
        return None
    return ".".join(class_segments[len(namespace_segments):])


def namespace_to_path(namespace: str, root_namespace: str, app_path: Path) -> Optional[Path]:
    """Map a namespace below the root namespace to its directory."""
    remainder = strip_namespace(namespace, root_namespace)
    if remainder is None:
        return None
    return Path(app_path).joinpath(*split_class(remainder))
