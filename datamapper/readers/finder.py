"""
Class discovery for Python source trees.

Uses file walking and a regex over top-level ``class`` statements (no module
import, no AST parsing), so discovering classes has no side effects.
"""
import logging
import re
from pathlib import Path
from typing import List
from datamapper.readers.base import BaseClassFinder

log = logging.getLogger(__name__)

# Maximum file size to read (512KB)
MAX_FILE_SIZE = 512 * 1024

# Directories to ignore
IGNORE_DIRS = {"__pycache__", ".git", ".venv", "venv", "node_modules", "build", "dist"}

CLASS_PATTERN = re.compile(r"^class\s+([A-Za-z_][A-Za-z0-9_]*)\s*[(:]", re.MULTILINE)


def should_ignore_path(path: Path) -> bool:
    """Check if a path should be ignored."""
    return any(part in IGNORE_DIRS or part.startswith(".") for part in path.parts)


class SourceClassFinder(BaseClassFinder):
    """
    Finds classes in the modules below ``base_path``.

    ``base_path`` is the directory of the ``base_namespace`` package, so
    ``<base_path>/blog/post.py`` defining ``Post`` is reported as
    ``<base_namespace>.blog.post.Post``.
    """

    def __init__(self, base_path: Path, base_namespace: str):
        self.base_path = Path(base_path)
        self.base_namespace = base_namespace

    def find_classes(self, path: Path) -> List[str]:
        directory = Path(path)
        if not directory.is_dir():
            log.warning("Class directory %s does not exist", directory)
            return []

        classes = []
        for file_path in sorted(directory.rglob("*.py")):
            relative = file_path.relative_to(self.base_path)
            if should_ignore_path(relative) or not file_path.is_file():
                continue
            if file_path.stat().st_size > MAX_FILE_SIZE:
                log.warning("Skipping %s: file too large", file_path)
                continue

            module_name = self.module_name(relative)
            content = file_path.read_text(encoding="utf-8", errors="ignore")
            for match in CLASS_PATTERN.finditer(content):
                classes.append(f"{module_name}.{match.group(1)}")

        log.debug("Found %d classes below %s", len(classes), directory)
        return classes

    def module_name(self, relative: Path) -> str:
        parts = list(relative.with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join([self.base_namespace, *parts])
