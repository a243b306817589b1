"""Tests for reading annotations off Python classes."""
from typing import Annotated, ClassVar
import pytest
from datamapper.annotations import (
    BelongsTo,
    BelongsToMany,
    Embeddable,
    Embedded,
    Entity,
    Increments,
    MorphTo,
    SoftDeletes,
    String,
    annotate,
)
from datamapper.core.config import Settings
from datamapper.core.errors import ClassResolutionError
from datamapper.metadata.builder import Builder
from datamapper.metadata.types import ColumnType
from datamapper.readers.declarative import DeclarativeAnnotationReader, class_identifier
from datamapper.readers.manifest import ManifestAnnotationReader


@annotate(Embeddable())
class Address:
    street: Annotated[str, String()]
    city: Annotated[str, String(length=80)]


class Model:
    id: Annotated[int, Increments()]


@annotate(Entity(), SoftDeletes())
class Post(Model):
    registry: ClassVar[dict] = {}

    title: Annotated[str, String(length=120)]
    summary: str
    author: Annotated[object, BelongsTo("app.models.User")]
    tags: Annotated[list, BelongsToMany("app.models.Tag")]


@annotate(Entity())
class User:
    id: Annotated[int, Increments()]
    address: Annotated[Address, Embedded("app.values.Address")]


@annotate(Entity())
class Comment:
    id: Annotated[int, Increments()]
    commentable: Annotated[object, MorphTo()]


@pytest.fixture
def declarative_reader():
    reader = DeclarativeAnnotationReader()
    reader.register(Post, "app.models.Post")
    reader.register(User, "app.models.User")
    reader.register(Comment, "app.models.Comment")
    reader.register(Address, "app.values.Address")
    reader.register(Model, "app.models.Model")
    return reader


def test_class_annotations_are_not_inherited(declarative_reader):
    assert declarative_reader.get_class_annotations("app.models.Post") == (Entity(), SoftDeletes())
    assert declarative_reader.get_class_annotations("app.models.Model") == ()


def test_properties_follow_declaration_order(declarative_reader):
    """Inherited hints come first; ClassVar hints are not properties."""
    assert declarative_reader.get_properties("app.models.Post") == [
        "id", "title", "summary", "author", "tags",
    ]


def test_property_annotations(declarative_reader):
    assert declarative_reader.get_property_annotations("app.models.Post", "title") == (
        String(length=120),
    )
    assert declarative_reader.get_property_annotations("app.models.Post", "summary") == ()
    assert declarative_reader.get_property_annotations("app.models.Post", "missing") == ()


def test_build_from_python_classes(declarative_reader, tmp_path):
    settings = Settings(root_namespace="app", app_path=tmp_path)
    entities = Builder(declarative_reader, settings=settings).build(declarative_reader.class_names)

    assert list(entities) == ["app.models.Post", "app.models.User", "app.models.Comment"]

    post = entities["app.models.Post"]
    assert post.soft_deletes is True
    assert list(post.table.columns) == ["id", "title", "user_id"]
    assert post.relations["tags"].pivot_table.name == "post_tag_pivot"

    user = entities["app.models.User"]
    assert list(user.table.columns) == ["id", "street", "city"]
    assert user.table.columns["city"].type is ColumnType.STRING


def test_matches_manifest_reader(declarative_reader, tmp_path):
    """The same declarations yield the same metadata whatever the reader."""
    manifest = ManifestAnnotationReader({
        "app.models.Comment": {
            "annotations": ["Entity"],
            "properties": {"id": ["Increments"], "commentable": ["MorphTo"]},
        },
    })
    settings = Settings(root_namespace="app", app_path=tmp_path)

    from_classes = Builder(declarative_reader, settings=settings).build(["app.models.Comment"])
    from_manifest = Builder(manifest, settings=settings).build(["app.models.Comment"])

    assert from_classes == from_manifest


def test_class_identifier():
    assert class_identifier(Post) == f"{Post.__module__}.Post"


def test_resolve_by_import():
    reader = DeclarativeAnnotationReader()
    cls = reader.resolve("datamapper.metadata.relations.RelationSchema")

    assert cls.__name__ == "RelationSchema"
    assert reader.get_properties("datamapper.metadata.relations.RelationSchema") == [
        "columns", "pivot_table",
    ]


def test_registered_classes(declarative_reader):
    reader = DeclarativeAnnotationReader([Post])
    assert reader.class_names == [class_identifier(Post)]


def test_unresolvable_class():
    reader = DeclarativeAnnotationReader()
    with pytest.raises(ClassResolutionError):
        reader.get_class_annotations("nonexistent_pkg.models.Post")
    with pytest.raises(ClassResolutionError):
        reader.get_class_annotations("datamapper.metadata.definitions.Missing")
