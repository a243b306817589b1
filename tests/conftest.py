import copy
import pytest
from datamapper.core.config import Settings
from datamapper.readers.manifest import ManifestAnnotationReader

BLOG_MANIFEST = {
    "app.models.BaseModel": {
        "properties": {
            "id": ["Increments"],
        },
    },
    "app.models.User": {
        "annotations": ["Entity", {"Hidden": ["password"]}],
        "properties": {
            "id": ["Increments"],
            "email": [{"String": {"length": 190, "unique": True}}],
            "password": ["String"],
            "address": [{"Embedded": "app.values.Address"}],
            "posts": [{"HasMany": "app.models.Post"}],
        },
    },
    "app.models.Post": {
        "annotations": [
            "Entity",
            "Timestamps",
            "SoftDeletes",
            {"Touches": ["author"]},
        ],
        "properties": {
            "id": ["Increments"],
            "title": [{"String": {"length": 120, "index": True}}],
            "body": [{"Text": {"nullable": True}}],
            "price": [{"Decimal": {"precision": 8, "scale": 2, "default": 0}}],
            "author": [{"BelongsTo": "app.models.User"}],
            "tags": [{"BelongsToMany": "app.models.Tag"}],
            "comments": [{"MorphMany": {"related": "app.models.Comment", "name": "commentable"}}],
            "draft": [],
        },
    },
    "app.models.Tag": {
        "annotations": ["Entity"],
        "properties": {
            "id": ["Increments"],
            "name": [{"String": {"length": 50}}],
        },
    },
    "app.models.Comment": {
        "annotations": ["Entity", "Versionable"],
        "properties": {
            "id": ["Increments"],
            "body": ["Text"],
            "commentable": ["MorphTo"],
        },
    },
    "app.values.Address": {
        "annotations": ["Embeddable"],
        "properties": {
            "street": ["String"],
            "city": [{"String": {"length": 80}}],
        },
    },
    "vendor.models.Package": {
        "annotations": ["Entity"],
        "properties": {
            "name": ["String"],
        },
    },
}


@pytest.fixture
def manifest():
    return copy.deepcopy(BLOG_MANIFEST)


@pytest.fixture
def reader(manifest):
    return ManifestAnnotationReader(manifest)


@pytest.fixture
def settings(tmp_path):
    return Settings(root_namespace="app", namespace_depth=2, app_path=tmp_path / "app")
