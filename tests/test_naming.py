"""Tests for table and key naming conventions."""
from pathlib import Path
import pytest
from datamapper.metadata.naming import (
    class_basename,
    foreign_key_name,
    lcfirst,
    morph_column_names,
    namespace_to_path,
    pivot_table_name,
    split_class,
    strip_namespace,
    table_name_from_class,
    to_snake_case,
)


class TestTableNameFromClass:
    """Test table name derivation."""

    @pytest.mark.parametrize("class_name,expected", [
        ("app.models.Post", "post"),
        ("app.models.blog.Post", "blog_post"),
        ("app.models.blog.BlogPost", "blog_post"),
        ("app.models.UserProfile", "user_profile"),
        ("app.models.user.User", "user"),
        ("app.models.blog.post.Post", "blog_post"),
        ("app.models.blog_post.BlogPost", "blog_post"),
        ("app.models.user_profile.UserProfile", "user_profile"),
    ])
    def test_dotted_identifiers(self, class_name, expected):
        assert table_name_from_class(class_name) == expected

    def test_backslash_identifiers(self):
        """Namespaced identifiers with backslashes use the same rules."""
        assert table_name_from_class("App\\Models\\Blog\\Post") == "blog_post"
        assert table_name_from_class("App\\Models\\Blog\\BlogPost") == "blog_post"

    def test_custom_depth(self):
        assert table_name_from_class("app.Post", depth=1) == "post"
        assert table_name_from_class("acme.app.models.shop.Order", depth=3) == "shop_order"

    def test_short_identifier_keeps_basename(self):
        assert table_name_from_class("Post") == "post"


def test_split_class():
    assert split_class("app.models.Post") == ["app", "models", "Post"]
    assert split_class("App\\Models\\Post") == ["App", "Models", "Post"]


def test_class_basename():
    assert class_basename("app.models.BlogPost") == "BlogPost"
    assert class_basename("app.models.BlogPost", lcfirst_name=True) == "blogPost"
    assert lcfirst("") == ""


def test_foreign_key_name():
    assert foreign_key_name("app.models.User") == "user_id"
    assert foreign_key_name("App\\Models\\Tag") == "tag_id"


def test_morph_column_names():
    assert morph_column_names("commentable") == ("commentable_id", "commentable_type")


def test_pivot_table_name():
    assert pivot_table_name("post", "tag") == "post_tag_pivot"


def test_to_snake_case():
    assert to_snake_case("otherKey") == "other_key"
    assert to_snake_case("autoIncrement") == "auto_increment"
    assert to_snake_case("class_name") == "class_name"


class TestStripNamespace:
    """Test namespace prefix handling."""

    def test_inside_namespace(self):
        assert strip_namespace("app.models.Post", "app") == "models.Post"

    def test_equal_to_namespace(self):
        assert strip_namespace("app", "app") == ""

    def test_outside_namespace(self):
        assert strip_namespace("vendor.models.Post", "app") is None

    def test_prefix_must_align_with_segments(self):
        assert strip_namespace("application.models.Post", "app") is None


def test_namespace_to_path():
    root = Path("/srv/project/app")
    assert namespace_to_path("app", "app", root) == root
    assert namespace_to_path("app.models.blog", "app", root) == root / "models" / "blog"
    assert namespace_to_path("vendor.models", "app", root) is None
