"""Tests for the model base class, relations and descriptors."""

import pytest

pytestmark = pytest.mark.unit

from recordserializer.exceptions import ConfigurationError
from recordserializer.models import BelongsTo, FieldKind, Model, describe
from recordserializer.models.registry import qualified_name, resolve_model
from tests.models import Article, Author, Event, Node


class TestAttributes:
    """Tests for the attribute bag."""

    def test_constructor_fills_attributes_in_order(self):
        """Test keyword arguments land in the bag in insertion order."""
        article = Article(title="Hi", body="...", author_id=1)
        assert list(article.get_attributes()) == ["title", "body", "author_id"]

    def test_attribute_style_access(self):
        """Test attributes are readable and writable as Python attributes."""
        article = Article()
        article.title = "Hi"
        assert article.title == "Hi"
        assert article.get_attributes() == {"title": "Hi"}

    def test_missing_attribute_raises_attribute_error(self):
        """Test unknown names raise AttributeError on attribute access."""
        with pytest.raises(AttributeError):
            Article().missing

    def test_get_attribute_returns_none_for_unknown_name(self):
        """Test get_attribute reads unknown names as None."""
        assert Article().get_attribute("missing") is None

    def test_get_attributes_returns_copy(self):
        """Test mutating the returned bag does not touch the model."""
        article = Article(title="Hi")
        article.get_attributes()["title"] = "changed"
        assert article.title == "Hi"

    def test_get_attribute_reads_property(self):
        """Test computed properties are readable by name."""
        article = Article(body="A rather long body")
        assert article.get_attribute("summary") == "A rather l"

    def test_set_mutator_runs_on_set_attribute(self):
        """Test set_attribute delegates to a declared set-mutator."""
        event = Event()
        event.set_attribute("ends_at", "tomorrow")
        assert event.get_attributes()["ends_at"] == "custom:tomorrow"

    def test_set_raw_attribute_bypasses_mutator(self):
        """Test raw assignment skips the set-mutator."""
        event = Event()
        event.set_raw_attribute("ends_at", "tomorrow")
        assert event.get_attributes()["ends_at"] == "tomorrow"

    def test_get_mutator_transforms_value(self):
        """Test a get-mutator applies when the attribute is read."""
        event = Event(name="launch")
        assert event.name == "LAUNCH"
        assert event.get_attributes()["name"] == "launch"

    def test_mutator_detection(self):
        """Test mutator lookup by field name."""
        event = Event()
        assert event.has_set_mutator("ends_at")
        assert not event.has_set_mutator("starts_at")
        assert event.has_get_mutator("name")

    def test_base_methods_are_not_mutators(self):
        """Test the base class API is not mistaken for mutators."""
        assert not Article().has_set_mutator("raw")

    @pytest.mark.parametrize("name", ["visible", "hidden", "dates", "timestamps"])
    def test_configuration_names_fill_the_bag(self, name):
        """Test assigning a configuration name stores an attribute."""
        article = Article(**{name: "x"})
        assert article.get_attributes() == {name: "x"}
        assert article.get_attribute(name) == "x"
        assert article.get_hidden() == []
        assert article.get_visible() == []

    def test_configuration_names_are_extracted(self, normalizer):
        """Test a bag entry named like a configuration list is emitted."""
        article = Article(title="Hi", hidden="x")
        assert normalizer.extract_attributes(article) == ["title", "hidden"]
        assert article.get_dates() == ["published_at"]

    def test_repr(self):
        """Test repr lists the attributes."""
        assert repr(Article(title="Hi")) == "<Article(title='Hi')>"


class TestVisibility:
    """Tests for visible and hidden lists."""

    def test_lists_seeded_from_class(self):
        """Test instances start with the class-level lists."""
        author = Author()
        assert author.get_hidden() == ["password"]
        assert author.get_visible() == []

    def test_instance_lists_are_independent(self):
        """Test changing one instance does not affect the class or others."""
        author = Author()
        author.make_hidden("email")
        assert Author().get_hidden() == ["password"]
        assert Author.hidden == ["password"]

    def test_make_visible_removes_from_hidden(self):
        """Test make_visible un-hides a field."""
        author = Author().make_visible("password")
        assert author.get_hidden() == []

    def test_set_visible_and_hidden(self):
        """Test replacing the lists."""
        article = Article().set_visible(["title"]).set_hidden(["body"])
        assert article.get_visible() == ["title"]
        assert article.get_hidden() == ["body"]


class TestDates:
    """Tests for date field declarations."""

    def test_declared_dates(self):
        """Test dates come from the class declaration."""
        assert Article().get_dates() == ["published_at"]

    def test_timestamps_add_created_and_updated(self):
        """Test the timestamp mixin adds its columns."""
        assert Event().get_dates() == ["starts_at", "ends_at", "created_at", "updated_at"]


class TestRelations:
    """Tests for relation descriptors."""

    def test_relation_is_unloaded_by_default(self):
        """Test a new model has no materialized relations."""
        article = Article()
        assert article.get_relations() == {}
        assert article.author is None
        assert not article.relation_loaded("author")

    def test_set_relation_through_attribute(self, author):
        """Test assigning the relation attribute materializes it."""
        article = Article()
        article.author = author
        assert article.get_relations() == {"author": author}
        assert article.author is author
        assert article.get_attributes() == {}

    def test_relation_via_constructor(self, author):
        """Test relations can be passed to the constructor."""
        article = Article(title="Hi", author=author)
        assert article.author is author
        assert "author" not in article.get_attributes()

    def test_null_relation_is_loaded(self):
        """Test a relation explicitly set to None counts as loaded."""
        article = Article().set_relation("author", None)
        assert article.relation_loaded("author")
        assert article.get_relations() == {"author": None}

    def test_unset_relation(self, author):
        """Test removing a materialized relation."""
        article = Article(author=author).unset_relation("author")
        assert not article.relation_loaded("author")

    def test_class_access_returns_relation(self):
        """Test the relation itself is reachable from the class."""
        assert isinstance(Article.author, BelongsTo)
        assert Article.author.get_related() is Author

    def test_belongs_to_foreign_key(self):
        """Test BelongsTo defaults to <name>_id."""
        assert Article.author.get_foreign_key() == "author_id"
        assert Article.editor.get_foreign_key() == "editor_ref"

    def test_has_one_foreign_key(self):
        """Test HasOne defaults to <owner>_id."""
        assert Author.article.get_foreign_key() == "author_id"
        assert Author.article.get_related() is Article

    def test_self_reference(self):
        """Test a model may relate to its own class."""
        assert Node.parent.get_related() is Node

    def test_model_foreign_key(self):
        """Test the default foreign key name of a model."""
        assert Author().get_foreign_key() == "author_id"


class TestRegistry:
    """Tests for resolving models by name."""

    def test_resolve_registered_model(self):
        """Test subclasses register themselves by class name."""
        assert resolve_model("Article") is Article

    def test_unknown_model(self):
        """Test an unknown name raises a configuration error."""
        with pytest.raises(ConfigurationError):
            resolve_model("DoesNotExist")

    def test_unknown_related_model(self):
        """Test a relation to an undeclared model fails on resolution."""

        class Orphan(Model):
            owner = BelongsTo("NoSuchOwner")

        with pytest.raises(ConfigurationError):
            Orphan.owner.get_related()

    def test_resolve_qualified_name(self):
        """Test models are also registered under module and qualified name."""
        assert resolve_model(qualified_name(Article)) is Article
        assert resolve_model("tests.models.Article") is Article

    def test_same_name_in_two_places_is_ambiguous(self):
        """Test two different classes sharing a name do not replace each other."""

        def declare():
            class Duplicate(Model):
                pass

            return Duplicate

        class Duplicate(Model):
            pass

        other = declare()

        with pytest.raises(ConfigurationError, match="ambiguous"):
            resolve_model("Duplicate")
        assert resolve_model(qualified_name(Duplicate)) is Duplicate
        assert resolve_model(qualified_name(other)) is other

    def test_relation_to_ambiguous_name_fails(self):
        """Test a string relation target is not silently bound to the latest class."""

        def declare():
            class Writer(Model):
                pass

            return Writer

        class Writer(Model):
            pass

        declare()

        class Essay(Model):
            writer = BelongsTo("Writer")

        with pytest.raises(ConfigurationError):
            Essay.writer.get_related()


class TestDescriptor:
    """Tests for per-class descriptors."""

    def test_kind_of(self):
        """Test field names resolve to their kind."""
        descriptor = describe(Article)
        assert descriptor.kind_of("author") == FieldKind.RELATION
        assert descriptor.kind_of("published_at") == FieldKind.DATE
        assert descriptor.kind_of("title") == FieldKind.ATTRIBUTE

    def test_descriptor_is_cached(self):
        """Test a class is described only once."""
        assert describe(Article) is describe(Article)

    def test_descriptor_contents(self):
        """Test collected relations, mutators and properties."""
        assert set(describe(Article).relations) == {"author", "editor"}
        assert describe(Article).properties == frozenset({"summary"})
        assert describe(Event).set_mutators == frozenset({"ends_at"})
        assert describe(Event).get_mutators == frozenset({"name"})

    def test_subclass_inherits_relations(self):
        """Test relations declared on a parent model are inherited."""

        class FeaturedArticle(Article):
            pass

        assert set(describe(FeaturedArticle).relations) == {"author", "editor"}
        assert FeaturedArticle().get_dates() == ["published_at"]
