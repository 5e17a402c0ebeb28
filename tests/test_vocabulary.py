"""
Vocabulary registry tests

Tests type lookups, inherited properties, property kinds, and loading
vocabulary files.
"""

import pytest
from pathlib import Path

from structdata.lib.vocabulary import VocabularyRegistry, VocabularyError, vocabulary_default
from structdata.models.directives import PropertyKind


@pytest.fixture
def vocabulary():
    return vocabulary_default()


class TestTypes:
    """Test type lookups"""

    def test_root_type(self, vocabulary):
        """Thing is the root and has no parent"""
        assert vocabulary.root_type == "Thing"
        assert vocabulary.parent_get("Thing") is None

    def test_known_types(self, vocabulary):
        """Common types are registered"""
        for name in ("Thing", "Article", "Person", "Organization", "Event", "Language"):
            assert vocabulary.type_has(name)

    def test_unknown_type(self, vocabulary):
        """Unknown names and None are not types"""
        assert not vocabulary.type_has("TypeDoesNotExist")
        assert not vocabulary.type_has(None)

    def test_type_resolve_falls_back_to_root(self, vocabulary):
        """Unknown names resolve to Thing"""
        assert vocabulary.type_resolve("Article") == "Article"
        assert vocabulary.type_resolve("TypeDoesNotExist") == "Thing"
        assert vocabulary.type_resolve(None) == "Thing"

    def test_lineage(self, vocabulary):
        """Lineage runs from the type up to Thing"""
        assert vocabulary.lineage_get("BlogPosting") == [
            "BlogPosting", "SocialMediaPosting", "Article", "CreativeWork", "Thing"
        ]

    def test_every_type_reaches_root(self, vocabulary):
        """No bundled type is detached from Thing"""
        for name in vocabulary.types_list():
            assert vocabulary.lineage_get(name)[-1] == "Thing"


class TestProperties:
    """Test property validity and kinds"""

    def test_own_property(self, vocabulary):
        """Properties declared on the type itself"""
        assert vocabulary.property_has("Article", "articleBody")

    def test_inherited_property(self, vocabulary):
        """Properties inherited from ancestors"""
        assert vocabulary.property_has("Article", "author")
        assert vocabulary.property_has("Article", "url")

    def test_invalid_property(self, vocabulary):
        """Unknown pairs are invalid"""
        assert not vocabulary.property_has("Thing", "articleBody")
        assert not vocabulary.property_has("Article", "propertyDoesNotExist")
        assert not vocabulary.property_has("TypeDoesNotExist", "name")
        assert not vocabulary.property_has("Article", None)

    def test_expected_types(self, vocabulary):
        """Expected types in preference order"""
        assert vocabulary.expectedTypes_get("Article", "author") == ["Organization", "Person"]
        assert vocabulary.expectedTypes_get("Article", "propertyDoesNotExist") == []

    @pytest.mark.parametrize("type_name, property_name, kind", [
        ("Article", "url", PropertyKind.TEXT),
        ("Article", "name", PropertyKind.TEXT),
        ("Article", "wordCount", PropertyKind.TEXT),
        ("Article", "datePublished", PropertyKind.META),
        ("Event", "doorTime", PropertyKind.META),
        ("Article", "interactionCount", PropertyKind.META),
        ("Article", "author", PropertyKind.NESTED),
        ("Article", "about", PropertyKind.NESTED),
    ])
    def test_property_kind(self, vocabulary, type_name, property_name, kind):
        """Kinds follow the first expected type"""
        assert vocabulary.propertyKind_get(type_name, property_name) is kind

    def test_nested_type(self, vocabulary):
        """Only nested properties have a nested type"""
        assert vocabulary.nestedType_get("Article", "author") == "Organization"
        assert vocabulary.nestedType_get("Article", "url") is None


class TestLoading:
    """Test building registries from files"""

    def test_custom_file(self, tmp_path):
        """A custom YAML file builds a registry"""
        vocabulary_file = tmp_path / "vocabulary.yaml"
        vocabulary_file.write_text(
            "Thing:\n"
            "  extends: null\n"
            "  properties:\n"
            "    name: [Text]\n"
            "Recipe:\n"
            "  extends: Thing\n"
            "  properties:\n"
            "    cookTime: [DateTime]\n"
        )
        vocabulary = VocabularyRegistry.from_file(vocabulary_file)

        assert vocabulary.types_list() == ["Recipe", "Thing"]
        assert vocabulary.property_has("Recipe", "name")
        assert vocabulary.propertyKind_get("Recipe", "cookTime") is PropertyKind.META

    def test_missing_file(self, tmp_path):
        """Missing files raise VocabularyError"""
        with pytest.raises(VocabularyError, match="not found"):
            VocabularyRegistry.from_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Unparseable YAML raises VocabularyError"""
        vocabulary_file = tmp_path / "broken.yaml"
        vocabulary_file.write_text("Thing: [unclosed\n")
        with pytest.raises(VocabularyError, match="Failed to parse"):
            VocabularyRegistry.from_file(vocabulary_file)

    def test_not_a_mapping(self, tmp_path):
        """A YAML list is rejected"""
        vocabulary_file = tmp_path / "list.yaml"
        vocabulary_file.write_text("- Thing\n- Article\n")
        with pytest.raises(VocabularyError, match="must map"):
            VocabularyRegistry.from_file(vocabulary_file)

    def test_missing_root(self):
        """A vocabulary without Thing is rejected"""
        with pytest.raises(VocabularyError, match="Root type"):
            VocabularyRegistry({"Article": {"extends": "CreativeWork"}})

    def test_unknown_parent(self):
        """Parents must be registered types"""
        with pytest.raises(VocabularyError, match="unknown type"):
            VocabularyRegistry({"Thing": {}, "Article": {"extends": "CreativeWork"}})

    def test_bundled_file(self):
        """The bundled file loads directly"""
        bundled = Path(__file__).parent.parent / "src" / "vocab" / "schema.yaml"
        assert VocabularyRegistry.from_file(bundled).type_has("Article")
