"""Category taxonomy and provider mapping tests"""

import pytest

from localpress.models.category import (
    CATEGORY_BY_KEY,
    CATEGORY_CONFIGS,
    CATEGORY_KEYS,
    CategoryTag,
    DEFAULT_CATEGORY,
    get_category_config,
)
from localpress.normalizer.category_mapper import CATEGORY_MAPPING, first_category, map_category


class TestTaxonomy:

    def test_fixed_six_categories(self):
        assert CATEGORY_KEYS == ("local", "politics", "business", "sports", "weather", "community")

    def test_every_config_has_label_style_and_description(self):
        for config in CATEGORY_CONFIGS:
            assert config.value
            assert config.color == f"news-{config.key}"
            assert config.description

    def test_lookup(self):
        assert get_category_config("weather").value == "Weather"
        assert get_category_config("unknown") is None

    def test_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_BY_KEY["new"] = CATEGORY_CONFIGS[0]

    def test_default_is_local_news(self):
        assert DEFAULT_CATEGORY == CategoryTag("local", "Local News")

    def test_tag_from_cms_dict(self):
        assert CategoryTag.from_dict({"key": "sports", "value": "Sports"}) == CategoryTag("sports", "Sports")
        assert CategoryTag.from_dict({"key": "nope"}) == DEFAULT_CATEGORY
        assert CategoryTag.from_dict(None) == DEFAULT_CATEGORY


class TestMapCategory:

    @pytest.mark.parametrize("tag, key, label", [
        ("politics", "politics", "Politics"),
        ("business", "business", "Business"),
        ("sports", "sports", "Sports"),
        ("domestic", "local", "Local News"),
        ("other", "community", "Community"),
        ("environment", "community", "Community"),
        ("health", "community", "Community"),
        ("science", "community", "Community"),
        ("technology", "business", "Business"),
    ])
    def test_mapping_table(self, tag, key, label):
        assert map_category([tag]) == CategoryTag(key, label)

    @pytest.mark.parametrize("tags", [None, [], ["entertainment"], ["top"], [""]])
    def test_missing_or_unmapped_falls_back_to_local(self, tags):
        assert map_category(tags) == DEFAULT_CATEGORY

    def test_only_first_tag_counts(self):
        assert map_category(["entertainment", "politics"]) == DEFAULT_CATEGORY
        assert map_category(["sports", "politics"]).key == "sports"

    def test_plain_string(self):
        assert map_category("business").key == "business"

    def test_case_and_whitespace_ignored(self):
        assert map_category([" Politics "]).key == "politics"

    def test_table_targets_are_known_keys(self):
        assert set(CATEGORY_MAPPING.values()) <= set(CATEGORY_KEYS)

    def test_first_category(self):
        assert first_category(("a", "b")) == "a"
        assert first_category(None) is None

    @pytest.mark.parametrize("tags", [5, 3.2, {"politics": 1}, {"politics"}, [5], [None], (), True])
    def test_malformed_tags_fall_back_to_local(self, tags):
        assert first_category(tags) is None
        assert map_category(tags) == DEFAULT_CATEGORY
