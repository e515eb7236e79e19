"""Tests for FeatureSet membership."""

from apienvelope.domain.features import FeatureSet
from apienvelope.domain.types import Feature


class TestFeatureSet:
    def test_empty(self) -> None:
        features = FeatureSet()
        assert len(features) == 0
        assert list(features) == []
        assert features.has(Feature.LEGACY_DATA_RESPONSE) is False
        assert features.legacy_data_response is False

    def test_declared_legacy_feature(self) -> None:
        features = FeatureSet(["dataWrapper"])
        assert features.has(Feature.LEGACY_DATA_RESPONSE) is True
        assert features.legacy_data_response is True
        assert Feature.LEGACY_DATA_RESPONSE in features

    def test_match_is_case_sensitive(self) -> None:
        features = FeatureSet(["DataWrapper", "datawrapper"])
        assert features.has(Feature.LEGACY_DATA_RESPONSE) is False

    def test_unknown_tags_are_kept_in_order(self) -> None:
        features = FeatureSet(["feature2", "feature1"])
        assert features.tags == ("feature2", "feature1")
        assert features.has("feature1") is True
        assert features.has("feature3") is False

    def test_non_string_membership(self) -> None:
        assert 1 not in FeatureSet(["1"])

    def test_equality(self) -> None:
        assert FeatureSet(["a"]) == FeatureSet(["a"])
        assert FeatureSet(["a", "b"]) != FeatureSet(["b", "a"])
