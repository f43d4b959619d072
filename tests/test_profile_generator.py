"""
End-to-end tests for calculate_ite and the JSON profile output.
"""
import json

import pytest

from conftest import make_records
from nof1_engine.data_prep.variable_catalog import ANALYZED_OUTCOMES
from nof1_engine.output.profile_generator import ProfileResult, calculate_ite, save_profile_json
from nof1_engine.output.ranking import effect_score
from nof1_engine.safety.guards import InsufficientDataError


class TestCalculateIte:
    """Test profile assembly."""

    def test_linear_profile(self, linear_records):
        profile = calculate_ite(linear_records, seed=1)

        assert len(profile.ite_results) == 1
        assert set(profile.top_nutrients_for_outcome) == set(ANALYZED_OUTCOMES)
        assert [r.nutrient for r in profile.top_nutrients_for_outcome["deep_sleep_min"]] == ["omega3_g"]
        for key in ANALYZED_OUTCOMES:
            if key != "deep_sleep_min":
                assert profile.top_nutrients_for_outcome[key] == []

        assert profile.personal_summary == (
            "Your 3-day N-of-1 data analysis:\n"
            "✅ Beneficial nutrients: Omega-3 fatty acids (ITE: +1.63)\n"
            "⚠️ Nutrients to watch: none detected"
        )

    def test_ranked_by_score(self, noisy_records):
        profile = calculate_ite(noisy_records, seed=1)
        scores = [effect_score(r) for r in profile.ite_results]
        assert scores == sorted(scores, reverse=True)

    def test_top_lists_are_ranked_subsequences(self, noisy_records):
        profile = calculate_ite(noisy_records, seed=1)
        for outcome, items in profile.top_nutrients_for_outcome.items():
            assert len(items) <= 5
            assert items == [r for r in profile.ite_results if r.outcome == outcome][:5]

    def test_summary_headlines(self, noisy_records):
        profile = calculate_ite(noisy_records, seed=1)
        lines = profile.personal_summary.splitlines()
        assert lines[0] == "Your 14-day N-of-1 data analysis:"
        assert "Caffeine (ITE: -" in lines[2]
        assert lines[1].count("(ITE: +") <= 3
        assert lines[2].count("(ITE: -") <= 2

    def test_deterministic_with_seed(self, noisy_records):
        assert calculate_ite(noisy_records, seed=9).to_dict() == calculate_ite(noisy_records, seed=9).to_dict()

    def test_insufficient_data(self):
        with pytest.raises(InsufficientDataError):
            calculate_ite(make_records(2))

    def test_custom_outcome_subset(self, noisy_records):
        profile = calculate_ite(noisy_records, outcome_keys=["hrv_ms"], seed=0)
        assert list(profile.top_nutrients_for_outcome) == ["hrv_ms"]
        assert all(r.outcome == "hrv_ms" for r in profile.ite_results)


class TestProfileSerialization:
    """Test dict and JSON output."""

    def test_to_dict_field_names(self, linear_records):
        data = calculate_ite(linear_records, seed=1).to_dict()
        assert set(data) == {"ite_results", "top_nutrients_for_outcome", "personal_summary"}
        assert set(data["ite_results"][0]) == {
            "nutrient", "nutrient_label", "unit", "outcome", "outcome_label",
            "ite_value", "ate_value", "direction", "confidence", "causal_path",
        }

    def test_save_profile_json(self, linear_records, tmp_path):
        profile = calculate_ite(linear_records, seed=1)
        path = save_profile_json(profile, tmp_path / "nested" / "profile.json")

        assert path.exists()
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data == json.loads(json.dumps(profile.to_dict()))
        assert "✅" in path.read_text(encoding="utf-8")

    def test_save_bundle_dict(self, tmp_path):
        path = save_profile_json({"profile": {"ite_results": []}}, tmp_path / "bundle.json")
        assert json.loads(path.read_text(encoding="utf-8")) == {"profile": {"ite_results": []}}

    def test_empty_profile(self, tmp_path):
        profile = ProfileResult(ite_results=[], top_nutrients_for_outcome={}, personal_summary="")
        path = save_profile_json(profile, tmp_path / "empty.json")
        assert json.loads(path.read_text(encoding="utf-8"))["ite_results"] == []

    def test_saved_values_are_plain_json(self, noisy_records, tmp_path):
        profile = calculate_ite(noisy_records, seed=2)
        path = save_profile_json(profile, tmp_path / "profile.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        for item in data["ite_results"]:
            assert isinstance(item["ite_value"], float)
            assert isinstance(item["confidence"], float)
