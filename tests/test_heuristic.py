"""Tests for the metadata keyword heuristic."""

from conftest import tag

from photometa.detectors import AI_KEYWORDS, classify
from photometa.detectors.heuristic import (
    AI_METADATA_INDICATOR,
    GENERATION_PARAMETERS_INDICATOR,
)


class TestClassify:
    """Test classify()."""

    def test_empty_metadata(self):
        verdict = classify({})
        assert verdict.is_ai is False
        assert verdict.indicators == []

    def test_unrecognized_fields_ignored(self):
        metadata = {
            "Make": tag("Canon"),
            "Model": tag("Canon EOS R5 with AI autofocus"),
            "Copyright": tag("OpenAI"),
        }
        verdict = classify(metadata)
        assert verdict.is_ai is False
        assert verdict.indicators == []

    def test_software_midjourney(self):
        verdict = classify({"Software": tag("Midjourney v5")})
        assert verdict.is_ai is True
        assert verdict.indicators == ["Software: Midjourney v5"]

    def test_one_entry_per_matching_keyword(self):
        """'ai' and 'generated' both match, so the field is reported twice."""
        verdict = classify({"ImageDescription": tag("AI generated art")})
        assert verdict.indicators == [
            "Description: AI generated art",
            "Description: AI generated art",
        ]

    def test_prompt_and_parameters_report_both_indicators(self):
        verdict = classify({"prompt": "a cat", "parameters": "Steps: 20"})
        assert GENERATION_PARAMETERS_INDICATOR in verdict.indicators
        assert AI_METADATA_INDICATOR in verdict.indicators
        assert len(verdict.indicators) == 2

    def test_dream_only(self):
        verdict = classify({"Dream": tag("a castle -s50")})
        assert verdict.indicators == [GENERATION_PARAMETERS_INDICATOR]

    def test_sd_metadata_only(self):
        verdict = classify({"sd-metadata": '{"model": "stable diffusion"}'})
        assert verdict.indicators == [AI_METADATA_INDICATOR]

    def test_indicator_order(self):
        metadata = {
            "ImageDescription": tag("Craiyon output"),
            "prompt": "a cat",
            "UserComment": tag("neural render"),
            "Artist": tag("OpenAI"),
            "Software": tag("Midjourney"),
        }
        verdict = classify(metadata)
        assert verdict.indicators == [
            "Software: Midjourney",
            "Artist: OpenAI",
            "Artist: OpenAI",
            "Comment: neural render",
            GENERATION_PARAMETERS_INDICATOR,
            "Description: Craiyon output",
            "Description: Craiyon output",
            AI_METADATA_INDICATOR,
        ]

    def test_substring_matching_short_keywords(self):
        """Short keywords match inside unrelated words."""
        assert classify({"Artist": tag("Morgan")}).indicators == ["Artist: Morgan"]
        assert classify({"Software": tag("Paint.NET")}).indicators == ["Software: Paint.NET"]

    def test_case_insensitive_and_original_text_quoted(self):
        verdict = classify({"Software": tag("ADOBE FIREFLY")})
        # "firefly" and "adobe firefly"
        assert verdict.indicators == ["Software: ADOBE FIREFLY"] * 2

    def test_empty_description_ignored(self):
        verdict = classify({"Software": tag(""), "prompt": ""})
        assert verdict.is_ai is False

    def test_dict_tag_values(self):
        verdict = classify({"Software": {"description": "DALL-E 3", "value": "DALL-E 3"}})
        assert verdict.indicators == ["Software: DALL-E 3"]

    def test_raw_string_field_has_no_description(self):
        verdict = classify({"Software": "Midjourney"})
        assert verdict.indicators == []

    def test_is_ai_matches_indicators(self):
        samples = [
            {},
            {"Software": tag("GIMP 2.10")},
            {"Artist": tag("Bing Image Creator")},
            {"parameters": "x"},
            {"UserComment": tag("Screenshot")},
        ]
        for metadata in samples:
            verdict = classify(metadata)
            assert verdict.is_ai == (len(verdict.indicators) > 0)

    def test_keyword_list(self):
        assert AI_KEYWORDS[0] == "midjourney"
        assert "bluewillow" in AI_KEYWORDS
        assert len(AI_KEYWORDS) == 19
