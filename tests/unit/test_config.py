"""Tests for ocrparagraphs.config."""

import pytest

from ocrparagraphs.config import RebuildOptions, TypoOptions, load_options
from ocrparagraphs.exceptions import ConfigurationError


class TestTypoOptions:
    """Tests for TypoOptions validation."""

    def test_defaults(self):
        """Default thresholds."""
        options = TypoOptions()
        assert options.typo_symbols == ()
        assert options.similarity_threshold == 0.7
        assert options.high_similarity_threshold == 0.9

    def test_list_symbols_become_tuple(self):
        """Symbol lists are frozen into tuples."""
        options = TypoOptions(typo_symbols=["ﷺ", "ﷻ"])
        assert options.typo_symbols == ("ﷺ", "ﷻ")

    def test_empty_symbol_rejected(self):
        """An empty symbol would match every line."""
        with pytest.raises(ConfigurationError):
            TypoOptions(typo_symbols=("",))

    def test_string_symbol_is_one_symbol(self):
        """A bare string is a single symbol, not a list of characters."""
        options = TypoOptions(typo_symbols="ﷺ ﷻ")
        assert options.typo_symbols == ("ﷺ ﷻ",)

    def test_blank_symbol_rejected(self):
        """A whitespace symbol would match every line with a space."""
        with pytest.raises(ConfigurationError):
            TypoOptions(typo_symbols=("ﷺ", " "))

    def test_string_symbol_from_mapping_keeps_plain_lines(self):
        """A scalar typoSymbols value must not turn unrelated lines into corrections."""
        from ocrparagraphs.models import BoundingBox, Observation
        from ocrparagraphs.text.typos import reconcile

        options = RebuildOptions.from_dict({"typoSymbols": "ﷺ ﷻ"}).typo
        bbox = BoundingBox(x=0, y=0, width=100, height=20)
        primary = [Observation(bbox=bbox, text="قال عمر")]
        reference = [Observation(bbox=bbox, text="قال زيد")]

        (result,) = reconcile(reference, primary, options)
        assert result.text == "قال عمر"

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_threshold_range(self, value):
        """Thresholds must lie in [0, 1]."""
        with pytest.raises(ConfigurationError):
            TypoOptions(similarity_threshold=value, high_similarity_threshold=1.0)

    def test_high_threshold_not_below_threshold(self):
        """The duplicate threshold cannot be looser than the match threshold."""
        with pytest.raises(ConfigurationError, match="high_similarity_threshold"):
            TypoOptions(similarity_threshold=0.8, high_similarity_threshold=0.5)


class TestRebuildOptions:
    """Tests for RebuildOptions validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"fallback_dpi": 0},
            {"standard_dpi_x": -300},
            {"vertical_jump_factor": 0},
            {"pixel_tolerance": -1},
            {"width_tolerance": 1.2},
            {"min_poetic_ratio": -0.5},
            {"poetic_columns": 0},
            {"footer_symbol": ""},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Invalid values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            RebuildOptions(**kwargs)

    def test_configuration_error_is_value_error(self):
        """Callers catching ValueError still see configuration problems."""
        with pytest.raises(ValueError):
            RebuildOptions(width_tolerance=2)

    def test_from_dict_snake_case_nested(self):
        """Nested typo section with snake_case keys."""
        options = RebuildOptions.from_dict(
            {
                "pixel_tolerance": 8,
                "footer_symbol": "___",
                "typo": {"typo_symbols": ["ﷺ"], "similarity_threshold": 0.6},
            }
        )
        assert options.pixel_tolerance == 8
        assert options.footer_symbol == "___"
        assert options.typo.typo_symbols == ("ﷺ",)
        assert options.typo.similarity_threshold == 0.6

    def test_from_dict_camel_case_flat(self):
        """Flat camelCase keys, as used by the JSON option records."""
        options = RebuildOptions.from_dict(
            {
                "fallbackDPI": 96,
                "standardDpiX": 600,
                "verticalJumpFactor": 3,
                "typoSymbols": ["ﷺ"],
                "highSimilarityThreshold": 0.95,
            }
        )
        assert options.fallback_dpi == 96
        assert options.standard_dpi_x == 600
        assert options.vertical_jump_factor == 3
        assert options.typo.typo_symbols == ("ﷺ",)
        assert options.typo.high_similarity_threshold == 0.95

    def test_from_dict_unknown_key(self):
        """Typos in option names are reported, not ignored."""
        with pytest.raises(ConfigurationError, match="pixel_tolerence"):
            RebuildOptions.from_dict({"pixel_tolerence": 5})

    def test_from_dict_typo_section_must_be_mapping(self):
        """A list under typo is a configuration error, not an AttributeError."""
        with pytest.raises(ConfigurationError, match="typo section must be a mapping"):
            RebuildOptions.from_dict({"typo": ["ﷺ"]})


class TestLoadOptions:
    """Tests for load_options."""

    def test_load_yaml(self, tmp_path):
        """Options load from a YAML file."""
        path = tmp_path / "options.yaml"
        path.write_text(
            "fallback_dpi: 300\n"
            "footer_symbol: '_'\n"
            "typo:\n"
            "  typo_symbols: ['ﷺ']\n",
            encoding="utf-8",
        )
        options = load_options(path)
        assert options.fallback_dpi == 300
        assert options.footer_symbol == "_"
        assert options.typo.typo_symbols == ("ﷺ",)

    def test_empty_file_gives_defaults(self, tmp_path):
        """An empty file means all defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_options(path) == RebuildOptions()

    def test_non_mapping_rejected(self, tmp_path):
        """Top-level YAML must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_options(path)

    def test_file_not_found(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_options(tmp_path / "missing.yaml")

    def test_load_fixture_file(self, fixtures_dir):
        """camelCase keys and flat typo keys load from a checked-in file."""
        options = load_options(fixtures_dir / "options" / "arabic_book.yaml")
        assert options.fallback_dpi == 300
        assert options.footer_symbol == "___"
        assert options.width_tolerance == 0.8
        assert options.typo.typo_symbols == ("ﷺ", "ﷻ")
        assert options.typo.similarity_threshold == 0.75
        assert options.typo.high_similarity_threshold == 0.9
