"""
Unit tests for the reconstruction pipeline (ocrparagraphs.rebuild).

Pages are 1000px wide at the fallback 72 DPI unless stated otherwise.
Observations are given in left-origin coordinates, as an OCR engine
reports them.
"""

import logging

import pytest

from ocrparagraphs import rebuild
from ocrparagraphs.config import RebuildOptions, TypoOptions
from ocrparagraphs.exceptions import IndexContiguityError
from ocrparagraphs.models import (
    BoundingBox,
    ImageSize,
    IndexedObservation,
    Observation,
    OcrResult,
    Resolution,
)
from ocrparagraphs.rebuild import rebuild_observations, rebuild_paragraphs

PAGE = ImageSize(width=1000, height=1400)


def make_obs(x: float, y: float, width: float, text: str, height: float = 20) -> Observation:
    """Helper to create test observations."""
    return Observation(bbox=BoundingBox(x=x, y=y, width=width, height=height), text=text)


def make_result(observations, **kwargs) -> OcrResult:
    """Helper to create an OcrResult on the test page."""
    return OcrResult(image=PAGE, observations=tuple(observations), **kwargs)


def prose_page() -> list[Observation]:
    """Five lines; the third is short and ends the first paragraph."""
    return [
        make_obs(500, 10, 400, "A"),  # right half of line 1, read first
        make_obs(100, 10, 390, "B"),
        make_obs(100, 40, 800, "C"),
        make_obs(500, 70, 400, "D"),  # short line
        make_obs(100, 100, 800, "E"),
        make_obs(100, 130, 800, "F"),
    ]


def poem_page() -> list[Observation]:
    """Four verse rows of two hemistichs each."""
    observations = []
    for row, y in enumerate((10, 40, 70, 100), start=1):
        observations.append(make_obs(50, y, 400, f"left{row}"))
        observations.append(make_obs(550, y, 400, f"right{row}"))
    return observations


class TestRebuildParagraphs:
    """Tests for the plain-text entry point."""

    def test_empty(self):
        """No fragments, no text."""
        assert rebuild_paragraphs(make_result([])) == ""
        assert rebuild_observations(make_result([])) == []

    def test_prose(self):
        """Lines merge right-to-left; the short line closes the paragraph."""
        assert rebuild_paragraphs(make_result(prose_page())) == "A B C D\nE F"

    def test_poetic_layout_keeps_rows(self):
        """Verse rows are not clustered into paragraphs."""
        expected = "\n".join(f"right{i} left{i}" for i in range(1, 5))
        assert rebuild_paragraphs(make_result(poem_page())) == expected

    def test_default_options(self, default_options):
        """Passing None is the same as default options."""
        result = make_result(prose_page())
        assert rebuild_paragraphs(result, None) == rebuild_paragraphs(result, default_options)


class TestRebuildObservations:
    """Tests for geometry in the output."""

    def test_single_fragment(self):
        """One fragment comes back flipped into RTL coordinates."""
        (paragraph,) = rebuild_observations(make_result([make_obs(100, 10, 300, "only")]))
        assert paragraph.text == "only"
        assert paragraph.bbox == BoundingBox(x=600, y=10, width=300, height=20)

    def test_paragraph_boxes_are_unions(self):
        """Each paragraph box spans its lines."""
        first, second = rebuild_observations(make_result(prose_page()))
        assert first.bbox == BoundingBox(x=100, y=10, width=800, height=80)
        assert second.bbox == BoundingBox(x=100, y=100, width=800, height=50)

    def test_resolution_overrides_fallback(self):
        """A reported DPI widens the line tolerance."""
        observations = [
            make_obs(100, 0, 400, "upper", height=10),  # flipped x = 500
            make_obs(500, 20, 400, "lower", height=10),  # flipped x = 100
        ]
        at_72 = rebuild_paragraphs(make_result(observations))
        at_300 = rebuild_paragraphs(make_result(observations, resolution=Resolution(x=300, y=300)))
        assert at_72 == "upper lower"  # two lines, top to bottom
        assert at_300 == "lower upper"  # one line, right to left

    def test_fallback_dpi_option(self):
        """fallback_dpi applies when the result has no resolution."""
        observations = [
            make_obs(100, 0, 400, "upper", height=10),
            make_obs(500, 20, 400, "lower", height=10),
        ]
        text = rebuild_paragraphs(make_result(observations), RebuildOptions(fallback_dpi=300))
        assert text == "lower upper"


class TestFooter:
    """Tests for footer insertion in the pipeline."""

    def footnote_page(self):
        return [
            make_obs(100, 100, 800, "a"),
            make_obs(100, 130, 800, "b"),
            make_obs(100, 300, 800, "c"),
            make_obs(100, 330, 800, "d"),
        ]

    def rules(self):
        return (
            BoundingBox(x=100, y=50, width=800, height=2),
            BoundingBox(x=300, y=250, width=600, height=2),
        )

    def test_footer_below_lowest_rule(self):
        """The marker goes between body text and footnotes."""
        result = make_result(self.footnote_page(), horizontal_lines=self.rules())
        text = rebuild_paragraphs(result, RebuildOptions(footer_symbol="___"))
        assert text == "a b\n___\nc d"

    def test_footer_box_is_flipped(self):
        """The footer box is in the same RTL coordinates as the text."""
        result = make_result(self.footnote_page(), horizontal_lines=self.rules())
        paragraphs = rebuild_observations(result, RebuildOptions(footer_symbol="___"))
        assert paragraphs[1].bbox == BoundingBox(x=100, y=250, width=600, height=2)

    def test_no_footer_symbol(self):
        """Without a footer symbol nothing is inserted."""
        result = make_result(self.footnote_page(), horizontal_lines=self.rules())
        assert rebuild_paragraphs(result) == "a b\nc d"

    def test_no_horizontal_lines(self):
        """Without rules there is nowhere to put the footer."""
        result = make_result(self.footnote_page())
        assert rebuild_paragraphs(result, RebuildOptions(footer_symbol="___")) == "a b\nc d"


class TestTypoCorrection:
    """Tests for alternate-transcription typo correction in the pipeline."""

    OPTIONS = RebuildOptions(typo=TypoOptions(typo_symbols=("ﷺ",)))

    def test_honorific_restored(self):
        """The reference engine's honorific replaces the garbled words."""
        result = make_result(
            [make_obs(100, 10, 800, "محمد صلى الله عليه وسلم رسول الله")],
            alternate_observations=(make_obs(110, 12, 780, "محمد ﷺ رسول الله"),),
        )
        text = rebuild_paragraphs(result, self.OPTIONS)
        assert "ﷺ" in text
        assert text.startswith("محمد")
        assert text.endswith("رسول الله")

    def test_disabled_without_symbols(self):
        """No typo symbols, no correction."""
        result = make_result(
            [make_obs(100, 10, 800, "محمد صلى الله عليه وسلم")],
            alternate_observations=(make_obs(100, 10, 800, "محمد ﷺ"),),
        )
        assert rebuild_paragraphs(result) == "محمد صلى الله عليه وسلم"

    def test_line_count_mismatch_skips(self, caplog):
        """Misaligned alternates are skipped with a warning."""
        result = make_result(
            [make_obs(100, 10, 800, "محمد صلى الله عليه وسلم")],
            alternate_observations=(
                make_obs(100, 10, 800, "محمد ﷺ"),
                make_obs(100, 200, 800, "زيادة"),
            ),
        )
        with caplog.at_level(logging.WARNING, logger="ocrparagraphs.rebuild"):
            text = rebuild_paragraphs(result, self.OPTIONS)
        assert text == "محمد صلى الله عليه وسلم"
        assert "Skipping typo correction" in caplog.text


class TestIndexChecks:
    """Tests for the opt-in contiguity check."""

    def gapped(self, lines, *args):
        box = lines[0].bbox
        return [
            IndexedObservation(bbox=box, text="x", index=0),
            IndexedObservation(bbox=box, text="y", index=2),
        ]

    def test_clean_page_passes(self):
        """Real clustering output is contiguous."""
        options = RebuildOptions(check_indices=True)
        assert rebuild_paragraphs(make_result(prose_page()), options) == "A B C D\nE F"

    def test_gap_raises_when_enabled(self, monkeypatch):
        """A gap is an error only when the caller opted in."""
        monkeypatch.setattr(rebuild, "index_as_paragraphs", self.gapped)
        with pytest.raises(IndexContiguityError, match=r"missing \[1\]"):
            rebuild_paragraphs(make_result(prose_page()), RebuildOptions(check_indices=True))

    def test_gap_tolerated_by_default(self, monkeypatch):
        """Without the check, the empty group is skipped."""
        monkeypatch.setattr(rebuild, "index_as_paragraphs", self.gapped)
        assert rebuild_paragraphs(make_result(prose_page())) == "x\ny"

    def test_negative_index_reported(self, monkeypatch):
        """Indices below zero are named in the error."""

        def negative(lines, *args):
            box = lines[0].bbox
            return [
                IndexedObservation(bbox=box, text="x", index=-1),
                IndexedObservation(bbox=box, text="y", index=0),
            ]

        monkeypatch.setattr(rebuild, "index_as_paragraphs", negative)
        with pytest.raises(IndexContiguityError, match=r"missing \[\], unexpected \[-1\]"):
            rebuild_paragraphs(make_result(prose_page()), RebuildOptions(check_indices=True))
