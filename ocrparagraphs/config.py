"""
Configuration for paragraph reconstruction.

Every tuning knob lives on an explicit options object that is threaded
through each call. Nothing is read from module-level state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from ocrparagraphs.exceptions import ConfigurationError


@dataclass(frozen=True)
class TypoOptions:
    """
    Configuration for cross-engine typo correction.

    Correction only runs for lines whose reference transcription contains
    one of the typo symbols, so an empty ``typo_symbols`` disables it.

    Example:
        >>> options = RebuildOptions(
        ...     typo=TypoOptions(typo_symbols=("ﷺ",), similarity_threshold=0.7)
        ... )
    """

    # Glyphs (e.g. honorifics) that anchor correction and win token selection
    typo_symbols: tuple[str, ...] = ()

    # Minimum normalized similarity for a soft match during alignment
    similarity_threshold: float = 0.7

    # Minimum normalized similarity for two adjacent tokens to count as a duplicate
    high_similarity_threshold: float = 0.9

    def __post_init__(self):
        """Validate configuration."""
        # Lists coming from YAML are frozen into tuples; a bare string is one symbol
        symbols = self.typo_symbols
        if isinstance(symbols, str):
            symbols = (symbols,)
        object.__setattr__(self, "typo_symbols", tuple(symbols))

        if any(not isinstance(s, str) or not s.strip() for s in self.typo_symbols):
            raise ConfigurationError("typo_symbols must be non-blank strings")
        _check_ratio("similarity_threshold", self.similarity_threshold)
        _check_ratio("high_similarity_threshold", self.high_similarity_threshold)
        if self.high_similarity_threshold < self.similarity_threshold:
            raise ConfigurationError(
                f"high_similarity_threshold ({self.high_similarity_threshold}) must not be "
                f"below similarity_threshold ({self.similarity_threshold})"
            )


@dataclass(frozen=True)
class RebuildOptions:
    """
    Configuration for paragraph reconstruction.

    All options have sensible defaults. Create options only
    if you need to customize behavior.

    Example:
        >>> options = RebuildOptions(footer_symbol="___", pixel_tolerance=8)
        >>> text = rebuild_paragraphs(result, options)
    """

    # DPI used when the OCR result does not report one
    fallback_dpi: float = 72

    # Text of the marker inserted below the lowest horizontal rule (None disables)
    footer_symbol: str | None = None

    # Vertical slack for line clustering, in pixels at 72 DPI
    pixel_tolerance: float = 5

    # DPI at which the 5px x-snapping threshold is defined
    standard_dpi_x: float = 300

    # A gap this many times the previous gap starts a new paragraph
    vertical_jump_factor: float = 2

    # Lines narrower than this fraction of the widest line end a paragraph
    width_tolerance: float = 0.85

    # Cross-engine typo correction
    typo: TypoOptions = field(default_factory=TypoOptions)

    # Poetic layout detection
    poetic_columns: int = 2
    min_poetic_ratio: float = 0.6

    # Development aid: raise IndexContiguityError when clustering leaves gaps
    check_indices: bool = False

    def __post_init__(self):
        """Validate configuration."""
        for name in ("fallback_dpi", "standard_dpi_x", "vertical_jump_factor"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if self.pixel_tolerance < 0:
            raise ConfigurationError(
                f"pixel_tolerance must be >= 0, got {self.pixel_tolerance}"
            )
        _check_ratio("width_tolerance", self.width_tolerance)
        _check_ratio("min_poetic_ratio", self.min_poetic_ratio)
        if self.poetic_columns < 1:
            raise ConfigurationError(f"poetic_columns must be >= 1, got {self.poetic_columns}")
        if self.footer_symbol == "":
            raise ConfigurationError("footer_symbol must be None or a non-empty string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RebuildOptions:
        """
        Build options from a plain mapping.

        Keys may be snake_case or camelCase. Typo options may be given in a
        nested ``typo`` section or inline at the top level.

        Raises:
            ConfigurationError: If the mapping has unknown keys or invalid values.
        """
        data = {_snake_case(k): v for k, v in data.items()}

        typo_section = data.pop("typo", None) or {}
        if not isinstance(typo_section, Mapping):
            raise ConfigurationError(
                f"typo section must be a mapping, got {type(typo_section).__name__}"
            )
        typo_data = {_snake_case(k): v for k, v in typo_section.items()}
        typo_names = {f.name for f in fields(TypoOptions)}
        for name in typo_names & data.keys():
            typo_data[name] = data.pop(name)

        rebuild_names = {f.name for f in fields(cls)} - {"typo"}
        unknown = (data.keys() - rebuild_names) | (typo_data.keys() - typo_names)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        return cls(typo=TypoOptions(**typo_data), **data)


def load_options(path: str | Path) -> RebuildOptions:
    """Load RebuildOptions from a YAML file.

    Args:
        path: Path to a YAML mapping of option names to values

    Returns:
        Validated RebuildOptions

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the YAML is malformed
        ConfigurationError: If the options are invalid
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")

    return RebuildOptions.from_dict(data)


def _check_ratio(name: str, value: float) -> None:
    if value < 0.0 or value > 1.0:
        raise ConfigurationError(f"{name} must be between 0.0 and 1.0, got {value}")


def _snake_case(key: str) -> str:
    # fallbackDPI -> fallback_dpi, standardDpiX -> standard_dpi_x
    out: list[str] = []
    for i, ch in enumerate(key):
        if ch.isupper() and i > 0 and (key[i - 1].islower() or key[i - 1].isdigit()):
            out.append("_")
        out.append(ch.lower())
    return "".join(out)
