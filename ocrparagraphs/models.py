"""
Data models for ocrparagraphs.

These models carry OCR fragments through every reconstruction stage.
All of them are immutable value objects: each stage derives new
instances instead of rewriting the ones it was given.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

# =============================================================================
# GEOMETRY
# =============================================================================


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned rectangle in device pixels of the source image.

    (x, y) is the top-left corner. After RTL normalization x is measured
    from the right edge of the page instead of the left.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"BoundingBox dimensions must be non-negative, "
                f"got width={self.width}, height={self.height}"
            )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        """Return the (x, y) center point."""
        return self.x + self.width / 2, self.y + self.height / 2

    def with_x(self, x: float) -> BoundingBox:
        return replace(self, x=x)

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return the smallest box containing both boxes."""
        return union_all((self, other))

    def overlaps(self, other: BoundingBox) -> bool:
        """Return True if the two boxes share a region of positive area."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    @classmethod
    def from_corners(cls, corners: Sequence[float]) -> BoundingBox:
        """Build a box from an [x1, y1, x2, y2] sequence."""
        x1, y1, x2, y2 = corners
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

    @classmethod
    def from_value(cls, value: Mapping[str, Any] | Sequence[float]) -> BoundingBox:
        """Build a box from a {x, y, width, height} mapping or a corner sequence."""
        if isinstance(value, Mapping):
            return cls(
                x=value["x"],
                y=value["y"],
                width=value["width"],
                height=value["height"],
            )
        return cls.from_corners(value)


def union_all(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """Return the union of a non-empty collection of boxes."""
    boxes = list(boxes)
    if not boxes:
        raise ValueError("Cannot compute the union of zero bounding boxes")

    min_x = min(b.x for b in boxes)
    min_y = min(b.y for b in boxes)
    max_x = max(b.right for b in boxes)
    max_y = max(b.bottom for b in boxes)

    return BoundingBox(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


# =============================================================================
# OBSERVATIONS
# =============================================================================


@dataclass(frozen=True)
class Observation:
    """An OCR-detected text fragment with its bounding box."""

    bbox: BoundingBox
    text: str

    def with_text(self, text: str) -> Observation:
        return replace(self, text=text)

    def with_bbox(self, bbox: BoundingBox) -> Observation:
        return replace(self, bbox=bbox)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Observation:
        return cls(bbox=BoundingBox.from_value(data["bbox"]), text=data.get("text", ""))


@dataclass(frozen=True)
class IndexedObservation(Observation):
    """
    Observation tagged with the line or paragraph it belongs to.

    The tag is transient: it only lives between a clustering stage and
    the grouping stage that consumes it.
    """

    index: int = 0

    def to_observation(self) -> Observation:
        return Observation(bbox=self.bbox, text=self.text)


# =============================================================================
# OCR RESULT
# =============================================================================


@dataclass(frozen=True)
class ImageSize:
    """Pixel dimensions of the scanned page."""

    width: float
    height: float


@dataclass(frozen=True)
class Resolution:
    """Scan resolution in dots per inch. None means unknown."""

    x: float | None = None
    y: float | None = None


@dataclass(frozen=True)
class OcrResult:
    """
    Everything known about one scanned page.

    Attributes:
        image: Pixel dimensions of the page.
        observations: Primary OCR fragments.
        resolution: Scan DPI; missing axes fall back to RebuildOptions.fallback_dpi.
        horizontal_lines: Detected horizontal rules (footnote separators).
        alternate_observations: Second OCR pass used only for typo correction.
        rectangles: Detected framed regions, carried through for callers.
    """

    image: ImageSize
    observations: tuple[Observation, ...]
    resolution: Resolution = field(default_factory=Resolution)
    horizontal_lines: tuple[BoundingBox, ...] = ()
    alternate_observations: tuple[Observation, ...] | None = None
    rectangles: tuple[BoundingBox, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OcrResult:
        """
        Build an OcrResult from a plain mapping (parsed JSON or YAML).

        Accepts the split shape::

            {"image": {"width": 1200, "height": 1800},
             "resolution": {"x": 300, "y": 300}, ...}

        and the legacy shape where a single ``dpi`` box holds the image size
        in width/height and the DPI in x/y::

            {"dpi": {"width": 1200, "height": 1800, "x": 300, "y": 300}, ...}
        """
        if "image" in data:
            image = ImageSize(width=data["image"]["width"], height=data["image"]["height"])
            res = data.get("resolution") or {}
            resolution = Resolution(x=res.get("x"), y=res.get("y"))
        elif "dpi" in data:
            dpi = data["dpi"]
            image = ImageSize(width=dpi["width"], height=dpi["height"])
            resolution = Resolution(x=dpi.get("x"), y=dpi.get("y"))
        else:
            raise KeyError("OcrResult mapping needs either an 'image' or a 'dpi' entry")

        alternates = _first_present(data, "alternate_observations", "alternateObservations")
        horizontal = _first_present(data, "horizontal_lines", "horizontalLines") or []

        return cls(
            image=image,
            observations=tuple(Observation.from_dict(o) for o in data.get("observations", [])),
            resolution=resolution,
            horizontal_lines=tuple(BoundingBox.from_value(b) for b in horizontal),
            alternate_observations=(
                tuple(Observation.from_dict(o) for o in alternates)
                if alternates is not None
                else None
            ),
            rectangles=tuple(BoundingBox.from_value(b) for b in data.get("rectangles") or []),
        )


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None
