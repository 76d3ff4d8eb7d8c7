"""Data models for the analysis pipeline."""

import mimetypes
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Generic, Literal, TypeVar

from PIL import Image

from skin_tone_analyzer.config import MAX_UPLOAD_BYTES
from skin_tone_analyzer.errors import InvalidInput

T = TypeVar("T")


@dataclass(frozen=True)
class SourceImage:
    """An accepted upload: raw bytes plus declared MIME type."""

    data: bytes = field(repr=False)
    content_type: str
    filename: str = "upload"

    def __post_init__(self) -> None:
        if not self.content_type.startswith("image/"):
            raise InvalidInput("Please select a valid image file.")
        if not self.data:
            raise InvalidInput("Image file is empty.")
        if self.size > MAX_UPLOAD_BYTES:
            raise InvalidInput("Image size exceeds 5MB limit.")

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "SourceImage":
        """Read an image file from disk, guessing the MIME type from its name."""
        path = Path(path)
        content_type = content_type or mimetypes.guess_type(path.name)[0] or ""
        if not content_type.startswith("image/"):
            raise InvalidInput("Please select a valid image file.")
        if path.stat().st_size > MAX_UPLOAD_BYTES:
            raise InvalidInput("Image size exceeds 5MB limit.")
        return cls(data=path.read_bytes(), content_type=content_type, filename=path.name)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in source-image pixel coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    def as_box(self) -> tuple[float, float, float, float]:
        """Return (left, top, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class FaceDetection:
    """A single candidate face as reported by a face locator."""

    box: Any  # Rect, mapping or (x1, y1, x2, y2); see normalize_box
    score: float


class ToneGroup(StrEnum):
    LIGHT = "light"
    LIGHT_MEDIUM = "light medium"
    MEDIUM = "medium"
    MEDIUM_DEEP = "medium deep"
    DEEP = "deep"


@dataclass(frozen=True)
class ColorSwatch:
    name: str
    hex: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "hex": self.hex}


@dataclass(frozen=True)
class RecommendationBundle:
    """Colours to wear and to avoid for one tone group."""

    recommended: tuple[ColorSwatch, ...]
    avoid: tuple[ColorSwatch, ...]

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {
            "recommended": [c.to_dict() for c in self.recommended],
            "avoid": [c.to_dict() for c in self.avoid],
        }


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a best-effort step: ok, degraded (expected miss) or failed (error)."""

    status: Literal["ok", "degraded", "failed"]
    value: T | None = None
    reason: str | None = None

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls("ok", value=value)

    @classmethod
    def degraded(cls, reason: str) -> "Outcome[T]":
        return cls("degraded", reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "Outcome[T]":
        return cls("failed", reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of one analysis request before URLs are attached."""

    raw_label: str
    adjusted_label: str
    confidence: float  # [0, 1]
    luminance: float  # [0, 255]
    face_detected: bool
    tone_group: ToneGroup
    recommendations: RecommendationBundle

    @property
    def mst_index(self) -> int:
        """Zero-based position of the adjusted label on the MST scale."""
        return int(self.adjusted_label.removeprefix("MST")) - 1


@dataclass(frozen=True)
class AnalysisReport:
    """The record handed to the CLI / UI layer."""

    result: ClassificationResult
    mst_color: str
    image_url: str = field(repr=False)
    processed_image_url: str = field(repr=False)
    processed_image: Image.Image | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "prediction": self.result.adjusted_label,
            "confidence": self.result.confidence * 100,
            "mstColor": self.mst_color,
            "mstIndex": self.result.mst_index,
            "imageUrl": self.image_url,
            "processedImageUrl": self.processed_image_url,
            "faceDetected": self.result.face_detected,
            "skinToneGroup": str(self.result.tone_group),
            "recommendations": self.result.recommendations.to_dict(),
        }
