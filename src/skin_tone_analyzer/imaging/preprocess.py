"""Turn an uploaded photo into classifier input.

Decode, locate a face (best effort), crop to the padded face box or the full frame,
resize to the model resolution, and measure the brightness of the resized crop.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Protocol

import numpy as np
import torch
from PIL import Image, ImageOps

from skin_tone_analyzer.config import (
    FACE_PADDING_RATIO,
    MODEL_INPUT_SIZE,
    PROCESSED_JPEG_QUALITY,
)
from skin_tone_analyzer.errors import DecodeFailure
from skin_tone_analyzer.imaging.luminance import luminance
from skin_tone_analyzer.models import FaceDetection, Outcome, Rect, SourceImage
from skin_tone_analyzer.runtime import NormalizedTensor

logger = logging.getLogger(__name__)


class FaceLocator(Protocol):
    """Anything that finds candidate faces in an RGB pixel array, best first."""

    def detect(self, pixels: np.ndarray) -> list[FaceDetection]: ...


@dataclass
class PreparedImage:
    """Everything the classifier step needs from one upload."""

    tensor: NormalizedTensor
    processed_image: Image.Image
    luminance: float
    face_detected: bool
    crop_region: Rect
    detection: Outcome[Rect]


def decode_image(source: SourceImage) -> Image.Image:
    """Decode the upload into an RGB image at native resolution, honouring EXIF rotation."""
    try:
        image = Image.open(BytesIO(source.data))
        return ImageOps.exif_transpose(image).convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeFailure(f"Failed to load image file '{source.filename}'.") from exc


def _first(box: Mapping[str, Any], *keys: str) -> float | None:
    for key in keys:
        value = box.get(key)
        if value is not None:
            return float(value)
    return None


def normalize_box(box: Any) -> Rect:
    """Convert any supported detector box shape into a ``Rect``.

    Accepted shapes: ``Rect``; a mapping with ``x_min``/``x`` and ``y_min``/``y`` plus
    either ``width``/``height`` or ``x_max``/``y_max`` (camelCase keys also work); an
    ``(x1, y1, x2, y2)`` sequence.
    """
    if isinstance(box, Rect):
        return box

    if isinstance(box, Mapping):
        x_min = _first(box, "x_min", "xMin", "x") or 0.0
        y_min = _first(box, "y_min", "yMin", "y") or 0.0
        width = _first(box, "width")
        height = _first(box, "height")
        if width is None:
            width = max(0.0, (_first(box, "x_max", "xMax") or 0.0) - x_min)
        if height is None:
            height = max(0.0, (_first(box, "y_max", "yMax") or 0.0) - y_min)
        return Rect(x_min, y_min, width, height)

    if isinstance(box, (Sequence, np.ndarray)) and not isinstance(box, str) and len(box) == 4:
        x1, y1, x2, y2 = (float(v) for v in box)
        return Rect(x1, y1, max(0.0, x2 - x1), max(0.0, y2 - y1))

    raise ValueError(f"Unsupported face box: {box!r}")


def locate_face(pixels: np.ndarray, face_locator: FaceLocator | None) -> Outcome[Rect]:
    """Run the locator and keep the first candidate. Never raises."""
    if face_locator is None:
        return Outcome.degraded("no face locator available")
    try:
        detections = face_locator.detect(pixels)
        if not detections:
            logger.info("No face found, using the full frame")
            return Outcome.degraded("no face found")
        box = normalize_box(detections[0].box)
    except Exception as exc:  # opaque service: any failure only degrades the crop
        logger.warning("Face detection failed, using the full frame: %s", exc)
        return Outcome.failed(f"face detection failed: {exc}")
    logger.debug("Face at %s (score %.3f)", box, detections[0].score)
    return Outcome.ok(box)


def compute_crop_region(
    box: Rect, width: float, height: float, padding: float = FACE_PADDING_RATIO
) -> Rect | None:
    """Pad a face box on every side and clamp it to the image.

    Returns None when nothing of positive area is left.
    """
    margin_x = box.width * padding
    margin_y = box.height * padding
    left = max(0.0, box.x - margin_x)
    top = max(0.0, box.y - margin_y)
    right = min(float(width), box.x + box.width + margin_x)
    bottom = min(float(height), box.y + box.height + margin_y)
    crop = Rect(left, top, right - left, bottom - top)
    if crop.area <= 0:
        return None
    return crop


def prepare_image(
    source: SourceImage,
    face_locator: FaceLocator | None = None,
    device: str = "cpu",
    size: int = MODEL_INPUT_SIZE,
) -> PreparedImage:
    """Decode, crop, resize and normalize one upload."""
    image = decode_image(source)
    width, height = image.size

    detection = locate_face(np.asarray(image), face_locator)
    crop = None
    if detection.is_ok:
        crop = compute_crop_region(detection.value, width, height)
        if crop is None:
            detection = Outcome.degraded("face box outside the image")
    face_detected = crop is not None
    if crop is None:
        crop = Rect(0.0, 0.0, float(width), float(height))

    processed = image.resize((size, size), Image.Resampling.BILINEAR, box=crop.as_box())
    pixels = np.asarray(processed)
    luma = luminance(pixels)

    tensor = torch.from_numpy(pixels.astype(np.float32) / 255.0).unsqueeze(0).to(device)
    return PreparedImage(
        tensor=NormalizedTensor(tensor),
        processed_image=processed,
        luminance=luma,
        face_detected=face_detected,
        crop_region=crop,
        detection=detection,
    )


def encode_jpeg(image: Image.Image, quality: int = PROCESSED_JPEG_QUALITY) -> bytes:
    buf = BytesIO()
    image.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()
