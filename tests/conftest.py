"""Shared test fixtures."""

from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from skin_tone_analyzer.models import FaceDetection, SourceImage
from skin_tone_analyzer.runtime import reset_runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts without an initialized backend or loaded models."""
    reset_runtime()
    yield
    reset_runtime()


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    buf = BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


def make_source(
    width: int = 224,
    height: int = 224,
    color: tuple[int, int, int] = (128, 128, 128),
    filename: str = "face.png",
) -> SourceImage:
    """A solid-colour PNG upload."""
    image = Image.new("RGB", (width, height), color)
    return SourceImage(data=encode_image(image), content_type="image/png", filename=filename)


def make_split_source(width: int = 400, height: int = 200) -> SourceImage:
    """Left half black, right half white."""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, width // 2 :] = 255
    image = Image.fromarray(pixels)
    return SourceImage(data=encode_image(image), content_type="image/png", filename="split.png")


class FakeClassifier:
    """Returns fixed scores and remembers what it was given."""

    def __init__(self, scores, error: Exception | None = None) -> None:
        self.scores = list(scores)
        self.error = error
        self.shapes: list[tuple[int, ...]] = []

    def predict(self, tensor):
        self.shapes.append(tuple(tensor.shape))
        if self.error is not None:
            raise self.error
        return list(self.scores)


class FakeLocator:
    def __init__(self, detections=None, error: Exception | None = None) -> None:
        self.detections = detections or []
        self.error = error
        self.shapes: list[tuple[int, ...]] = []

    def detect(self, pixels):
        self.shapes.append(pixels.shape)
        if self.error is not None:
            raise self.error
        return list(self.detections)


class FakeStorage:
    def __init__(self, base_url: str | None = None, error: Exception | None = None) -> None:
        self.base_url = base_url
        self.error = error
        self.uploads: list[tuple[str, str, int]] = []

    def upload(self, data, path, content_type):
        self.uploads.append((path, content_type, len(data)))
        if self.error is not None:
            raise self.error
        if self.base_url is None:
            return None
        return f"{self.base_url}/{path}"


def one_hot(index: int, value: float = 0.9) -> list[float]:
    scores = [0.01] * 10
    scores[index] = value
    return scores


def face_at(x: float, y: float, w: float, h: float, score: float = 0.95) -> FaceDetection:
    return FaceDetection(box={"x_min": x, "y_min": y, "width": w, "height": h}, score=score)
