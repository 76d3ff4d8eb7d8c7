"""MST tone classifier wrapper and top-1 selection."""

import math
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import torch

from skin_tone_analyzer.tone.palette import CLASS_LABELS

FALLBACK_LABEL = "MST5"


class Classifier(Protocol):
    """Anything that maps a [1, 224, 224, 3] tensor to ten per-label scores."""

    def predict(self, tensor: torch.Tensor) -> list[float]: ...


class TorchScriptClassifier:
    """Run the MobileNetV2 MST model exported to TorchScript."""

    def __init__(
        self,
        model_path: str | Path,
        device: str = "cpu",
        input_layout: str = "nhwc",
    ) -> None:
        if input_layout not in ("nhwc", "nchw"):
            raise ValueError(f"Unsupported input layout: {input_layout}")
        self.device = device
        self.input_layout = input_layout
        self.model = torch.jit.load(str(model_path), map_location=device).eval()

    def predict(self, tensor: torch.Tensor) -> list[float]:
        """Return the scores as plain floats; no device memory outlives the call."""
        if self.input_layout == "nchw":
            tensor = tensor.permute(0, 3, 1, 2)
        with torch.inference_mode():
            output = self.model(tensor.to(self.device))
            scores = output.reshape(-1).float().cpu().tolist()
        del output
        return scores


def top_prediction(scores: Sequence[float]) -> tuple[str, float]:
    """Pick the top-1 label and its raw score.

    Ties go to the lowest index. Short vectors, indices past the label set and
    all-NaN vectors fall back to ``MST5``.
    """
    best_index = -1
    best_value = -math.inf
    for index, value in enumerate(scores):
        if value > best_value:
            best_value = value
            best_index = index

    confidence = best_value if math.isfinite(best_value) else 0.0
    if len(scores) < len(CLASS_LABELS) or not 0 <= best_index < len(CLASS_LABELS):
        return FALLBACK_LABEL, confidence
    return CLASS_LABELS[best_index], confidence
