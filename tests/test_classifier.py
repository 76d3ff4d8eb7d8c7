"""Tests for top-1 selection and the TorchScript wrapper."""

import math

import pytest
import torch

from skin_tone_analyzer.inference.classifier import TorchScriptClassifier, top_prediction


class _ShapeProbe(torch.nn.Module):
    """Scores the label whose index is the input's second dimension mod 10."""

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        scores = torch.zeros(1, 10)
        scores[0, x.shape[1] % 10] = 1.0
        return scores


@pytest.fixture
def probe_model_path(tmp_path):
    path = tmp_path / "probe.pt"
    torch.jit.script(_ShapeProbe()).save(str(path))
    return path


def test_top_prediction_tie_goes_to_lowest_index():
    scores = [0.3, 0.3, 0.1, 0.05, 0.05, 0.05, 0.05, 0.05, 0.03, 0.02]
    assert top_prediction(scores) == ("MST1", 0.3)


def test_top_prediction_uniform_scores():
    assert top_prediction([0.1] * 10) == ("MST1", 0.1)


def test_top_prediction_picks_max():
    scores = [0.01] * 10
    scores[7] = 0.8
    label, confidence = top_prediction(scores)
    assert label == "MST8"
    assert confidence == pytest.approx(0.8)


def test_top_prediction_confidence_is_raw_score():
    scores = [2.0, 1.0] + [0.0] * 8
    assert top_prediction(scores) == ("MST1", 2.0)


def test_top_prediction_short_vector_falls_back():
    assert top_prediction([0.9, 0.1]) == ("MST5", 0.9)
    assert top_prediction([]) == ("MST5", 0.0)


def test_top_prediction_index_past_labels_falls_back():
    scores = [0.0] * 11 + [0.9]
    assert top_prediction(scores) == ("MST5", 0.9)


def test_top_prediction_all_nan_falls_back():
    assert top_prediction([math.nan] * 10) == ("MST5", 0.0)


def test_torchscript_classifier_nhwc(probe_model_path):
    classifier = TorchScriptClassifier(probe_model_path)
    scores = classifier.predict(torch.zeros(1, 224, 224, 3))
    assert len(scores) == 10
    # shape[1] == 224 -> index 4
    assert top_prediction(scores)[0] == "MST5"


def test_torchscript_classifier_nchw_permutes(probe_model_path):
    classifier = TorchScriptClassifier(probe_model_path, input_layout="nchw")
    scores = classifier.predict(torch.zeros(1, 224, 224, 3))
    # shape[1] == 3 after permute -> index 3
    assert top_prediction(scores)[0] == "MST4"


def test_torchscript_classifier_rejects_unknown_layout(probe_model_path):
    with pytest.raises(ValueError):
        TorchScriptClassifier(probe_model_path, input_layout="hwc")
