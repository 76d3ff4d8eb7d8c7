"""Process-wide compute backend, model handles and tensor lifetime.

The torch backend is initialized once per process; the classifier and the face
locator are loaded once on first use and shared by every later request.
``reset_runtime`` drops all of it (used by tests and by callers recovering from a
failed backend).
"""

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

import torch

from skin_tone_analyzer.config import (
    CLASSIFIER_INPUT_LAYOUT,
    CLASSIFIER_MODEL_PATH,
    DEVICE,
    FACE_DETECTOR_DET_SIZE,
    FACE_DETECTOR_MODEL_NAME,
    TORCH_NUM_THREADS,
)
from skin_tone_analyzer.errors import BackendUnavailable

if TYPE_CHECKING:
    from skin_tone_analyzer.inference.classifier import TorchScriptClassifier
    from skin_tone_analyzer.inference.face_locator import InsightFaceLocator

logger = logging.getLogger(__name__)

_backend_lock = threading.Lock()
_model_lock = threading.Lock()

_device: str | None = None
_backend_error: BackendUnavailable | None = None
_classifier: "TorchScriptClassifier | None" = None
_face_locator: "InsightFaceLocator | None" = None


def _resolve_device(requested: str) -> str:
    device = torch.device(requested)
    if device.type == "cuda" and not torch.cuda.is_available():
        raise RuntimeError("CUDA was requested but is not available")
    return str(device)


def ensure_ready(device: str | None = None) -> str:
    """Initialize the compute backend once and return the device in use.

    Concurrent callers wait on the same initialization. Once a device is set up, a
    later, different ``device`` is ignored with a warning. A failed initialization is
    remembered and re-raised without retrying until ``reset_runtime`` is called.
    """
    global _device, _backend_error

    with _backend_lock:
        if _device is not None:
            if device is not None and device != _device:
                logger.warning(
                    "Backend already initialized on %s; ignoring requested device %s",
                    _device,
                    device,
                )
            return _device
        if _backend_error is not None:
            raise _backend_error

        requested = device or DEVICE
        try:
            resolved = _resolve_device(requested)
            if TORCH_NUM_THREADS > 0:
                torch.set_num_threads(TORCH_NUM_THREADS)
            torch.zeros(1, device=resolved)
        except (RuntimeError, ValueError) as exc:
            _backend_error = BackendUnavailable(
                f"Compute backend '{requested}' failed to initialize: {exc}"
            )
            logger.error("%s", _backend_error.message)
            raise _backend_error from exc

        _device = resolved
        logger.info("Compute backend ready on %s", resolved)
        return _device


def load_classifier(model_path: str | Path | None = None) -> "TorchScriptClassifier":
    """Return the shared classifier, loading it on first use."""
    global _classifier

    device = ensure_ready()
    with _model_lock:
        if _classifier is None:
            from skin_tone_analyzer.inference.classifier import TorchScriptClassifier

            path = Path(model_path or CLASSIFIER_MODEL_PATH)
            try:
                _classifier = TorchScriptClassifier(
                    path, device=device, input_layout=CLASSIFIER_INPUT_LAYOUT
                )
            except (OSError, RuntimeError, ValueError) as exc:
                raise BackendUnavailable(
                    f"Failed to load classifier model from {path}: {exc}"
                ) from exc
            logger.info("Loaded classifier from %s", path)
        return _classifier


def load_face_locator() -> "InsightFaceLocator":
    """Return the shared face locator, loading it on first use.

    Errors propagate unchanged; the preprocessor treats them as a degraded detection.
    """
    global _face_locator

    device = ensure_ready()
    with _model_lock:
        if _face_locator is None:
            from skin_tone_analyzer.inference.face_locator import InsightFaceLocator

            _face_locator = InsightFaceLocator(
                model_name=FACE_DETECTOR_MODEL_NAME,
                device=device,
                det_size=FACE_DETECTOR_DET_SIZE,
            )
            logger.info("Loaded face locator %s", FACE_DETECTOR_MODEL_NAME)
        return _face_locator


def reset_runtime() -> None:
    """Forget the initialized backend and every loaded model."""
    global _device, _backend_error, _classifier, _face_locator

    with _backend_lock, _model_lock:
        _device = None
        _backend_error = None
        _classifier = None
        _face_locator = None


class NormalizedTensor:
    """A device tensor owned by exactly one inference call.

    Use as a context manager; the tensor is released when the block exits, whether it
    exits normally or through an exception.
    """

    def __init__(self, tensor: torch.Tensor) -> None:
        self._tensor: torch.Tensor | None = tensor

    @property
    def tensor(self) -> torch.Tensor:
        if self._tensor is None:
            raise RuntimeError("Tensor has already been released")
        return self._tensor

    @property
    def released(self) -> bool:
        return self._tensor is None

    def release(self) -> None:
        if self._tensor is None:
            return
        on_cuda = self._tensor.is_cuda
        self._tensor = None
        if on_cuda:
            torch.cuda.empty_cache()

    def __enter__(self) -> torch.Tensor:
        return self.tensor

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
