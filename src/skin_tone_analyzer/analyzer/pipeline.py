"""End-to-end analysis of one uploaded photo."""

import logging
import time
from pathlib import Path
from typing import Protocol

from skin_tone_analyzer.errors import BackendUnavailable
from skin_tone_analyzer.imaging.preprocess import FaceLocator, encode_jpeg, prepare_image
from skin_tone_analyzer.inference.classifier import Classifier, top_prediction
from skin_tone_analyzer.models import AnalysisReport, Outcome, SourceImage
from skin_tone_analyzer.runtime import ensure_ready, load_classifier, load_face_locator
from skin_tone_analyzer.storage.supabase import SupabaseStorage, local_url
from skin_tone_analyzer.tone.palette import compose_result, mst_color

logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Best-effort uploader: returns a public URL or None."""

    def upload(self, data: bytes, path: str, content_type: str) -> str | None: ...


class SkinToneAnalyzer:
    """Classify a face photo on the MST scale and attach clothing recommendations.

    Collaborators left as None are resolved lazily: the classifier and face locator
    come from the shared runtime handles, and no storage means no uploads. Pass
    ``detect_faces=False`` to always classify the full frame.
    """

    def __init__(
        self,
        classifier: Classifier | None = None,
        face_locator: FaceLocator | None = None,
        storage: ObjectStorage | None = None,
        *,
        detect_faces: bool = True,
        device: str | None = None,
    ) -> None:
        self.classifier = classifier
        self.face_locator = face_locator
        self.storage = storage
        self.detect_faces = detect_faces
        self.device = device

    @classmethod
    def from_config(
        cls, device: str | None = None, upload: bool = True, detect_faces: bool = True
    ) -> "SkinToneAnalyzer":
        """Analyzer wired to the configured models and Supabase bucket."""
        storage = SupabaseStorage() if upload else None
        return cls(storage=storage, detect_faces=detect_faces, device=device)

    def analyze_file(self, path: str | Path) -> AnalysisReport:
        return self.analyze(SourceImage.from_path(path))

    def analyze(self, source: SourceImage) -> AnalysisReport:
        """Run the full pipeline.

        Raises:
            DecodeFailure: The image bytes cannot be decoded.
            BackendUnavailable: The backend or the classifier cannot be brought up,
                or classifier inference fails.
        """
        device = ensure_ready(self.device)
        classifier = self.classifier or load_classifier()

        # TODO: bound face detection and classifier inference with a deadline.
        prepared = prepare_image(source, self._resolve_face_locator(), device=device)
        with prepared.tensor as tensor:
            try:
                scores = classifier.predict(tensor)
            except RuntimeError as exc:
                raise BackendUnavailable(f"Classifier inference failed: {exc}") from exc

        raw_label, confidence = top_prediction(scores)
        result = compose_result(raw_label, confidence, prepared.luminance, prepared.face_detected)
        logger.info(
            "%s: raw=%s adjusted=%s confidence=%.3f luminance=%.1f face=%s",
            source.filename,
            result.raw_label,
            result.adjusted_label,
            result.confidence,
            result.luminance,
            result.face_detected,
        )

        processed_jpeg = encode_jpeg(prepared.processed_image)
        image_url, processed_url = self._publish(source, processed_jpeg)
        return AnalysisReport(
            result=result,
            mst_color=mst_color(result.adjusted_label),
            image_url=image_url,
            processed_image_url=processed_url,
            processed_image=prepared.processed_image,
        )

    def _resolve_face_locator(self) -> FaceLocator | None:
        if self.face_locator is not None or not self.detect_faces:
            return self.face_locator
        try:
            return load_face_locator()
        except Exception as exc:  # detector unavailability only degrades the crop
            logger.warning("Face locator unavailable, using the full frame: %s", exc)
            return None

    def _publish(self, source: SourceImage, processed_jpeg: bytes) -> tuple[str, str]:
        """Upload both images, falling back to local data URLs."""
        timestamp = time.time_ns() // 1_000_000
        name = Path(source.filename).name
        original = self._store(source.data, f"uploads/{timestamp}_{name}", source.content_type)
        processed = self._store(
            processed_jpeg, f"processed/{timestamp}_{Path(name).stem}.jpg", "image/jpeg"
        )
        image_url = original.value if original.is_ok else local_url(source.data, source.content_type)
        processed_url = processed.value if processed.is_ok else local_url(processed_jpeg, "image/jpeg")
        return image_url, processed_url

    def _store(self, data: bytes, path: str, content_type: str) -> Outcome[str]:
        if self.storage is None:
            return Outcome.degraded("no object storage")
        try:
            url = self.storage.upload(data, path, content_type)
        except Exception as exc:  # gateway contract is best effort
            logger.warning("Upload of %s raised: %s", path, exc)
            return Outcome.failed(str(exc))
        if not url:
            return Outcome.degraded("upload returned no URL")
        return Outcome.ok(url)
