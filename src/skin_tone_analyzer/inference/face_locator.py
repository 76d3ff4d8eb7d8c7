"""InsightFace wrapper for face localization."""

import cv2
import numpy as np
from insightface.app import FaceAnalysis

from skin_tone_analyzer.models import FaceDetection


class InsightFaceLocator:
    """Detect faces with the InsightFace detection model (no recognition heads)."""

    def __init__(
        self,
        model_name: str = "buffalo_sc",
        device: str = "cpu",
        det_size: tuple[int, int] = (640, 640),
    ) -> None:
        providers = (
            ["CUDAExecutionProvider", "CPUExecutionProvider"]
            if device.startswith("cuda")
            else ["CPUExecutionProvider"]
        )
        self.app = FaceAnalysis(
            name=model_name, allowed_modules=["detection"], providers=providers
        )
        ctx_id = 0 if device.startswith("cuda") else -1
        self.app.prepare(ctx_id=ctx_id, det_size=det_size)

    def detect(self, pixels: np.ndarray) -> list[FaceDetection]:
        """Detect faces in an RGB image.

        Args:
            pixels: (H, W, 3) uint8 array in RGB order.

        Returns:
            Detections with (x1, y1, x2, y2) boxes, highest score first.
        """
        faces = self.app.get(cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
        detections = [
            FaceDetection(
                box=tuple(float(v) for v in face.bbox[:4]),
                score=float(face.det_score),
            )
            for face in faces
        ]
        detections.sort(key=lambda d: d.score, reverse=True)
        return detections
