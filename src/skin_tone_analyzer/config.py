"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("SKIN_TONE_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

MODELS_DIR = Path(os.environ.get("MODELS_DIR", PROJECT_ROOT / "models"))

# Compute backend
DEVICE = os.environ.get("DEVICE", "cpu")
TORCH_NUM_THREADS = int(os.environ.get("TORCH_NUM_THREADS", "0"))  # 0 = torch default

# Classifier – MobileNetV2 MST model exported to TorchScript
CLASSIFIER_MODEL_PATH = Path(
    os.environ.get("CLASSIFIER_MODEL_PATH", MODELS_DIR / "mobilenetv2_mst_model94.pt")
)
CLASSIFIER_INPUT_LAYOUT = os.environ.get("CLASSIFIER_INPUT_LAYOUT", "nhwc")
MODEL_INPUT_SIZE = 224

# Face detection – InsightFace detection module only
FACE_DETECTOR_MODEL_NAME = os.environ.get("FACE_DETECTOR_MODEL_NAME", "buffalo_sc")
FACE_DETECTOR_DET_SIZE = (640, 640)
FACE_PADDING_RATIO = 0.2

# Upload constraints
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
PROCESSED_JPEG_QUALITY = 90

# Object storage – Supabase
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
SUPABASE_BUCKET = os.environ.get("SUPABASE_BUCKET", "")
STORAGE_TIMEOUT = float(os.environ.get("STORAGE_TIMEOUT", "30"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
