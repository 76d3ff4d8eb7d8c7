"""Perceived brightness of an image region."""

import numpy as np

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def luminance(pixels: np.ndarray) -> float:
    """Mean BT.601 luma of an (H, W, 3) RGB or (H, W, 4) RGBA array, in [0, 255]."""
    if pixels.ndim != 3 or pixels.shape[-1] not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA array, got shape {pixels.shape}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        return 0.0
    rgb = pixels[..., :3].astype(np.float64)
    return float((rgb @ LUMA_WEIGHTS).mean())
