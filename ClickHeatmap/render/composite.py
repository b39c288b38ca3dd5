from __future__ import annotations

import numpy as np  # type: ignore


def multiply_composite(base_rgb: np.ndarray, overlay_rgba: np.ndarray) -> np.ndarray:
    """Blend an RGBA overlay onto an opaque RGB image with a multiply blend.

    base_rgb: (H, W, 3) uint8. overlay_rgba: (H, W, 4) uint8 (alpha 0..255).
    Where the overlay is transparent the base shows through unchanged.
    """
    if base_rgb.ndim != 3 or base_rgb.shape[2] != 3:
        raise ValueError("base image must be (H, W, 3)")
    if overlay_rgba.ndim != 3 or overlay_rgba.shape[2] != 4:
        raise ValueError("overlay must be (H, W, 4)")
    if base_rgb.shape[:2] != overlay_rgba.shape[:2]:
        raise ValueError(f"size mismatch: base {base_rgb.shape[:2]} vs overlay {overlay_rgba.shape[:2]}")
    base = base_rgb.astype(float)
    src = overlay_rgba[..., :3].astype(float) / 255.0
    a = overlay_rgba[..., 3:4].astype(float) / 255.0
    out = base * (1.0 - a) + base * src * a
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)
