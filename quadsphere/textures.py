import logging
import os

import cv2
import numpy as np
from OpenGL import GL

log = logging.getLogger(__name__)

# Fallbacks keep the material valid when an asset is missing.
WHITE_PIXEL = (255, 255, 255)
FLAT_NORMAL_PIXEL = (128, 128, 255)


def load_image_rgb(path: str):
    """Read an image file as a contiguous RGB uint8 array, or None if unreadable."""
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None:
        return None
    return np.ascontiguousarray(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))


def upload_texture(pixels: np.ndarray) -> int:
    h, w = pixels.shape[:2]
    tex_id = GL.glGenTextures(1)
    GL.glBindTexture(GL.GL_TEXTURE_2D, tex_id)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_MIN_FILTER, GL.GL_LINEAR_MIPMAP_LINEAR)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_MAG_FILTER, GL.GL_LINEAR)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_WRAP_S, GL.GL_REPEAT)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_WRAP_T, GL.GL_CLAMP_TO_EDGE)
    GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_GENERATE_MIPMAP, GL.GL_TRUE)
    GL.glPixelStorei(GL.GL_UNPACK_ALIGNMENT, 1)
    GL.glTexImage2D(GL.GL_TEXTURE_2D, 0, GL.GL_RGB, w, h, 0, GL.GL_RGB, GL.GL_UNSIGNED_BYTE, pixels)
    return tex_id


class TextureCache:
    """Resolves texture names under `asset_dir` to GL texture ids, once per name."""

    def __init__(self, asset_dir: str):
        self.asset_dir = asset_dir
        self._textures = {}
        self._fallbacks = {}

    def _fallback(self, color) -> int:
        if color not in self._fallbacks:
            self._fallbacks[color] = upload_texture(np.array([[color]], dtype=np.uint8))
        return self._fallbacks[color]

    def get(self, name, fallback=WHITE_PIXEL) -> int:
        if not name:
            return self._fallback(fallback)
        if name in self._textures:
            return self._textures[name]

        path = name if os.path.isabs(name) else os.path.join(self.asset_dir, name)
        pixels = load_image_rgb(path)
        if pixels is None:
            log.warning(f"[tex] Cannot load {path}; using flat fallback")
            tex_id = self._fallback(fallback)
        else:
            log.info(f"[tex] Loaded {path} ({pixels.shape[1]}x{pixels.shape[0]})")
            tex_id = upload_texture(pixels)
        self._textures[name] = tex_id
        return tex_id
