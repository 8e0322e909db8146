import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

import yaml

from quadsphere.constants import (
    ALBEDO_TEXTURE,
    ASSET_DIR,
    CAMERA_START,
    CAMERA_TARGET,
    DEFAULT_FOV,
    EARTH_RADIUS,
    FACE_RESOLUTION,
    LIGHT_POSITION,
    NORMAL_TEXTURE,
    ROTATE_SENSITIVITY,
    ROUGHNESS_TEXTURE,
    WINDOW_HEIGHT,
    WINDOW_TITLE,
    WINDOW_WIDTH,
    ZOOM_SPEED,
)

log = logging.getLogger(__name__)


@dataclass
class ViewerConfig:
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    window_title: str = WINDOW_TITLE

    resolution: int = FACE_RESOLUTION
    radius: float = EARTH_RADIUS

    asset_dir: str = ASSET_DIR
    albedo: Optional[str] = ALBEDO_TEXTURE
    roughness: Optional[str] = ROUGHNESS_TEXTURE
    normal: Optional[str] = NORMAL_TEXTURE
    perceptual_roughness: float = 1.0

    camera_position: Tuple[float, float, float] = CAMERA_START
    camera_target: Tuple[float, float, float] = CAMERA_TARGET
    fov: float = DEFAULT_FOV
    rotate_sensitivity: float = ROTATE_SENSITIVITY
    zoom_speed: float = ZOOM_SPEED
    require_drag: bool = False

    light_position: Tuple[float, float, float] = field(default=LIGHT_POSITION)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _as_vec3(value) -> Tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"expected 3 numbers, got {value!r}")
    return tuple(float(c) for c in value)


def _apply_section(cfg: ViewerConfig, section_name: str, section, fields: dict) -> None:
    if section is None:
        return
    if not isinstance(section, dict):
        log.warning(f"[config] '{section_name}' section ignored: not a mapping")
        return
    for key, (attr, convert) in fields.items():
        if key not in section:
            continue
        try:
            setattr(cfg, attr, convert(section[key]))
        except (TypeError, ValueError) as e:
            log.warning(f"[config] {section_name}.{key} ignored: {e}")


def _optional_str(value) -> Optional[str]:
    return None if value in (None, "") else str(value)


def parse_config(data: dict, base_dir: str = ".") -> ViewerConfig:
    cfg = ViewerConfig()
    data = data or {}

    _apply_section(cfg, 'window', data.get('window'), {
        'width': ('window_width', int),
        'height': ('window_height', int),
        'title': ('window_title', str),
    })
    _apply_section(cfg, 'mesh', data.get('mesh'), {
        'resolution': ('resolution', int),
        'radius': ('radius', float),
    })
    _apply_section(cfg, 'textures', data.get('textures'), {
        'asset_dir': ('asset_dir', str),
        'albedo': ('albedo', _optional_str),
        'roughness': ('roughness', _optional_str),
        'normal': ('normal', _optional_str),
        'perceptual_roughness': ('perceptual_roughness', float),
    })
    _apply_section(cfg, 'camera', data.get('camera'), {
        'position': ('camera_position', _as_vec3),
        'target': ('camera_target', _as_vec3),
        'fov': ('fov', float),
        'rotate_sensitivity': ('rotate_sensitivity', float),
        'zoom_speed': ('zoom_speed', float),
        'require_drag': ('require_drag', _as_bool),
    })
    _apply_section(cfg, 'light', data.get('light'), {
        'position': ('light_position', _as_vec3),
    })

    if cfg.resolution < 2:
        log.warning(f"[config] mesh.resolution {cfg.resolution} too small; using 2")
        cfg.resolution = 2
    if cfg.radius <= 0.0:
        log.warning(f"[config] mesh.radius {cfg.radius} must be positive; using {EARTH_RADIUS}")
        cfg.radius = EARTH_RADIUS

    if not os.path.isabs(cfg.asset_dir):
        cfg.asset_dir = os.path.normpath(os.path.join(base_dir, cfg.asset_dir))
    return cfg


def load_config(path: str, required: bool = True) -> ViewerConfig:
    if not os.path.exists(path):
        if required:
            raise RuntimeError(f"Config file {path} not found.")
        log.info(f"[config] {path} not found; using defaults")
        return parse_config({}, base_dir=os.getcwd())

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"Config file {path} must contain a mapping.")

    base_dir = os.path.dirname(os.path.abspath(path))
    cfg = parse_config(data, base_dir=base_dir)
    log.info(f"[config] Loaded {path}")
    return cfg
