from dataclasses import dataclass, field

import numpy as np

from quadsphere.constants import ROTATE_SENSITIVITY, ZOOM_SPEED
from quadsphere.math_utils import quat_from_axis_angle, quat_identity, quat_look_at, quat_mul, quat_normalize, quat_rotate

WORLD_UP = (0.0, 1.0, 0.0)
LOCAL_RIGHT = (1.0, 0.0, 0.0)
LOCAL_Z = (0.0, 0.0, 1.0)


@dataclass
class CameraState:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    rotation: np.ndarray = field(default_factory=quat_identity)

    @classmethod
    def looking_at(cls, position, target, up=WORLD_UP) -> "CameraState":
        return cls(
            position=np.asarray(position, dtype=np.float64),
            rotation=quat_look_at(position, target, up),
        )

    def copy(self) -> "CameraState":
        return CameraState(self.position.copy(), self.rotation.copy())


@dataclass(frozen=True)
class InputDelta:
    dx: float = 0.0
    dy: float = 0.0
    scroll: float = 0.0


def orbit_step(state: CameraState, delta: InputDelta,
               rotate_sensitivity: float = ROTATE_SENSITIVITY,
               zoom_speed: float = ZOOM_SPEED) -> CameraState:
    # Yaw about world Y, pitch about the camera's current right axis, both
    # pre-multiplied onto the existing rotation.
    yaw = quat_from_axis_angle(WORLD_UP, -delta.dx * rotate_sensitivity)
    pitch_axis = quat_rotate(state.rotation, LOCAL_RIGHT)
    pitch = quat_from_axis_angle(pitch_axis, -delta.dy * rotate_sensitivity)

    rotation = quat_normalize(quat_mul(quat_mul(yaw, pitch), state.rotation))

    forward = quat_rotate(rotation, LOCAL_Z)
    position = state.position + forward * delta.scroll * zoom_speed
    return CameraState(position=position, rotation=rotation)


class OrbitController:
    def __init__(self, rotate_sensitivity: float = ROTATE_SENSITIVITY, zoom_speed: float = ZOOM_SPEED):
        self.rotate_sensitivity = rotate_sensitivity
        self.zoom_speed = zoom_speed

    def tick(self, scene, delta: InputDelta) -> None:
        if scene.camera is None:
            return
        scene.camera = orbit_step(scene.camera, delta, self.rotate_sensitivity, self.zoom_speed)
