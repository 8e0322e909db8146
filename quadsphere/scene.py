from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from quadsphere.camera import CameraState
from quadsphere.constants import ALBEDO_TEXTURE, LIGHT_POSITION, NORMAL_TEXTURE, ROUGHNESS_TEXTURE
from quadsphere.geometry import Mesh


@dataclass(frozen=True)
class Material:
    # Texture identifiers; the texture cache resolves them to GL textures.
    base_color_texture: Optional[str] = ALBEDO_TEXTURE
    metallic_roughness_texture: Optional[str] = ROUGHNESS_TEXTURE
    normal_map_texture: Optional[str] = NORMAL_TEXTURE
    perceptual_roughness: float = 1.0


@dataclass
class SceneEntity:
    mesh: Mesh
    material: Material


@dataclass
class Scene:
    entities: List[SceneEntity] = field(default_factory=list)
    camera: Optional[CameraState] = None
    light_position: Tuple[float, float, float] = LIGHT_POSITION

    def add_mesh(self, mesh: Mesh, material: Material) -> SceneEntity:
        entity = SceneEntity(mesh, material)
        self.entities.append(entity)
        return entity
