import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from quadsphere.constants import EARTH_RADIUS, FACE_RESOLUTION
from quadsphere.geometry import Mesh, generate_face

log = logging.getLogger(__name__)

CUBE_FACES = (
    (1.0, 0.0, 0.0),
    (-1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, -1.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
)

QUADRANT_OFFSETS = ((0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0))


@dataclass(frozen=True)
class FaceSpec:
    normal: Tuple[float, float, float]
    resolution: int
    offset: Tuple[float, float]


def face_specs(resolution: int = FACE_RESOLUTION) -> Iterator[FaceSpec]:
    for normal in CUBE_FACES:
        for offset in QUADRANT_OFFSETS:
            yield FaceSpec(normal, resolution, offset)


def build_quadsphere(scene, material, resolution: int = FACE_RESOLUTION, radius: float = EARTH_RADIUS) -> List[Mesh]:
    """Generate all 24 face quadrants and add each to `scene` with `material`.

    Any generation error propagates; a sphere with missing faces is never built.
    """
    meshes = [
        generate_face(spec.normal, spec.resolution, spec.offset[0], spec.offset[1], radius=radius)
        for spec in face_specs(resolution)
    ]
    for mesh in meshes:
        scene.add_mesh(mesh, material)

    verts = sum(m.vertex_count for m in meshes)
    tris = sum(m.triangle_count for m in meshes)
    log.info(f"[mesh] Built quadsphere: {len(meshes)} face quadrants, {verts} verts, {tris} tris (resolution {resolution})")
    return meshes
