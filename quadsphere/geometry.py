import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from quadsphere.constants import EARTH_RADIUS
from quadsphere.coords import TexCoord, cartesian_to_geo, geo_to_uv

log = logging.getLogger(__name__)


class MeshValidationError(ValueError):
    """Generated geometry that the renderer cannot consume."""


@dataclass(frozen=True)
class Vertex:
    position: Tuple[float, float, float]
    normal: Tuple[float, float, float]
    uv: TexCoord


@dataclass
class Mesh:
    """Triangle-list mesh; one row per vertex in every attribute array."""
    positions: np.ndarray  # (N, 3) float32
    normals: np.ndarray    # (N, 3) float32
    uvs: np.ndarray        # (N, 2) float32
    indices: np.ndarray    # (M,) uint32

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def vertex(self, i: int) -> Vertex:
        return Vertex(
            position=tuple(float(c) for c in self.positions[i]),
            normal=tuple(float(c) for c in self.normals[i]),
            uv=TexCoord(float(self.uvs[i, 0]), float(self.uvs[i, 1])),
        )


def face_axes(normal) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
    # Fixed permutation; only a valid tangent basis for axis-aligned normals.
    nx, ny, nz = (float(c) for c in normal)
    ax, ay, az = ny, nz, nx
    bx = ay * nz - az * ny
    by = az * nx - ax * nz
    bz = ax * ny - ay * nx
    return (ax, ay, az), (bx, by, bz)


def generate_face(normal, resolution: int, x_offset: float = 0.0, y_offset: float = 0.0,
                  radius: float = EARTH_RADIUS) -> Mesh:
    """Tessellate one quadrant of a cube face and project it onto the sphere.

    Grid point (x, y) becomes vertex x + y * resolution. Offsets of 0 or 1 pick
    which half of the face [-1, 1] is sampled along each tangent axis.
    Normals point toward the sphere centre.
    """
    if resolution < 2:
        raise ValueError(f"Face resolution must be >= 2, got {resolution}")

    nx, ny, nz = (float(c) for c in normal)
    (ax, ay, az), (bx, by, bz) = face_axes(normal)

    verts, normals, uvs, idx = [], [], [], []
    step = float(resolution - 1)

    for y in range(resolution):
        for x in range(resolution):
            i = x + y * resolution

            pa = x / step - x_offset
            pb = y / step - y_offset
            cx = nx + pa * ax + pb * bx
            cy = ny + pa * ay + pb * by
            cz = nz + pa * az + pb * bz

            length = math.sqrt(cx * cx + cy * cy + cz * cz)
            ux, uy, uz = cx / length, cy / length, cz / length

            verts.append((ux * radius, uy * radius, uz * radius))
            normals.append((-ux, -uy, -uz))
            uvs.append(geo_to_uv(cartesian_to_geo((ux, uy, uz))))

            if x != resolution - 1 and y != resolution - 1:
                idx.extend([i, i + resolution, i + resolution + 1])
                idx.extend([i, i + resolution + 1, i + 1])

    mesh = Mesh(
        positions=np.array(verts, dtype=np.float32),
        normals=np.array(normals, dtype=np.float32),
        uvs=np.array(uvs, dtype=np.float32),
        indices=np.array(idx, dtype=np.uint32),
    )
    validate_mesh(mesh)
    log.debug(f"[mesh] face normal={(nx, ny, nz)} offset={(x_offset, y_offset)}: "
              f"{mesh.vertex_count} verts, {mesh.triangle_count} tris")
    return mesh


def validate_mesh(mesh: Mesh) -> None:
    n = len(mesh.positions)
    if mesh.normals.shape != (n, 3) or mesh.positions.shape != (n, 3):
        raise MeshValidationError(f"Attribute shape mismatch: positions {mesh.positions.shape}, normals {mesh.normals.shape}")
    if mesh.uvs.shape != (n, 2):
        raise MeshValidationError(f"Attribute shape mismatch: uvs {mesh.uvs.shape} for {n} vertices")
    for name in ("positions", "normals", "uvs"):
        if not np.all(np.isfinite(getattr(mesh, name))):
            raise MeshValidationError(f"Non-finite values in {name}")
    if len(mesh.indices) % 3 != 0:
        raise MeshValidationError(f"Index count {len(mesh.indices)} is not a multiple of 3")
    if len(mesh.indices) and int(mesh.indices.max()) >= n:
        raise MeshValidationError(f"Index {int(mesh.indices.max())} out of range for {n} vertices")


def compute_tangents(mesh: Mesh) -> np.ndarray:
    """Per-vertex tangents (xyz, handedness w) for normal mapping."""
    pos = mesh.positions.astype(np.float64)
    uv = mesh.uvs.astype(np.float64)
    nrm = mesh.normals.astype(np.float64)
    tri = mesh.indices.reshape(-1, 3).astype(np.int64)

    tan = np.zeros_like(pos)
    bitan = np.zeros_like(pos)
    if len(tri):
        p0, p1, p2 = pos[tri[:, 0]], pos[tri[:, 1]], pos[tri[:, 2]]
        w0, w1, w2 = uv[tri[:, 0]], uv[tri[:, 1]], uv[tri[:, 2]]
        e1, e2 = p1 - p0, p2 - p0
        d1, d2 = w1 - w0, w2 - w0

        det = d1[:, 0] * d2[:, 1] - d2[:, 0] * d1[:, 1]
        # Triangles with collapsed UVs (e.g. at the poles) contribute nothing.
        ok = np.abs(det) > 1e-12
        r = np.zeros_like(det)
        r[ok] = 1.0 / det[ok]

        sdir = (e1 * d2[:, 1:2] - e2 * d1[:, 1:2]) * r[:, None]
        tdir = (e2 * d1[:, 0:1] - e1 * d2[:, 0:1]) * r[:, None]
        for k in range(3):
            np.add.at(tan, tri[:, k], sdir)
            np.add.at(bitan, tri[:, k], tdir)

    # Gram-Schmidt against the normal.
    t = tan - nrm * np.sum(nrm * tan, axis=1, keepdims=True)
    length = np.linalg.norm(t, axis=1, keepdims=True)
    degenerate = length[:, 0] < 1e-12
    t[~degenerate] /= length[~degenerate]
    if np.any(degenerate):
        # Any unit vector perpendicular to the normal will do.
        helper = np.where(np.abs(nrm[:, 0:1]) < 0.9, [[1.0, 0.0, 0.0]], [[0.0, 1.0, 0.0]])
        fallback = np.cross(nrm, helper)
        fallback /= np.linalg.norm(fallback, axis=1, keepdims=True)
        t[degenerate] = fallback[degenerate]

    w = np.where(np.sum(np.cross(nrm, t) * bitan, axis=1) < 0.0, -1.0, 1.0)
    return np.hstack([t, w[:, None]]).astype(np.float32)
