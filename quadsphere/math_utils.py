import math
import numpy as np

# Quaternions are stored as [x, y, z, w].


def normalize(v) -> np.ndarray:
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v)
    if n < 1e-12 or not math.isfinite(n):
        raise ValueError(f"Cannot normalize vector {v.tolist()}")
    return v / n


def quat_identity() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def quat_from_axis_angle(axis, angle: float) -> np.ndarray:
    ax = normalize(axis)
    s = math.sin(angle * 0.5)
    return np.array([ax[0] * s, ax[1] * s, ax[2] * s, math.cos(angle * 0.5)], dtype=np.float64)


def quat_mul(a, b) -> np.ndarray:
    # Hamilton product; (a * b) applies b first, then a.
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ], dtype=np.float64)


def quat_normalize(q) -> np.ndarray:
    return normalize(q)


def quat_rotate(q, v) -> np.ndarray:
    q = np.asarray(q, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    u = q[:3]
    w = q[3]
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def quat_to_mat3(q) -> np.ndarray:
    x, y, z, w = q
    return np.array([
        [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
        [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
        [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
    ], dtype=np.float64)


def quat_from_mat3(m) -> np.ndarray:
    m = np.asarray(m, dtype=np.float64)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        q = [
            (m[2, 1] - m[1, 2]) / s,
            (m[0, 2] - m[2, 0]) / s,
            (m[1, 0] - m[0, 1]) / s,
            0.25 * s,
        ]
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2.0
        q = [
            0.25 * s,
            (m[0, 1] + m[1, 0]) / s,
            (m[0, 2] + m[2, 0]) / s,
            (m[2, 1] - m[1, 2]) / s,
        ]
    elif m[1, 1] > m[2, 2]:
        s = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2.0
        q = [
            (m[0, 1] + m[1, 0]) / s,
            0.25 * s,
            (m[1, 2] + m[2, 1]) / s,
            (m[0, 2] - m[2, 0]) / s,
        ]
    else:
        s = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2.0
        q = [
            (m[0, 2] + m[2, 0]) / s,
            (m[1, 2] + m[2, 1]) / s,
            0.25 * s,
            (m[1, 0] - m[0, 1]) / s,
        ]
    return quat_normalize(q)


def quat_look_at(eye, target, up=(0.0, 1.0, 0.0)) -> np.ndarray:
    # Local -Z faces the target, local +Y stays as close to `up` as possible.
    back = normalize(np.asarray(eye, dtype=np.float64) - np.asarray(target, dtype=np.float64))
    right = normalize(np.cross(np.asarray(up, dtype=np.float64), back))
    true_up = np.cross(back, right)
    basis = np.column_stack([right, true_up, back])
    return quat_from_mat3(basis)


def mat4_perspective(fovy_deg: float, aspect: float, znear: float, zfar: float) -> np.ndarray:
    fovy = math.radians(fovy_deg)
    f = 1.0 / math.tan(fovy / 2.0)
    m = np.zeros((4, 4), dtype=np.float32)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (zfar + znear) / (znear - zfar)
    m[2, 3] = (2.0 * zfar * znear) / (znear - zfar)
    m[3, 2] = -1.0
    return m


def mat4_view_from_transform(position, rotation) -> np.ndarray:
    """Inverse of the camera's world transform (rotation then translation)."""
    r_t = quat_to_mat3(rotation).T
    m = np.eye(4, dtype=np.float32)
    m[:3, :3] = r_t
    m[:3, 3] = -r_t @ np.asarray(position, dtype=np.float64)
    return m
