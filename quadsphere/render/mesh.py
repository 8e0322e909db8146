import ctypes
from OpenGL import GL
from quadsphere.geometry import Mesh, compute_tangents


def _static_buffer(target, data):
    buf = GL.glGenBuffers(1)
    GL.glBindBuffer(target, buf)
    GL.glBufferData(target, data.nbytes, data, GL.GL_STATIC_DRAW)
    return buf


def _bind_attrib(buf, loc: int, size: int):
    if loc < 0:
        return
    GL.glBindBuffer(GL.GL_ARRAY_BUFFER, buf)
    GL.glEnableVertexAttribArray(loc)
    GL.glVertexAttribPointer(loc, size, GL.GL_FLOAT, GL.GL_FALSE, 0, ctypes.c_void_p(0))


class FaceMesh:
    """GPU copy of one generated face quadrant."""

    def __init__(self, mesh: Mesh):
        tangents = compute_tangents(mesh)
        self.index_count = len(mesh.indices)

        self.vbo_pos = _static_buffer(GL.GL_ARRAY_BUFFER, mesh.positions)
        self.vbo_normal = _static_buffer(GL.GL_ARRAY_BUFFER, mesh.normals)
        self.vbo_uv = _static_buffer(GL.GL_ARRAY_BUFFER, mesh.uvs)
        self.vbo_tangent = _static_buffer(GL.GL_ARRAY_BUFFER, tangents)
        self.ebo = _static_buffer(GL.GL_ELEMENT_ARRAY_BUFFER, mesh.indices)

    def bind(self, loc_pos: int, loc_normal: int, loc_uv: int, loc_tangent: int):
        _bind_attrib(self.vbo_pos, loc_pos, 3)
        _bind_attrib(self.vbo_normal, loc_normal, 3)
        _bind_attrib(self.vbo_uv, loc_uv, 2)
        _bind_attrib(self.vbo_tangent, loc_tangent, 4)
        GL.glBindBuffer(GL.GL_ELEMENT_ARRAY_BUFFER, self.ebo)

    def draw(self):
        GL.glDrawElements(GL.GL_TRIANGLES, self.index_count, GL.GL_UNSIGNED_INT, None)

    def dispose(self):
        GL.glDeleteBuffers(5, [self.vbo_pos, self.vbo_normal, self.vbo_uv, self.vbo_tangent, self.ebo])
