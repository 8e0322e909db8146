import logging

import numpy as np
from OpenGL import GL

from quadsphere.constants import Z_FAR, Z_NEAR
from quadsphere.math_utils import mat4_perspective, mat4_view_from_transform, normalize
from quadsphere.render.mesh import FaceMesh
from quadsphere.shaders import FRAG_SRC, VERT_SRC, compile_shader, link_program
from quadsphere.textures import FLAT_NORMAL_PIXEL, WHITE_PIXEL

log = logging.getLogger(__name__)


class Renderer:
    def __init__(self, textures, fov: float):
        self.textures = textures
        self.fov = fov
        self._gpu_meshes = {}  # id(SceneEntity) -> FaceMesh

        vs = compile_shader(VERT_SRC, GL.GL_VERTEX_SHADER)
        fs = compile_shader(FRAG_SRC, GL.GL_FRAGMENT_SHADER)
        self.prog = link_program(vs, fs)

        self.locs = {
            'a_pos': GL.glGetAttribLocation(self.prog, "a_pos"),
            'a_normal': GL.glGetAttribLocation(self.prog, "a_normal"),
            'a_uv': GL.glGetAttribLocation(self.prog, "a_uv"),
            'a_tangent': GL.glGetAttribLocation(self.prog, "a_tangent"),
            'u_mvp': GL.glGetUniformLocation(self.prog, "u_mvp"),
            'u_base_color': GL.glGetUniformLocation(self.prog, "u_base_color"),
            'u_roughness': GL.glGetUniformLocation(self.prog, "u_roughness"),
            'u_normal_map': GL.glGetUniformLocation(self.prog, "u_normal_map"),
            'u_perceptual_roughness': GL.glGetUniformLocation(self.prog, "u_perceptual_roughness"),
            'u_light_dir': GL.glGetUniformLocation(self.prog, "u_light_dir"),
        }

    def upload(self, scene):
        for entity in scene.entities:
            if id(entity) not in self._gpu_meshes:
                self._gpu_meshes[id(entity)] = FaceMesh(entity.mesh)
        log.info(f"[render] Uploaded {len(self._gpu_meshes)} meshes")

    def _bind_material(self, material):
        GL.glActiveTexture(GL.GL_TEXTURE0)
        GL.glBindTexture(GL.GL_TEXTURE_2D, self.textures.get(material.base_color_texture, WHITE_PIXEL))
        GL.glActiveTexture(GL.GL_TEXTURE1)
        GL.glBindTexture(GL.GL_TEXTURE_2D, self.textures.get(material.metallic_roughness_texture, WHITE_PIXEL))
        GL.glActiveTexture(GL.GL_TEXTURE2)
        GL.glBindTexture(GL.GL_TEXTURE_2D, self.textures.get(material.normal_map_texture, FLAT_NORMAL_PIXEL))
        GL.glUniform1f(self.locs['u_perceptual_roughness'], material.perceptual_roughness)

    def draw_frame(self, fb_size, scene):
        fb_w, fb_h = fb_size
        GL.glViewport(0, 0, fb_w, fb_h)
        GL.glClearColor(0.0, 0.0, 0.0, 1.0)
        GL.glClear(GL.GL_COLOR_BUFFER_BIT | GL.GL_DEPTH_BUFFER_BIT)

        if scene.camera is None or fb_w <= 0 or fb_h <= 0:
            return

        aspect = fb_w / float(fb_h if fb_h else 1)
        proj = mat4_perspective(self.fov, aspect, Z_NEAR, Z_FAR)
        view = mat4_view_from_transform(scene.camera.position, scene.camera.rotation)
        mvp = (proj @ view).astype(np.float32)

        GL.glEnable(GL.GL_DEPTH_TEST)
        GL.glDepthFunc(GL.GL_LESS)
        GL.glEnable(GL.GL_CULL_FACE)
        GL.glFrontFace(GL.GL_CCW)
        GL.glCullFace(GL.GL_BACK)

        GL.glUseProgram(self.prog)
        GL.glUniformMatrix4fv(self.locs['u_mvp'], 1, GL.GL_TRUE, mvp)
        GL.glUniform1i(self.locs['u_base_color'], 0)
        GL.glUniform1i(self.locs['u_roughness'], 1)
        GL.glUniform1i(self.locs['u_normal_map'], 2)
        light_dir = normalize(scene.light_position).astype(np.float32)
        GL.glUniform3f(self.locs['u_light_dir'], *light_dir)

        for entity in scene.entities:
            gpu_mesh = self._gpu_meshes.get(id(entity))
            if gpu_mesh is None:
                continue
            self._bind_material(entity.material)
            gpu_mesh.bind(self.locs['a_pos'], self.locs['a_normal'], self.locs['a_uv'], self.locs['a_tangent'])
            gpu_mesh.draw()

        self._reset_state()

    def dispose(self):
        for gpu_mesh in self._gpu_meshes.values():
            gpu_mesh.dispose()
        self._gpu_meshes.clear()

    def _reset_state(self):
        GL.glDisable(GL.GL_CULL_FACE)
        GL.glDisable(GL.GL_DEPTH_TEST)
