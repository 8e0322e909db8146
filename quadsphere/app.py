import logging

import glfw
from OpenGL import GL

from quadsphere.assembler import build_quadsphere
from quadsphere.camera import CameraState, OrbitController
from quadsphere.config import ViewerConfig
from quadsphere.input_handler import InputHandler
from quadsphere.render.renderer import Renderer
from quadsphere.scene import Material, Scene
from quadsphere.textures import TextureCache

log = logging.getLogger(__name__)


class App:
    def __init__(self, config: ViewerConfig, fullscreen: bool = False):
        self.config = config
        self.fullscreen = fullscreen
        self._init_window()
        try:
            self._init_scene()
            self._init_gl()
        except Exception:
            # Startup is all-or-nothing; never show a sphere with missing faces.
            glfw.terminate()
            raise

        self.controller = OrbitController(config.rotate_sensitivity, config.zoom_speed)
        self.input_handler = InputHandler(self, require_drag=config.require_drag)

        glfw.set_key_callback(self.window, self.input_handler.on_key)
        glfw.set_mouse_button_callback(self.window, self.input_handler.on_mouse)
        glfw.set_cursor_pos_callback(self.window, self.input_handler.on_cursor)
        glfw.set_scroll_callback(self.window, self.input_handler.on_scroll)

    def _init_window(self):
        if not glfw.init():
            raise RuntimeError("glfw.init() failed")

        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 2)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 1)
        glfw.window_hint(glfw.DEPTH_BITS, 24)

        monitor = glfw.get_primary_monitor() if self.fullscreen else None
        mode = glfw.get_video_mode(monitor) if monitor else None

        width = mode.size.width if mode else self.config.window_width
        height = mode.size.height if mode else self.config.window_height

        self.window = glfw.create_window(width, height, self.config.window_title, monitor, None)
        if not self.window:
            glfw.terminate()
            raise RuntimeError("Failed to create window")

        glfw.make_context_current(self.window)
        glfw.swap_interval(1)

    def _init_scene(self):
        cfg = self.config
        self.scene = Scene(light_position=cfg.light_position)
        self.reset_camera()

        self.material = Material(
            base_color_texture=cfg.albedo,
            metallic_roughness_texture=cfg.roughness,
            normal_map_texture=cfg.normal,
            perceptual_roughness=cfg.perceptual_roughness,
        )
        build_quadsphere(self.scene, self.material, resolution=cfg.resolution, radius=cfg.radius)

    def _init_gl(self):
        self.textures = TextureCache(self.config.asset_dir)
        self.renderer = Renderer(self.textures, fov=self.config.fov)
        self.renderer.upload(self.scene)

    def reset_camera(self):
        self.scene.camera = CameraState.looking_at(self.config.camera_position, self.config.camera_target)

    def run(self):
        while not glfw.window_should_close(self.window):
            glfw.poll_events()
            self._update()
            self._render()

        self.renderer.dispose()
        glfw.terminate()

    def _update(self):
        self.controller.tick(self.scene, self.input_handler.drain())

    def _render(self):
        fb_w, fb_h = glfw.get_framebuffer_size(self.window)
        self.renderer.draw_frame((fb_w, fb_h), self.scene)
        GL.glFlush()
        glfw.swap_buffers(self.window)
