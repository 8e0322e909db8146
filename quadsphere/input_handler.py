import logging

import glfw

from quadsphere.camera import InputDelta

log = logging.getLogger(__name__)


class InputHandler:
    """Collects glfw pointer and scroll events between ticks."""

    def __init__(self, app, require_drag: bool = False):
        self.app = app
        self.require_drag = require_drag
        self.dragging = False
        self.last_x, self.last_y = None, None
        self.dx, self.dy = 0.0, 0.0
        self.scroll = 0.0

    def on_key(self, win, key, scancode, action, mods):
        if action not in (glfw.PRESS, glfw.REPEAT): return

        if key == glfw.KEY_ESCAPE:
            glfw.set_window_should_close(win, True)
        elif key == glfw.KEY_R:
            self.app.reset_camera()
            log.info("[view] Camera reset")

    def on_mouse(self, win, button, action, mods):
        if button == glfw.MOUSE_BUTTON_LEFT:
            if action == glfw.PRESS:
                self.dragging = True
            elif action == glfw.RELEASE:
                self.dragging = False

    def on_cursor(self, win, x, y):
        if self.last_x is None:
            self.last_x, self.last_y = x, y
            return
        dx = x - self.last_x
        dy = y - self.last_y
        self.last_x, self.last_y = x, y

        if self.require_drag and not self.dragging: return
        self.dx += dx
        self.dy += dy

    def on_scroll(self, win, xoff, yoff):
        self.scroll += yoff

    def drain(self) -> InputDelta:
        delta = InputDelta(self.dx, self.dy, self.scroll)
        self.dx, self.dy = 0.0, 0.0
        self.scroll = 0.0
        return delta
