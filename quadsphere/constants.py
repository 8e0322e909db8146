# Window Configuration
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
WINDOW_TITLE = "Quadsphere"

# Planet
EARTH_RADIUS = 300.0
FACE_RESOLUTION = 100

# Projection
DEFAULT_FOV = 45.0
Z_NEAR = 0.1
Z_FAR = 5000.0

# Camera Defaults
CAMERA_START = (0.0, 0.0, 800.0)
CAMERA_TARGET = (0.0, 0.0, 0.0)
LIGHT_POSITION = (4.0, 8.0, 4.0)

# Controls
ROTATE_SENSITIVITY = 0.005
ZOOM_SPEED = 10.0

# Textures
ASSET_DIR = "assets"
ALBEDO_TEXTURE = "albedo_ver2.png"
ROUGHNESS_TEXTURE = "bump.png"
NORMAL_TEXTURE = "clouds.png"
