import os

import pytest

from quadsphere.config import ViewerConfig, load_config, parse_config
from quadsphere.constants import EARTH_RADIUS, FACE_RESOLUTION


class TestParseConfig:
    """Tests for parse_config"""

    def test_defaults(self, tmp_path) -> None:
        cfg = parse_config({}, base_dir=str(tmp_path))
        assert cfg.resolution == FACE_RESOLUTION
        assert cfg.radius == EARTH_RADIUS
        assert cfg.camera_position == (0.0, 0.0, 800.0)
        assert cfg.rotate_sensitivity == 0.005
        assert cfg.zoom_speed == 10.0
        assert cfg.asset_dir == os.path.join(str(tmp_path), "assets")

    def test_sections_applied(self, tmp_path) -> None:
        cfg = parse_config({
            'window': {'width': 640, 'title': 'Earth'},
            'mesh': {'resolution': 32, 'radius': 5},
            'textures': {'albedo': 'earth.png', 'normal': None},
            'camera': {'position': [1, 2, 3], 'require_drag': 'yes', 'zoom_speed': 2},
            'light': {'position': [0, 10, 0]},
        }, base_dir=str(tmp_path))
        assert cfg.window_width == 640
        assert cfg.window_title == 'Earth'
        assert cfg.resolution == 32
        assert cfg.radius == 5.0
        assert cfg.albedo == 'earth.png'
        assert cfg.normal is None
        assert cfg.camera_position == (1.0, 2.0, 3.0)
        assert cfg.require_drag is True
        assert cfg.zoom_speed == 2.0
        assert cfg.light_position == (0.0, 10.0, 0.0)

    def test_bad_values_ignored(self) -> None:
        cfg = parse_config({
            'mesh': {'resolution': 'lots'},
            'camera': {'position': [1, 2]},
            'light': 'bright',
        })
        assert cfg.resolution == FACE_RESOLUTION
        assert cfg.camera_position == ViewerConfig().camera_position
        assert cfg.light_position == ViewerConfig().light_position

    def test_resolution_clamped(self) -> None:
        assert parse_config({'mesh': {'resolution': 1}}).resolution == 2

    def test_non_positive_radius_replaced(self) -> None:
        assert parse_config({'mesh': {'radius': -3}}).radius == EARTH_RADIUS

    def test_absolute_asset_dir_kept(self, tmp_path) -> None:
        cfg = parse_config({'textures': {'asset_dir': str(tmp_path)}}, base_dir="/elsewhere")
        assert cfg.asset_dir == str(tmp_path)


class TestLoadConfig:
    """Tests for load_config"""

    def test_missing_required_file(self, tmp_path) -> None:
        with pytest.raises(RuntimeError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_missing_optional_file_gives_defaults(self, tmp_path) -> None:
        cfg = load_config(str(tmp_path / "nope.yaml"), required=False)
        assert cfg.resolution == FACE_RESOLUTION

    def test_reads_yaml_relative_to_file(self, tmp_path) -> None:
        path = tmp_path / "viewer.yaml"
        path.write_text("mesh:\n  resolution: 12\ntextures:\n  asset_dir: tex\n")
        cfg = load_config(str(path))
        assert cfg.resolution == 12
        assert cfg.asset_dir == os.path.join(str(tmp_path), "tex")

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).resolution == FACE_RESOLUTION

    def test_non_mapping_rejected(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(RuntimeError):
            load_config(str(path))
