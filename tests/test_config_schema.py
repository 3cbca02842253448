from pathlib import Path

import pytest

from jpegresize.common.enums import OutputFormat, ResamplingProfile
from jpegresize.imaging.dimensions import BoundingBox
from jpegresize.settings import CONFIG_ENV_VAR, UserSettings

GOOD_YAML = """
desired_width: 1024
desired_height: 0
profile: high-speed
output_format: webp
quality: 70
dpi: [72, 72]
output_dir: out
bench_workers: 4
"""

BAD_YAML = """
desired_width: 0
quality: 150
"""


def test_valid_config(tmp_path: Path):
    cfg_file = tmp_path / "good.yaml"
    cfg_file.write_text(GOOD_YAML)
    cfg = UserSettings.load(cfg_file)

    assert cfg.box == BoundingBox(1024, 0)
    assert cfg.profile is ResamplingProfile.HIGH_SPEED
    assert cfg.output_format is OutputFormat.WEBP
    assert cfg.dpi == (72, 72)
    assert cfg.output_dir == Path("out")
    assert cfg.bench_workers == 4


def test_invalid_config(tmp_path: Path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text(BAD_YAML)
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        UserSettings.load(cfg_file)


def test_unparseable_yaml(tmp_path: Path):
    cfg_file = tmp_path / "broken.yaml"
    cfg_file.write_text("desired_width: [1, 2\n")
    with pytest.raises(RuntimeError, match="Unable to read config YAML"):
        UserSettings.load(cfg_file)


def test_empty_file_gives_defaults(tmp_path: Path):
    cfg_file = tmp_path / "empty.yaml"
    cfg_file.write_text("")
    assert UserSettings.load(cfg_file) == UserSettings()


def test_missing_explicit_path(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        UserSettings.load(tmp_path / "nope.yaml")


def test_defaults_without_any_file():
    cfg = UserSettings.load()

    assert cfg.box == BoundingBox(500, 500)
    assert cfg.profile is ResamplingProfile.HIGH_QUALITY
    assert cfg.output_format is OutputFormat.JPEG
    assert cfg.quality == 85


def test_default_search_path_is_used(tmp_path: Path):
    (tmp_path / "config.yaml").write_text("desired_width: 320\n")
    assert UserSettings.load().desired_width == 320


def test_env_var_points_at_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    cfg_file = tmp_path / "elsewhere.yaml"
    cfg_file.write_text("desired_height: 240\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(cfg_file))

    assert UserSettings.load().desired_height == 240


def test_env_var_to_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
    with pytest.raises(FileNotFoundError, match=CONFIG_ENV_VAR):
        UserSettings.load()


def test_env_interpolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RESIZE_OUT", "/srv/thumbs")
    cfg_file = tmp_path / "interp.yaml"
    cfg_file.write_text('output_dir: "${RESIZE_OUT}"\n')

    assert UserSettings.load(cfg_file).output_dir == Path("/srv/thumbs")


@pytest.mark.parametrize("dpi", [(0, 72), (72, -1)])
def test_non_positive_dpi_rejected(dpi):
    with pytest.raises(ValueError):
        UserSettings(dpi=dpi)


def test_encode_options_follow_settings():
    cfg = UserSettings(output_format=OutputFormat.PNG, quality=None, dpi=(96, 96))
    options = cfg.encode_options()

    assert options.output_format is OutputFormat.PNG
    assert options.quality is None
    assert options.dpi == (96, 96)


def test_bench_box():
    assert UserSettings(bench_width=640, bench_height=0).bench_box == BoundingBox(640, 0)
