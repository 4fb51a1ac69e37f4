import logging

import pytest

from cutplan_core.config import (
    CoreConfigService,
    RenderConfig,
    load_layout_defaults,
    load_runtime_paths,
    normalize_color,
    normalize_format,
)
from cutplan_core.constants import DEFAULT_RENDER_SETTINGS, DEFAULT_RUNTIME_PATHS
from cutplan_core.errors import InvalidConfigError


def test_render_config_defaults():
    config = RenderConfig()
    assert config.main_outer_color == 'skyblue'
    assert config.ratio == DEFAULT_RENDER_SETTINGS['ratio']
    assert config.line_width == 0.18
    assert not config.exceeds_actual_size


def test_normalize_color_css_rgb():
    assert normalize_color('rgb(85, 85, 85)') == '#555555'
    assert normalize_color('RGB(233,229,229)') == '#e9e5e5'
    assert normalize_color(' beige ') == 'beige'
    assert normalize_color('rgb(300, 0, 0)') == 'rgb(300, 0, 0)'


def test_render_config_accepts_css_rgb():
    config = RenderConfig(paper_color='rgb(255, 255, 255)')
    assert config.paper_color == '#ffffff'


@pytest.mark.parametrize("overrides", [
    {'line_width': 0},
    {'line_width': -1},
    {'line_width': 'thick'},
    {'paper_color': 'not-a-colour'},
    {'remain_inner_color': 'rgb(300, 0, 0)'},
    {'ratio': 'big'},
    {'ratio': 0},
    {'font_size': 0},
    {'font_family': ''},
])
def test_render_config_invalid_values(overrides):
    with pytest.raises(InvalidConfigError):
        RenderConfig().with_overrides(overrides)


def test_render_config_with_overrides_returns_new_config():
    base = RenderConfig()
    updated = base.with_overrides({'paper_color': 'beige', 'ratio': 10})
    assert updated.paper_color == 'beige'
    assert updated.ratio == 10
    assert base.paper_color == DEFAULT_RENDER_SETTINGS['paper_color']


def test_render_config_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING, logger="cutplan"):
        config = RenderConfig().with_overrides({'fonts': {'size': 5}})
    assert config == RenderConfig()
    assert "Ignoring unknown render setting 'fonts'" in caplog.text


def test_render_config_high_ratio_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="cutplan"):
        config = RenderConfig().with_overrides({'ratio': 40})
    assert config.exceeds_actual_size
    assert "high ratio" in caplog.text


def test_render_config_overrides_must_be_mapping():
    with pytest.raises(InvalidConfigError):
        RenderConfig().with_overrides(['ratio', 10])


def test_load_render_config_from_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "render:\n"
        "  paper_color: beige\n"
        "  main_outer_color: '#87ceeb'\n"
        "  ratio: 20\n"
    )
    config = CoreConfigService(config_file).load_render_config()
    assert config.paper_color == 'beige'
    assert config.main_outer_color == '#87ceeb'
    assert config.ratio == 20


def test_load_render_config_missing_section(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("runtime_paths:\n  out_dir: plans\n")
    assert CoreConfigService(config_file).load_render_config() == RenderConfig()


def test_load_render_config_invalid_section(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("render: [beige]\n")
    with pytest.raises(InvalidConfigError) as exc_info:
        CoreConfigService(config_file).load_render_config()
    assert "Invalid render section" in str(exc_info.value)


def test_load_runtime_paths_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    assert load_runtime_paths(config_file) == DEFAULT_RUNTIME_PATHS


def test_load_runtime_paths_override(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("runtime_paths:\n  out_dir: ' plans '\n")
    assert CoreConfigService(config_file).load_runtime_paths() == {'out_dir': 'plans'}


def test_load_runtime_paths_blank_value(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("runtime_paths:\n  out_dir: ''\n")
    with pytest.raises(ValueError):
        load_runtime_paths(config_file)


def test_load_layout_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "defaults:\n"
        "  margin: [2, 3]\n"
        "  orientation: cross\n"
        "  formats: [svg, jpg]\n"
    )
    defaults = load_layout_defaults(config_file)
    assert defaults['margin'] == (2.0, 3.0)
    assert defaults['orientation'] == 'cross'
    assert defaults['formats'] == ('svg', 'jpeg')


def test_load_layout_defaults_margin_mapping(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("defaults:\n  margin: {width: 1, height: 1.5}\n  formats: png\n")
    defaults = CoreConfigService(config_file).load_layout_defaults()
    assert defaults['margin'] == (1.0, 1.5)
    assert defaults['formats'] == ('png',)
    assert defaults['orientation'] == 'inline'


@pytest.mark.parametrize("content", [
    "defaults:\n  orientation: diagonal\n",
    "defaults:\n  margin: [1]\n",
    "defaults:\n  margin: [a, b]\n",
    "defaults:\n  formats: [gif]\n",
    "defaults: [1, 2]\n",
])
def test_load_layout_defaults_invalid(tmp_path, content):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content)
    with pytest.raises(ValueError):
        load_layout_defaults(config_file)


def test_normalize_format_aliases():
    assert normalize_format('JPG') == 'jpeg'
    assert normalize_format('yml') == 'yaml'
    assert normalize_format('svg') == 'svg'
    with pytest.raises(ValueError):
        normalize_format('gif')
