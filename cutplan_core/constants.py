"""Core constants shared across configuration helpers."""

VALID_ORIENTATIONS = ("inline", "cross")
DEFAULT_ORIENTATION = VALID_ORIENTATIONS[0]
VALID_OUTPUT_FORMATS = ("svg", "jpeg", "png", "csv", "yaml")
IMAGE_FORMATS = ("svg", "jpeg", "png")
FORMAT_ALIASES = {
    "jpg": "jpeg",
    "yml": "yaml",
}
MAIN_SECTION = "main"
REMAIN_SECTION = "remain"

# 1px to approximately 1cm at 72 dpi
ACTUAL_SIZE_RATIO = 28.346
RENDER_DPI = 72

DEFAULT_RENDER_SETTINGS = {
    'paper_color': '#e9e5e5',
    'stroke_color': '#555555',
    'text_color': '#555555',
    'main_outer_color': 'skyblue',
    'main_inner_color': 'lightgreen',
    'remain_outer_color': 'lightsalmon',
    'remain_inner_color': 'lightcoral',
    'line_width': 0.18,
    'font_size': 3.0,
    'font_family': 'sans-serif',
    'ratio': ACTUAL_SIZE_RATIO,
}
COLOR_SETTING_KEYS = (
    'paper_color',
    'stroke_color',
    'text_color',
    'main_outer_color',
    'main_inner_color',
    'remain_outer_color',
    'remain_inner_color',
)
DEFAULT_RUNTIME_PATHS = {
    "out_dir": "output",
}
DEFAULT_LAYOUT_SETTINGS = {
    'margin': (0.0, 0.0),
    'orientation': DEFAULT_ORIENTATION,
    'formats': ('svg',),
}
