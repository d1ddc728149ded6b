"""
figma-bootstrap — Figma 節點樹 → 語意化 HTML + Bootstrap utility class

Figma 的 Auto Layout / padding 對應到 Bootstrap spacing 級距，
其餘外觀（底色、邊框、陰影、圓角、尺寸、字型）輸出為 styles.css。
"""

__version__ = "0.1.0"

from .nodes import Color, DesignNode, Effect, NodeKind, Paint, TextStyle
from .bootstrap import (
    BOOTSTRAP_SCALE,
    flex_classes,
    merge_classes,
    nearest_scale,
    spacing_classes,
)
from .styles import color_to_css, extract_node_styles, extract_typography
from .stylesheet import StyleTable
from .converter import (
    ConversionContext,
    ConversionOptions,
    ConversionResult,
    HtmlConverter,
    convert_node,
    escape_html,
)
from .components import scan_for_components, component_metadata
from .figma_reader import (
    FigmaAPIClient,
    FigmaAPIError,
    FigmaDataError,
    FigmaToNode,
    find_main_node,
    load_node_file,
)
from .writer import build_css, build_html_document, write_conversion
from .config import load_config, validate_config, conversion_options_from_config

__all__ = [
    "__version__",
    "Color",
    "DesignNode",
    "Effect",
    "NodeKind",
    "Paint",
    "TextStyle",
    "BOOTSTRAP_SCALE",
    "flex_classes",
    "merge_classes",
    "nearest_scale",
    "spacing_classes",
    "color_to_css",
    "extract_node_styles",
    "extract_typography",
    "StyleTable",
    "ConversionContext",
    "ConversionOptions",
    "ConversionResult",
    "HtmlConverter",
    "convert_node",
    "escape_html",
    "scan_for_components",
    "component_metadata",
    "FigmaAPIClient",
    "FigmaAPIError",
    "FigmaDataError",
    "FigmaToNode",
    "find_main_node",
    "load_node_file",
    "build_css",
    "build_html_document",
    "write_conversion",
    "load_config",
    "validate_config",
    "conversion_options_from_config",
]
