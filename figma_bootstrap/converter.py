"""
HTML 轉換器：DesignNode 樹 → 語意化 HTML + 樣式表

深度優先走訪：每個節點先分類（文字 / 容器 / 按鈕 / 圖片 / 其他），
再由 styles 與 bootstrap 模組取得樣式與 utility class，
產生的樣式規則記錄在 ConversionContext 的 StyleTable 中。
"""

from dataclasses import dataclass, field
from typing import Optional

from .bootstrap import BOOTSTRAP_VERSION, flex_classes, merge_classes, spacing_classes
from .components import scan_for_components
from .nodes import CONTAINER_KINDS, DesignNode, NodeKind
from .styles import extract_node_styles, extract_typography
from .stylesheet import StyleTable

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}

_SECTION_KINDS = (NodeKind.FRAME, NodeKind.COMPONENT)


def escape_html(text: str) -> str:
    """跳脫五個 HTML 特殊字元；不具冪等性，呼叫端只能跳脫一次."""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


@dataclass
class ConversionOptions:
    """單次轉換的設定."""
    title: str = "Figma Design"
    # 子頁面的 stylesheet 路徑為 ../styles.css
    is_child: bool = False
    root_depth: int = 2
    # 預設維持原本的分類順序：INSTANCE 由容器規則處理
    instance_as_button: bool = False
    bootstrap_version: str = BOOTSTRAP_VERSION


@dataclass
class ConversionContext:
    """一次轉換的可變狀態：class 流水號與樣式表."""
    counter: int = 0
    styles: StyleTable = field(default_factory=StyleTable)

    def mint(self, prefix: str = "element") -> str:
        self.counter += 1
        return f"{prefix}-{self.counter}"


@dataclass
class ConversionResult:
    html: str
    styles: StyleTable
    components: list = field(default_factory=list)

    @property
    def css(self) -> str:
        return self.styles.to_css()


class HtmlConverter:

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()

    def convert(self, root: Optional[DesignNode], context: Optional[ConversionContext] = None) -> ConversionResult:
        ctx = context or ConversionContext()
        html = self.node_to_html(root, self.options.root_depth, ctx)
        return ConversionResult(html=html, styles=ctx.styles, components=scan_for_components(root))

    # ════════════════════════════════════════════════════════════
    # Node Conversion
    # ════════════════════════════════════════════════════════════

    def node_to_html(self, node: Optional[DesignNode], depth: int, ctx: ConversionContext) -> str:
        if node is None:
            return ""
        indent = "  " * depth

        if node.kind == NodeKind.TEXT:
            return self._text_to_html(node, indent, ctx)
        if node.kind in CONTAINER_KINDS and not self._instance_as_button(node):
            return self._container_to_html(node, depth, indent, ctx)
        if self._is_button(node):
            return self._button_to_html(node, indent, ctx)
        if node.kind == NodeKind.IMAGE:
            return self._image_to_html(node, indent, ctx)
        return self._fallback_to_html(node, depth, indent, ctx)

    def _instance_as_button(self, node: DesignNode) -> bool:
        return self.options.instance_as_button and node.kind == NodeKind.INSTANCE

    def _is_button(self, node: DesignNode) -> bool:
        if node.kind == NodeKind.INSTANCE:
            return True
        return "button" in (node.name or "").lower()

    def _children_to_html(self, node: DesignNode, depth: int, ctx: ConversionContext) -> str:
        return "".join(self.node_to_html(child, depth + 1, ctx) for child in node.children)

    def _text_to_html(self, node: DesignNode, indent: str, ctx: ConversionContext) -> str:
        class_name = ctx.mint("text")
        ctx.styles.record(class_name, extract_typography(node))

        font_size = node.style.font_size or 0
        if font_size > 24:
            tag = "h1"
        elif font_size > 20:
            tag = "h2"
        elif font_size > 16:
            tag = "h3"
        else:
            tag = "p"
        content = escape_html(node.characters or "")
        return f"{indent}<{tag} class=\"{class_name}\">{content}</{tag}>\n"

    def _container_to_html(self, node: DesignNode, depth: int, indent: str, ctx: ConversionContext) -> str:
        class_name = ctx.mint(node.kind.value.lower())
        ctx.styles.record(class_name, extract_node_styles(node))

        tag = "section" if node.kind in _SECTION_KINDS else "div"
        classes = " ".join(merge_classes([class_name], spacing_classes(node), flex_classes(node)))
        html = f"{indent}<{tag} class=\"{classes}\">\n"
        html += self._children_to_html(node, depth, ctx)
        html += f"{indent}</{tag}>\n"
        return html

    def _button_to_html(self, node: DesignNode, indent: str, ctx: ConversionContext) -> str:
        content = node.characters or node.name or "Button"
        class_name = ctx.mint("btn")
        ctx.styles.record(class_name, extract_node_styles(node))

        classes = " ".join(merge_classes(["btn", "btn-primary", class_name], spacing_classes(node)))
        return f"{indent}<button class=\"{classes}\">{escape_html(content)}</button>\n"

    def _image_to_html(self, node: DesignNode, indent: str, ctx: ConversionContext) -> str:
        class_name = ctx.mint("img")
        ctx.styles.record(class_name, extract_node_styles(node))

        classes = " ".join(merge_classes([class_name, "img-fluid"], spacing_classes(node)))
        alt = escape_html(node.name or "image")
        return f"{indent}<img class=\"{classes}\" alt=\"{alt}\" />\n"

    def _fallback_to_html(self, node: DesignNode, depth: int, indent: str, ctx: ConversionContext) -> str:
        class_name = ctx.mint("container")
        ctx.styles.record(class_name, extract_node_styles(node))

        classes = " ".join(merge_classes([class_name], spacing_classes(node)))
        html = f"{indent}<div class=\"{classes}\">\n"
        html += self._children_to_html(node, depth, ctx)
        html += f"{indent}</div>\n"
        return html


def convert_node(
    node: Optional[DesignNode],
    options: Optional[ConversionOptions] = None,
    context: Optional[ConversionContext] = None,
) -> ConversionResult:
    """轉換入口：回傳 HTML 本體與樣式表."""
    return HtmlConverter(options).convert(node, context)
