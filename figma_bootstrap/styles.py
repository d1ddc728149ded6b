"""
樣式擷取：把單一節點的外觀屬性轉成 CSS 屬性 dict

key 使用 camelCase（backgroundColor…），序列化時才轉 kebab-case。
缺少的屬性一律不輸出，不會補 transparent 之類的佔位值。
"""

from typing import Optional

from .bootstrap import round_half_up
from .nodes import Color, DesignNode, Paint

TEXT_ALIGN = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}


def format_number(value) -> str:
    """以 JS 的方式輸出數字：16.0 → '16'，0.5 → '0.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def px(value) -> str:
    return f"{format_number(value)}px"


def color_to_css(color: Optional[Color]) -> str:
    if color is None:
        return "transparent"
    r = round_half_up(color.r * 255)
    g = round_half_up(color.g * 255)
    b = round_half_up(color.b * 255)
    if color.a < 1:
        return f"rgba({r}, {g}, {b}, {format_number(color.a)})"
    return f"rgb({r}, {g}, {b})"


def extract_fill(paint: Optional[Paint]) -> Optional[str]:
    """只處理 SOLID paint；其他類型（漸層、圖片）回傳 None."""
    if paint is None or not paint.is_solid:
        return None
    return color_to_css(paint.color)


def extract_node_styles(node: DesignNode) -> dict:
    styles = {}

    if node.fills:
        fill = extract_fill(node.fills[0])
        if fill:
            styles["backgroundColor"] = fill

    if node.strokes:
        stroke = extract_fill(node.strokes[0])
        if stroke and node.stroke_weight:
            styles["border"] = f"{px(node.stroke_weight)} solid {stroke}"

    shadows = [
        f"{px(e.offset_x or 0)} {px(e.offset_y or 0)} {px(e.radius or 0)} {px(e.spread or 0)} {color_to_css(e.color)}"
        for e in node.effects
        if e.is_drop_shadow and e.visible is not False
    ]
    if shadows:
        styles["boxShadow"] = ", ".join(shadows)

    if node.corner_radius:
        styles["borderRadius"] = px(node.corner_radius)

    # flex 相關一律交給 Bootstrap class，不寫進樣式表
    if node.width:
        styles["width"] = px(node.width)
    if node.height:
        styles["height"] = px(node.height)

    return styles


def extract_typography(node: DesignNode) -> dict:
    styles = {}
    style = node.style
    if style.font_size:
        styles["fontSize"] = px(style.font_size)
    if style.font_weight:
        styles["fontWeight"] = format_number(style.font_weight)
    if style.line_height_px:
        styles["lineHeight"] = px(style.line_height_px)
    if style.letter_spacing:
        styles["letterSpacing"] = px(style.letter_spacing)
    if style.text_align_horizontal:
        styles["textAlign"] = TEXT_ALIGN.get(style.text_align_horizontal, "left")
    return styles
