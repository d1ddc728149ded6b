"""
Bootstrap utility class 對應

把 Figma 的連續數值（padding、itemSpacing）對到 Bootstrap 5 的離散 spacing 級距，
並把 Auto Layout 設定轉成 flex 相關 class。
"""

import math
from typing import Optional

from .nodes import DesignNode

BOOTSTRAP_VERSION = "5.3.0"

# Bootstrap spacing 級距（index → px）
BOOTSTRAP_SCALE = {
    0: 0,
    1: 4,
    2: 8,
    3: 12,
    4: 16,
    5: 24,
}

JUSTIFY_CLASSES = {
    "MIN": "justify-content-start",
    "CENTER": "justify-content-center",
    "MAX": "justify-content-end",
    "SPACE_BETWEEN": "justify-content-between",
    "SPACE_AROUND": "justify-content-around",
    "SPACE_EVENLY": "justify-content-evenly",
}

ALIGN_CLASSES = {
    "MIN": "align-items-start",
    "CENTER": "align-items-center",
    "MAX": "align-items-end",
    "STRETCH": "align-items-stretch",
}


def round_half_up(value: float) -> int:
    """與 JS Math.round 相同：.5 一律往正無限大進位（Python round 是銀行家進位）."""
    return int(math.floor(value + 0.5))


def nearest_scale(pixels: Optional[float]) -> int:
    """回傳與 pixels 最接近的級距 index；平手時取較小的 index."""
    if not pixels:
        return 0
    px = round_half_up(pixels)
    closest = 0
    closest_diff = abs(px - BOOTSTRAP_SCALE[0])
    for scale, value in BOOTSTRAP_SCALE.items():
        diff = abs(px - value)
        if diff < closest_diff:
            closest_diff = diff
            closest = scale
    return closest


def gap_classes(node: DesignNode) -> list:
    if not node.item_spacing:
        return []
    gap = nearest_scale(node.item_spacing)
    return [f"gap-{gap}"] if gap else []


def spacing_classes(node: Optional[DesignNode]) -> list:
    """padding → p-/px-/py-/ps-/pe-/pt-/pb- class，另含 gap-N.

    不論是否有 Auto Layout 都會套用；gap 與 flex_classes 重複的部分由
    merge_classes 去除。
    """
    if node is None:
        return []
    classes = []

    if node.has_padding:
        left, right = node.padding_left, node.padding_right
        top, bottom = node.padding_top, node.padding_bottom
        if left == right and top == bottom:
            h_scale = nearest_scale(left)
            v_scale = nearest_scale(top)
            if h_scale == v_scale:
                classes.append(f"p-{h_scale}")
            else:
                if h_scale:
                    classes.append(f"px-{h_scale}")
                if v_scale:
                    classes.append(f"py-{v_scale}")
        else:
            # 四邊各自處理
            if left:
                classes.append(f"ps-{nearest_scale(left)}")
            if right:
                classes.append(f"pe-{nearest_scale(right)}")
            if top:
                classes.append(f"pt-{nearest_scale(top)}")
            if bottom:
                classes.append(f"pb-{nearest_scale(bottom)}")

    classes.extend(gap_classes(node))
    return classes


def flex_classes(node: Optional[DesignNode]) -> list:
    """Auto Layout → d-flex / 方向 / justify / align / gap（順序固定）."""
    if node is None or not node.layout_mode:
        return []

    classes = ["d-flex"]
    if node.layout_mode == "HORIZONTAL":
        classes.append("flex-row")
    elif node.layout_mode == "VERTICAL":
        classes.append("flex-column")

    justify = JUSTIFY_CLASSES.get(node.primary_axis_align or "")
    if justify:
        classes.append(justify)
    align = ALIGN_CLASSES.get(node.counter_axis_align or "")
    if align:
        classes.append(align)

    classes.extend(gap_classes(node))
    return classes


def merge_classes(*groups) -> list:
    """串接多組 class，去掉空字串與重複（保留第一次出現的位置）."""
    merged = []
    for group in groups:
        for cls in group:
            if cls and cls not in merged:
                merged.append(cls)
    return merged
