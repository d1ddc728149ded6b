"""
Figma REST API 讀取與節點樹解析

讀取 Figma 檔案 / 節點資料，並把原始 JSON 轉成型別化的 DesignNode 樹。
"""

import json
from pathlib import Path
from typing import Optional

import requests

from .nodes import Color, DesignNode, Effect, NodeKind, Paint, TextStyle


class FigmaDataError(ValueError):
    """Figma 資料不完整或找不到指定的 page / frame."""


class FigmaAPIError(RuntimeError):
    """Figma API 回應非 200."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 30):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, url: str, params: Optional[dict] = None) -> dict:
        resp = self.session.get(url, params=params or {}, timeout=self.timeout)
        if resp.status_code != 200:
            raise FigmaAPIError(_error_message(resp), status_code=resp.status_code)
        data = resp.json()
        # API 有時以 200 回傳 {"status": ..., "err": ...}
        if isinstance(data, dict) and data.get("err"):
            raise FigmaAPIError(str(data["err"]), status_code=data.get("status"))
        return data

    def get_file(self, file_key: str) -> dict:
        return self._get(f"{self.BASE_URL}/files/{file_key}")

    def get_file_nodes(self, file_key: str, node_ids: list) -> dict:
        return self._get(f"{self.BASE_URL}/files/{file_key}/nodes", {"ids": ",".join(node_ids)})


def _error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        return str(body.get("err") or body.get("message") or f"HTTP {resp.status_code}")
    return f"HTTP {resp.status_code}"


class FigmaToNode:
    """將 Figma API 節點 JSON 轉成 DesignNode.

    欄位型別在這裡一次檢查完畢，格式不符一律拋 FigmaDataError；
    轉換核心不再重複檢查。
    """

    def convert(self, figma_node: dict) -> DesignNode:
        if not isinstance(figma_node, dict):
            raise FigmaDataError(f"節點格式錯誤：應為 JSON 物件，目前是 {type(figma_node).__name__}")
        figma_type = _string(figma_node.get("type"), "type") or ""
        name = _string(figma_node.get("name"), "name") or ""
        layout_mode = _string(figma_node.get("layoutMode"), "layoutMode")
        if layout_mode == "NONE":
            layout_mode = None

        children = figma_node.get("children") or []
        if not isinstance(children, list):
            raise FigmaDataError(f"'{name or '?'}' 的 children 應為陣列")

        return DesignNode(
            kind=NodeKind.from_figma_type(figma_type),
            name=name,
            id=_string(figma_node.get("id"), "id") or "",
            figma_type=figma_type,
            children=tuple(self.convert(c) for c in children),
            fills=self._paints(figma_node.get("fills")),
            strokes=self._paints(figma_node.get("strokes")),
            stroke_weight=_number(figma_node.get("strokeWeight")),
            effects=self._effects(figma_node.get("effects")),
            corner_radius=_number(figma_node.get("cornerRadius")),
            width=_number(figma_node.get("width")),
            height=_number(figma_node.get("height")),
            layout_mode=layout_mode,
            primary_axis_align=_string(figma_node.get("primaryAxisAlignItems"), "primaryAxisAlignItems"),
            counter_axis_align=_string(figma_node.get("counterAxisAlignItems"), "counterAxisAlignItems"),
            item_spacing=_number(figma_node.get("itemSpacing")),
            padding_left=_number(figma_node.get("paddingLeft")),
            padding_right=_number(figma_node.get("paddingRight")),
            padding_top=_number(figma_node.get("paddingTop")),
            padding_bottom=_number(figma_node.get("paddingBottom")),
            characters=_string(figma_node.get("characters"), "characters"),
            style=self._text_style(figma_node.get("style")),
        )

    def _paints(self, raw) -> tuple:
        if not raw:
            return ()
        if not isinstance(raw, list):
            raise FigmaDataError(f"fills / strokes 應為陣列，目前是 {type(raw).__name__}")
        return tuple(
            Paint(type=_string(p.get("type"), "paint.type") or "", color=_color(p.get("color")))
            for p in raw
            if isinstance(p, dict)
        )

    def _effects(self, raw) -> tuple:
        if not raw:
            return ()
        if not isinstance(raw, list):
            raise FigmaDataError(f"effects 應為陣列，目前是 {type(raw).__name__}")
        effects = []
        for e in raw:
            if not isinstance(e, dict):
                continue
            offset = _object(e.get("offset"), "effect.offset")
            # REST API 用 radius；部分匯出工具寫成 blur.value
            radius = e.get("radius")
            if radius is None:
                radius = _object(e.get("blur"), "effect.blur").get("value")
            visible = e.get("visible")
            if visible is not None and not isinstance(visible, bool):
                raise FigmaDataError(f"effect.visible 應為 true/false，目前是 {visible!r}")
            effects.append(Effect(
                type=_string(e.get("type"), "effect.type") or "",
                visible=visible,
                offset_x=_number(offset.get("x")) or 0,
                offset_y=_number(offset.get("y")) or 0,
                radius=_number(radius) or 0,
                spread=_number(e.get("spread")) or 0,
                color=_color(e.get("color")),
            ))
        return tuple(effects)

    def _text_style(self, raw) -> TextStyle:
        if not isinstance(raw, dict):
            return TextStyle()
        return TextStyle(
            font_size=_number(raw.get("fontSize")),
            font_weight=_number(raw.get("fontWeight")),
            line_height_px=_number(raw.get("lineHeightPx")),
            letter_spacing=_number(raw.get("letterSpacing")),
            text_align_horizontal=_string(raw.get("textAlignHorizontal"), "textAlignHorizontal"),
        )


def _number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    raise FigmaDataError(f"數值欄位格式錯誤：{value!r}")


def _string(value, field_name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise FigmaDataError(f"{field_name} 應為字串，目前是 {value!r}")


def _object(value, field_name: str) -> dict:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    raise FigmaDataError(f"{field_name} 應為 JSON 物件，目前是 {type(value).__name__}")


def _color(raw) -> Optional[Color]:
    if raw is None:
        return None
    raw = _object(raw, "color")
    channels = {}
    for key in ("r", "g", "b"):
        value = _number(raw.get(key))
        if value is None:
            raise FigmaDataError(f"顏色缺少 {key} 通道：{raw!r}")
        channels[key] = value
    a = _number(raw.get("a"))
    return Color(a=1.0 if a is None else a, **channels)


# ─── 文件查找 ────────────────────────────────────────────────────────────────

def find_main_node(data: dict) -> Optional[dict]:
    """/nodes 回應取第一個節點的 document；單一節點 JSON 直接回傳."""
    if not isinstance(data, dict):
        return None
    nodes = data.get("nodes")
    if isinstance(nodes, dict):
        for entry in nodes.values():
            if not isinstance(entry, dict):
                return None
            return entry.get("document") or entry
        return None
    if data.get("type"):
        return data
    return None


def list_pages(file_data: dict) -> list:
    pages = (file_data.get("document") or {}).get("children", [])
    return [{"name": p.get("name", ""), "id": p.get("id", "")} for p in pages]


def find_page(file_data: dict, page_name: str) -> dict:
    for page in (file_data.get("document") or {}).get("children", []):
        if page.get("name") == page_name:
            return page
    raise FigmaDataError(f"找不到頁面：{page_name}")


def _find_by_name(node: dict, name: str) -> Optional[dict]:
    if node.get("name") == name:
        return node
    for child in node.get("children", []) or []:
        found = _find_by_name(child, name)
        if found:
            return found
    return None


def find_frame(page: dict, frame_name: str) -> dict:
    """在頁面底下深度優先搜尋同名節點（不含頁面本身）."""
    for child in page.get("children", []) or []:
        found = _find_by_name(child, frame_name)
        if found:
            return found
    raise FigmaDataError(f"找不到 frame / component：{frame_name}")


def load_node_file(path: str) -> DesignNode:
    """讀取存檔的 /nodes 回應或單一節點 JSON，轉成 DesignNode."""
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except UnicodeDecodeError as e:
        raise FigmaDataError(f"'{path}' 不是 UTF-8 編碼：{e}") from e
    except json.JSONDecodeError as e:
        raise FigmaDataError(f"'{path}' 不是合法的 JSON：{e}") from e
    main = find_main_node(data)
    if not main:
        raise FigmaDataError("No node data found in Figma file")
    return FigmaToNode().convert(main)
