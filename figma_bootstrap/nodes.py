"""
設計節點模型：Figma 節點樹的型別化表示

轉換核心只接受這裡定義的 DesignNode；原始 JSON 由 figma_reader.FigmaToNode
在讀入時一次驗證完畢，之後的走訪可假設欄位型別正確。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    INSTANCE = "INSTANCE"
    IMAGE = "IMAGE"
    OTHER = "OTHER"

    @classmethod
    def from_figma_type(cls, figma_type: Optional[str]) -> "NodeKind":
        try:
            return cls(figma_type)
        except ValueError:
            return cls.OTHER


# 可當容器處理的節點種類（rectangle / frame / group / component / instance）
CONTAINER_KINDS = (
    NodeKind.RECTANGLE,
    NodeKind.FRAME,
    NodeKind.GROUP,
    NodeKind.COMPONENT,
    NodeKind.INSTANCE,
)


@dataclass(frozen=True)
class Color:
    """Figma 顏色，各通道為 0–1 浮點數."""
    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class Paint:
    type: str
    color: Optional[Color] = None

    @property
    def is_solid(self) -> bool:
        return self.type == "SOLID"


@dataclass(frozen=True)
class Effect:
    type: str
    visible: Optional[bool] = None
    offset_x: float = 0
    offset_y: float = 0
    radius: float = 0
    spread: float = 0
    color: Optional[Color] = None

    @property
    def is_drop_shadow(self) -> bool:
        return self.type == "DROP_SHADOW"


@dataclass(frozen=True)
class TextStyle:
    font_size: Optional[float] = None
    font_weight: Optional[float] = None
    line_height_px: Optional[float] = None
    letter_spacing: Optional[float] = None
    text_align_horizontal: Optional[str] = None


@dataclass(frozen=True)
class DesignNode:
    """一個 Figma 節點（走訪期間不可變）."""
    kind: NodeKind
    name: str = ""
    id: str = ""
    figma_type: str = ""
    children: tuple = ()

    # 外觀
    fills: tuple = ()
    strokes: tuple = ()
    stroke_weight: Optional[float] = None
    effects: tuple = ()
    corner_radius: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    # Auto Layout
    layout_mode: Optional[str] = None
    primary_axis_align: Optional[str] = None
    counter_axis_align: Optional[str] = None
    item_spacing: Optional[float] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None
    padding_top: Optional[float] = None
    padding_bottom: Optional[float] = None

    # 文字（僅 TEXT）
    characters: Optional[str] = None
    style: TextStyle = field(default_factory=TextStyle)

    @property
    def has_padding(self) -> bool:
        return bool(self.padding_left or self.padding_right or self.padding_top or self.padding_bottom)

    def walk(self):
        """前序走訪自身與所有子孫節點."""
        yield self
        for child in self.children:
            yield from child.walk()
