"""樣式表累積與 CSS 序列化."""

import re
from dataclasses import dataclass, field
from typing import Dict

_UPPER = re.compile(r"([A-Z])")


def css_property(name: str) -> str:
    """backgroundColor → background-color."""
    return _UPPER.sub(r"-\1", name).lower()


@dataclass
class StyleTable:
    """class 名稱 → 樣式 dict，保留第一次寫入的順序."""
    rules: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def record(self, class_name: str, styles: dict) -> None:
        if not styles:
            return
        # 同名再寫入時以最後一次為準，位置不變
        self.rules[class_name] = dict(styles)

    def __len__(self) -> int:
        return len(self.rules)

    def __contains__(self, class_name: str) -> bool:
        return class_name in self.rules

    def render_rule(self, class_name: str) -> str:
        body = "\n".join(
            f"  {css_property(prop)}: {val};" for prop, val in self.rules[class_name].items()
        )
        return f"\n.{class_name} {{\n{body}\n}}\n"

    def to_css(self) -> str:
        return "\n".join(self.render_rule(name) for name in self.rules)
