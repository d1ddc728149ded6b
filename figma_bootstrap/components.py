"""
組件掃描：找出 frame 內的 component / instance / frame，輸出 components.json 用的 metadata
"""

from typing import Optional

from .nodes import DesignNode, NodeKind

_COMPONENT_KINDS = (NodeKind.COMPONENT, NodeKind.INSTANCE, NodeKind.FRAME)
_SCAN_INTO_KINDS = (NodeKind.FRAME, NodeKind.GROUP)


def scan_for_components(node: Optional[DesignNode]) -> list:
    """只往 FRAME / GROUP 內部遞迴；component 與 instance 內部不再展開."""
    components = []
    if node is None:
        return components
    for child in node.children:
        if child.kind in _COMPONENT_KINDS:
            components.append(child)
        if child.kind in _SCAN_INTO_KINDS:
            components.extend(scan_for_components(child))
    return components


def component_metadata(components: list) -> list:
    return [
        {"name": c.name, "type": c.figma_type or c.kind.value, "id": c.id}
        for c in components
    ]
