"""
HtmlConverter 測試：節點分類、標籤輸出、class 流水號、樣式表累積。
"""
import re

import pytest

from figma_bootstrap.converter import (
    ConversionContext,
    ConversionOptions,
    HtmlConverter,
    convert_node,
    escape_html,
)
from figma_bootstrap.nodes import Color, DesignNode, NodeKind, Paint, TextStyle


def make_node(kind=NodeKind.FRAME, **kwargs):
    return DesignNode(kind=kind, **kwargs)


def text(characters, font_size=14, **kwargs):
    return make_node(NodeKind.TEXT, characters=characters, style=TextStyle(font_size=font_size), **kwargs)


def convert(node, **options):
    options.setdefault("root_depth", 0)
    return convert_node(node, ConversionOptions(**options))


def count_tags(html, tag):
    opened = len(re.findall(rf"<{tag}[\s>]", html))
    closed = html.count(f"</{tag}>")
    return opened, closed


# ─── escape_html ────────────────────────────────────────────────────────────

def test_escape_all_special_characters():
    assert escape_html("&<>\"'") == "&amp;&lt;&gt;&quot;&#039;"


def test_escape_is_not_idempotent():
    for raw in ["a & b", "<p>", "\"q\"", "it's", "&amp;"]:
        once = escape_html(raw)
        assert escape_html(once) != once


def test_escape_plain_text_unchanged():
    assert escape_html("Hello") == "Hello"


# ─── 文字節點 ────────────────────────────────────────────────────────────────

def test_text_heading_escapes_content():
    result = convert(text("Hi & Bye", font_size=28))
    assert result.html == '<h1 class="text-1">Hi &amp; Bye</h1>\n'


@pytest.mark.parametrize("size,tag", [
    (25, "h1"), (24, "h2"), (21, "h2"), (20, "h3"), (17, "h3"), (16, "p"), (None, "p"),
])
def test_text_tag_thresholds(size, tag):
    node = make_node(NodeKind.TEXT, characters="x", style=TextStyle(font_size=size))
    assert convert(node).html.startswith(f"<{tag} ")


def test_text_style_rule_is_typography_only():
    node = make_node(
        NodeKind.TEXT, characters="x", width=100,
        fills=(Paint("SOLID", Color(1, 0, 0)),),
        style=TextStyle(font_size=18, font_weight=600),
    )
    result = convert(node)
    assert result.styles.rules == {"text-1": {"fontSize": "18px", "fontWeight": "600"}}


def test_text_without_characters():
    assert convert(make_node(NodeKind.TEXT)).html == '<p class="text-1"></p>\n'


# ─── 容器節點 ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("kind,tag,prefix", [
    (NodeKind.FRAME, "section", "frame"),
    (NodeKind.COMPONENT, "section", "component"),
    (NodeKind.RECTANGLE, "div", "rectangle"),
    (NodeKind.GROUP, "div", "group"),
    (NodeKind.INSTANCE, "div", "instance"),
])
def test_container_tags(kind, tag, prefix):
    result = convert(make_node(kind))
    assert result.html == f'<{tag} class="{prefix}-1">\n</{tag}>\n'


def test_container_class_order():
    node = make_node(
        layout_mode="VERTICAL", counter_axis_align="CENTER", item_spacing=8,
        padding_left=8, padding_right=8, padding_top=8, padding_bottom=8,
    )
    assert convert(node).html.startswith('<section class="frame-1 p-2 gap-2 d-flex flex-column align-items-center">')


def test_container_with_empty_styles_records_nothing():
    assert len(convert(make_node(NodeKind.GROUP)).styles) == 0


def test_full_tree_frame_text_image():
    root = make_node(
        NodeKind.FRAME, name="Card", width=400,
        children=(
            text("Title", font_size=16),
            make_node(NodeKind.IMAGE, name="Logo", width=100),
        ),
    )
    result = convert(root)
    assert result.html == (
        '<section class="frame-1">\n'
        '  <p class="text-2">Title</p>\n'
        '  <img class="img-3 img-fluid" alt="Logo" />\n'
        '</section>\n'
    )
    assert list(result.styles.rules) == ["frame-1", "text-2", "img-3"]


def test_indentation_follows_depth():
    root = make_node(children=(make_node(NodeKind.GROUP, children=(text("deep"),)),))
    lines = convert(root, root_depth=2).html.splitlines()
    assert lines[0].startswith("    <section")
    assert lines[1].startswith("      <div")
    assert lines[2].startswith("        <p")
    assert lines[-1] == "    </section>"


def test_children_keep_source_order():
    root = make_node(children=tuple(text(f"item {i}") for i in range(5)))
    html = convert(root).html
    positions = [html.index(f"item {i}") for i in range(5)]
    assert positions == sorted(positions)


# ─── 巢狀平衡 ────────────────────────────────────────────────────────────────

def test_balanced_markup_zero_children():
    opened, closed = count_tags(convert(make_node(NodeKind.GROUP)).html, "div")
    assert opened == closed == 1


def test_balanced_markup_50_deep_chain():
    node = make_node(NodeKind.GROUP)
    for i in range(49):
        node = make_node(NodeKind.GROUP if i % 2 else NodeKind.FRAME, children=(node,))
    html = convert(node).html
    for tag in ("div", "section"):
        opened, closed = count_tags(html, tag)
        assert opened == closed
    assert html.count("\n") == 100


def test_balanced_markup_mixed_tree():
    leaf_kinds = (NodeKind.OTHER, NodeKind.INSTANCE, NodeKind.COMPONENT, NodeKind.RECTANGLE)
    root = make_node(children=tuple(
        make_node(kind, children=(make_node(NodeKind.GROUP), text("t"))) for kind in leaf_kinds
    ))
    html = convert(root).html
    for tag in ("div", "section", "p"):
        opened, closed = count_tags(html, tag)
        assert opened == closed


# ─── 按鈕 / 圖片 / fallback ───────────────────────────────────────────────────

def test_named_button_on_non_container():
    node = make_node(NodeKind.OTHER, name="Submit Button", padding_left=16, padding_right=16,
                     padding_top=8, padding_bottom=8)
    assert convert(node).html == '<button class="btn btn-primary btn-1 px-4 py-2">Submit Button</button>\n'


def test_named_button_on_rectangle_stays_container():
    assert convert(make_node(NodeKind.RECTANGLE, name="Primary button")).html.startswith('<div class="rectangle-1">')


def test_instance_stays_container_by_default():
    node = make_node(NodeKind.INSTANCE, name="CTA", children=(text("Go"),))
    assert convert(node).html.startswith('<div class="instance-1">')


def test_instance_as_button_option():
    node = make_node(NodeKind.INSTANCE, name="CTA", children=(text("Go"),))
    html = convert(node, instance_as_button=True).html
    assert html == '<button class="btn btn-primary btn-1">CTA</button>\n'


def test_button_content_fallbacks():
    assert ">Click</button>" in convert(make_node(NodeKind.OTHER, name="button", characters="Click")).html
    html = convert(make_node(NodeKind.INSTANCE), instance_as_button=True).html
    assert ">Button</button>" in html


def test_image_named_button_becomes_button():
    assert convert(make_node(NodeKind.IMAGE, name="button icon")).html.startswith("<button ")


def test_image_alt_and_spacing():
    node = make_node(NodeKind.IMAGE, name='Hero "main"', padding_left=4, padding_right=4,
                     padding_top=4, padding_bottom=4)
    assert convert(node).html == '<img class="img-1 img-fluid p-1" alt="Hero &quot;main&quot;" />\n'


def test_image_default_alt():
    assert 'alt="image"' in convert(make_node(NodeKind.IMAGE)).html


def test_fallback_container_recurses_without_flex():
    node = make_node(NodeKind.OTHER, name="Ellipse", layout_mode="HORIZONTAL", item_spacing=16,
                     children=(text("a"),))
    assert convert(node).html == (
        '<div class="container-1 gap-4">\n'
        '  <p class="text-2">a</p>\n'
        '</div>\n'
    )


def test_none_node_is_empty_fragment():
    assert convert(None).html == ""
    assert HtmlConverter().node_to_html(None, 3, ConversionContext()) == ""


# ─── class 流水號與樣式表 ────────────────────────────────────────────────────

def test_class_names_unique_and_increasing():
    root = make_node(width=500, children=tuple(make_node(NodeKind.RECTANGLE, width=i + 1) for i in range(10)))
    result = convert(root)
    numbers = [int(n) for n in re.findall(r'class="[a-z]+-(\d+)', result.html)]
    assert numbers == list(range(1, 12))
    assert len(result.styles) == 11
    assert len(set(result.styles.rules)) == len(result.styles)


def test_shared_context_continues_counter():
    ctx = ConversionContext()
    converter = HtmlConverter(ConversionOptions(root_depth=0))
    converter.convert(make_node(width=10), ctx)
    second = converter.convert(make_node(width=20), ctx)
    assert second.html.startswith('<section class="frame-2">')
    assert list(second.styles.rules) == ["frame-1", "frame-2"]


def test_fresh_conversion_restarts_counter():
    convert(make_node())
    assert convert(make_node()).html.startswith('<section class="frame-1">')


def test_components_scanned():
    root = make_node(name="Page", children=(
        make_node(NodeKind.COMPONENT, name="Button", id="1:2"),
        make_node(NodeKind.GROUP, children=(make_node(NodeKind.INSTANCE, name="Icon", id="1:3"),)),
    ))
    result = convert(root)
    assert [c.name for c in result.components] == ["Button", "Icon"]
