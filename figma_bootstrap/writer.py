"""
輸出：包成完整 HTML 文件並寫出 index.html / styles.css / components.json
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from .bootstrap import BOOTSTRAP_VERSION
from .components import component_metadata
from .converter import ConversionOptions, ConversionResult, escape_html
from .stylesheet import StyleTable


def bootstrap_cdn(version: str = BOOTSTRAP_VERSION) -> str:
    return f"https://cdn.jsdelivr.net/npm/bootstrap@{version}/dist"


def file_slug(name: str) -> str:
    """檔名用：小寫，空白轉 '-'."""
    slug = re.sub(r"\s+", "-", (name or "").strip()).lower()
    return slug or "unnamed"


def write_file(path, content: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def build_html_document(
    body: str,
    title: str = "Figma Design",
    is_child: bool = False,
    bootstrap_version: str = BOOTSTRAP_VERSION,
) -> str:
    css_path = "../styles.css" if is_child else "styles.css"
    cdn = bootstrap_cdn(bootstrap_version)
    return (
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "<head>\n"
        "    <meta charset=\"UTF-8\">\n"
        "    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\">\n"
        f"    <title>{escape_html(title)}</title>\n"
        "\n"
        "    <!-- Bootstrap CSS -->\n"
        f"    <link href=\"{cdn}/css/bootstrap.min.css\" rel=\"stylesheet\">\n"
        "\n"
        "    <!-- Custom Styles -->\n"
        f"    <link href=\"{css_path}\" rel=\"stylesheet\">\n"
        "</head>\n"
        "<body>\n"
        "    <div class=\"container-fluid p-4\">\n"
        f"{body}"
        "    </div>\n"
        "\n"
        "    <!-- Bootstrap JS Bundle -->\n"
        f"    <script src=\"{cdn}/js/bootstrap.bundle.min.js\"></script>\n"
        "</body>\n"
        "</html>\n"
    )


def build_css(table: StyleTable, bootstrap_version: str = BOOTSTRAP_VERSION) -> str:
    header = (
        "/* Generated from Figma */\n"
        f"/* Bootstrap version: {bootstrap_version} */\n"
        "/* Spacing uses Bootstrap utility classes */\n\n"
    )
    return header + table.to_css()


def build_children_index(frame_name: str, children: list, bootstrap_version: str = BOOTSTRAP_VERSION) -> str:
    """子頁面連結列表；children 為 [(name, id, filename), ...]."""
    links = "".join(
        f"            <a href=\"{escape_html(filename)}\" class=\"list-group-item list-group-item-action\">\n"
        f"                <h5 class=\"mb-1\">{escape_html(name)}</h5>\n"
        f"                <p class=\"mb-1 text-muted\">ID: {escape_html(node_id)}</p>\n"
        "            </a>\n"
        for name, node_id, filename in children
    )
    body = (
        "        <h1 class=\"mb-4\">Frame: " + escape_html(frame_name) + "</h1>\n"
        "        <div class=\"list-group\">\n"
        f"{links}"
        "        </div>\n"
    )
    return build_html_document(body, title=f"Frame: {frame_name}", is_child=True, bootstrap_version=bootstrap_version)


def write_conversion(
    output_dir: str,
    result: ConversionResult,
    options: ConversionOptions,
    output_file: str = "index.html",
) -> list:
    """寫出 HTML；非子頁面時另寫 styles.css 與 components.json。回傳寫出的檔案路徑."""
    base = Path(output_dir)
    written = []

    html_path = base / output_file
    write_file(html_path, build_html_document(
        result.html,
        title=options.title,
        is_child=options.is_child,
        bootstrap_version=options.bootstrap_version,
    ))
    written.append(str(html_path))

    if options.is_child:
        return written

    css_path = base / "styles.css"
    write_file(css_path, build_css(result.styles, options.bootstrap_version))
    written.append(str(css_path))

    if result.components:
        meta_path = base / "components.json"
        write_file(meta_path, json.dumps(component_metadata(result.components), indent=2, ensure_ascii=False))
        written.append(str(meta_path))
    return written
