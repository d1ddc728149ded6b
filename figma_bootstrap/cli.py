#!/usr/bin/env python3
"""
figma-bootstrap CLI — Figma → Bootstrap HTML/CSS

  python -m figma_bootstrap.cli convert frame.json -o output     # 離線轉換存檔 JSON
  python -m figma_bootstrap.cli fetch --file-key KEY --page P --frame F
  python -m figma_bootstrap.cli pages --file-key KEY              # 列出頁面（檢查 API 存取）
  python -m figma_bootstrap.cli watch frame.json -o output        # 存檔 JSON 變更時自動轉換
"""

import argparse
import os
import sys
import time

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .config import DEFAULT_CONFIG_PATH, _section, conversion_options_from_config, load_config, resolve_token
from .converter import ConversionContext, ConversionOptions, HtmlConverter
from .figma_reader import (
    FigmaAPIClient,
    FigmaAPIError,
    FigmaDataError,
    FigmaToNode,
    find_frame,
    find_main_node,
    find_page,
    list_pages,
    load_node_file,
)
from .writer import build_children_index, file_slug, write_conversion, write_file


def _output_dir(args, config: dict) -> str:
    return args.output or _section(config, "output").get("dir") or "output"


def _api_error(e: FigmaAPIError, file_key: str) -> None:
    if e.status_code == 403:
        print("❌ Figma API 403：API key 無效或已過期，或檔案未分享給此帳號。")
    elif e.status_code == 404:
        print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
    else:
        print(f"❌ Figma API 錯誤（{e.status_code}）：{e}")


def _report(paths: list) -> None:
    for path in paths:
        print(f"   📄 {path}")


def run_convert(input_path: str, output_dir: str, options: ConversionOptions, output_file: str = "index.html") -> list:
    """讀取存檔 JSON → 轉換 → 寫檔，回傳寫出的檔案路徑."""
    root = load_node_file(input_path)
    result = HtmlConverter(options).convert(root)
    if result.components:
        print(f"   🧩 Found {len(result.components)} component(s)")
    return write_conversion(output_dir, result, options, output_file)


def cmd_convert(args, config: dict) -> int:
    """Convert: 存檔的 Figma JSON → HTML/CSS."""
    output_dir = _output_dir(args, config)
    options = conversion_options_from_config(
        config,
        title=args.title,
        instance_as_button=True if args.instance_as_button else None,
    )
    if args.output_file and args.output_file != "index.html":
        options.is_child = True

    print(f"🚀 Converting: {args.input}")
    try:
        written = run_convert(args.input, output_dir, options, args.output_file or "index.html")
    except FileNotFoundError:
        print(f"❌ 找不到輸入檔：{args.input}")
        return 1
    except FigmaDataError as e:
        print(f"❌ {e}")
        return 1
    _report(written)
    print("   ✅ Done.")
    return 0


def _unique_filename(name: str, used: set) -> str:
    base = file_slug(name)
    filename = f"{base}.html"
    n = 2
    while filename in used or filename == "index.html":
        filename = f"{base}-{n}.html"
        n += 1
    used.add(filename)
    return filename


def cmd_fetch(args, config: dict) -> int:
    """Fetch: Figma API → page → frame → index.html + 子節點頁面."""
    token = resolve_token(config)
    file_key = args.file_key or _section(config, "figma").get("fileKey")

    if not token:
        print("❌ 請設定 FIGMA_API_KEY 環境變數，或在 figma-bootstrap.config.json 的 figma.apiKey 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return 1
    if not file_key:
        print("❌ 請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return 1

    output_dir = _output_dir(args, config)
    print(f"📥 Fetching Figma file: {file_key}")
    print(f"   Page: {args.page}")
    print(f"   Frame: {args.frame}")

    client = FigmaAPIClient(token)
    converter = FigmaToNode()
    try:
        file_data = client.get_file(file_key)
        page = find_page(file_data, args.page)
        print(f"   ✅ Found page: {page.get('id', '')}")
        frame = find_frame(page, args.frame)
        frame_id = frame.get("id", "")
        print(f"   ✅ Found frame: {frame_id}")

        frame_data = client.get_file_nodes(file_key, [frame_id])
        main = find_main_node(frame_data)
        if not main:
            raise FigmaDataError("No node data found in Figma file")
        root = converter.convert(main)

        ctx = ConversionContext()
        options = conversion_options_from_config(config, title=args.frame)
        result = HtmlConverter(options).convert(root, ctx)

        folder = os.path.join(output_dir, file_slug(args.frame))
        child_pages = []
        children = list(root.children)
        if not children:
            print(f"   ⚠️  No children found in frame: {args.frame}")
        elif not args.no_children:
            print(f"   Found {len(children)} children, fetching detailed data...")
            detail = client.get_file_nodes(file_key, [c.id for c in children])
            nodes = detail.get("nodes") or {}
            used = set()
            for i, child in enumerate(children, 1):
                entry = nodes.get(child.id) or {}
                raw = entry.get("document")
                if not raw:
                    print(f"   ⚠️  [{i}] No node data for child: {child.name}")
                    continue
                print(f"   [{i}/{len(children)}] Processing child: {child.name}")
                filename = _unique_filename(child.name, used)
                child_options = conversion_options_from_config(config, title=child.name, is_child=True)
                # 延用同一個 context：class 名稱不與主頁重複，樣式併入同一份 styles.css
                child_result = HtmlConverter(child_options).convert(converter.convert(raw), ctx)
                child_pages.append((child, child_result, child_options, filename))
    except FigmaAPIError as e:
        _api_error(e, file_key)
        return 1
    except FigmaDataError as e:
        print(f"❌ {e}")
        return 1

    # 全部轉換成功才寫檔；主頁最後寫，styles.css 才會包含子頁面的規則
    written = []
    for child, child_result, child_options, filename in child_pages:
        written.extend(write_conversion(folder, child_result, child_options, filename))
    if child_pages:
        index_entries = [(child.name, child.id, filename) for child, _, _, filename in child_pages]
        index_path = os.path.join(folder, "index.html")
        write_file(index_path, build_children_index(args.frame, index_entries, options.bootstrap_version))
        written.append(index_path)
    written = write_conversion(output_dir, result, options) + written
    _report(written)
    print("   ✅ Conversion complete!")
    return 0


def cmd_pages(args, config: dict) -> int:
    """Pages: 列出檔案內所有頁面，用來確認 API key 與 file key."""
    token = resolve_token(config)
    file_key = args.file_key or _section(config, "figma").get("fileKey")
    if not token:
        print("❌ 請設定 FIGMA_API_KEY 環境變數，或在 figma-bootstrap.config.json 的 figma.apiKey 設定。")
        return 1
    if not file_key:
        print("❌ 請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return 1

    print(f"🔑 Testing Figma API access: {file_key}")
    try:
        file_data = FigmaAPIClient(token).get_file(file_key)
    except FigmaAPIError as e:
        _api_error(e, file_key)
        return 1
    print("   ✅ API key is valid and file is accessible")
    pages = list_pages(file_data)
    if not pages:
        print("   ⚠️  此 Figma 檔案沒有任何頁面。")
    for page in pages:
        print(f"   - {page['name']} ({page['id']})")
    return 0


_WATCHED_EXTENSIONS = (".json",)


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, target_path=None, debounce: float = 1.0):
        self.callback = callback
        self.target_path = os.path.abspath(target_path) if target_path else None
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def on_modified(self, event):
        self._handle(event, event.src_path)

    def on_created(self, event):
        self._handle(event, event.src_path)

    def on_moved(self, event):
        # 編輯器先寫暫存檔再 rename 覆蓋，要看目的路徑
        self._handle(event, event.dest_path)

    def _handle(self, event, path: str):
        if event.is_directory:
            return
        if not path.endswith(_WATCHED_EXTENSIONS):
            return
        if self.target_path and os.path.abspath(path) != self.target_path:
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {path}")
        self.callback()


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽輸入 JSON，變更時重新轉換."""
    input_path = args.input
    output_dir = _output_dir(args, config)
    options = conversion_options_from_config(config, title=args.title)
    print(f"👀 Watching for changes in '{input_path}'...")
    print(f"   Output: {output_dir}")
    print("   Press Ctrl+C to stop.")

    def convert_task():
        try:
            _report(run_convert(input_path, output_dir, options))
        except (OSError, FigmaDataError) as e:
            print(f"   ⚠️  Conversion failed: {e}")

    # 初始執行一次
    convert_task()

    event_handler = ChangeHandler(convert_task, target_path=input_path)
    observer = Observer()
    observer.schedule(event_handler, path=os.path.dirname(os.path.abspath(input_path)), recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="figma-bootstrap: Figma → Bootstrap HTML/CSS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    convert_p = sub.add_parser("convert", help="Saved Figma JSON → HTML/CSS",
        epilog="Examples:\n  figma-bootstrap convert frame.json -o ./output\n  figma-bootstrap convert card.json -o ./output --output-file card.html",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    convert_p.add_argument("input", help="Figma /nodes response or single node JSON")
    convert_p.add_argument("--output", "-o", help="Output directory (default: output)")
    convert_p.add_argument("--title", help="Document title")
    convert_p.add_argument("--output-file", default="index.html", help="HTML file name (non-index files link ../styles.css)")
    convert_p.add_argument("--instance-as-button", action="store_true", help="Render INSTANCE nodes as buttons")

    fetch_p = sub.add_parser("fetch", help="Figma API → HTML/CSS",
        epilog="Examples:\n  figma-bootstrap fetch --file-key ABC123 --page Design --frame Button\n  figma-bootstrap fetch --file-key ABC123 --page Design --frame Card -o ./dist",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    fetch_p.add_argument("--file-key", help="Figma file key")
    fetch_p.add_argument("--page", required=True, help="Page name in the Figma file")
    fetch_p.add_argument("--frame", required=True, help="Frame or component name")
    fetch_p.add_argument("--output", "-o", help="Output directory (default: output)")
    fetch_p.add_argument("--no-children", action="store_true", help="Skip per-child pages")

    pages_p = sub.add_parser("pages", help="List pages (checks API access)")
    pages_p.add_argument("--file-key", help="Figma file key")

    watch_p = sub.add_parser("watch", help="Re-convert when the input JSON changes",
        epilog="Examples:\n  figma-bootstrap watch frame.json -o ./output",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("input", help="Figma /nodes response or single node JSON")
    watch_p.add_argument("--output", "-o", help="Output directory (default: output)")
    watch_p.add_argument("--title", help="Document title")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "convert":
        return cmd_convert(args, config)
    if args.command == "fetch":
        return cmd_fetch(args, config)
    if args.command == "pages":
        return cmd_pages(args, config)
    if args.command == "watch":
        return cmd_watch(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
