"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .converter import ConversionOptions

DEFAULT_CONFIG_PATH = "figma-bootstrap.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "output", "conversion"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"apiKey", "fileKey"},
    "output": {"dir", "bootstrapVersion", "title"},
    "conversion": {"rootDepth", "instanceAsButton"},
}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    conversion = _section(cfg, "conversion")
    depth = conversion.get("rootDepth")
    if depth is not None and (not isinstance(depth, int) or isinstance(depth, bool) or depth < 0):
        _warn(f"conversion.rootDepth 應為非負整數，目前是 {depth!r}")
    as_button = conversion.get("instanceAsButton")
    if as_button is not None and not isinstance(as_button, bool):
        _warn(f"conversion.instanceAsButton 應為 true/false，目前是 {type(as_button).__name__}")

    version = _section(cfg, "output").get("bootstrapVersion")
    if version is not None and not isinstance(version, str):
        _warn(f"output.bootstrapVersion 應為字串，目前是 {type(version).__name__}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def _section(cfg: dict, name: str) -> dict:
    section = (cfg or {}).get(name, {})
    return section if isinstance(section, dict) else {}


def resolve_token(cfg: dict) -> Optional[str]:
    """Token 來源順序：figma.apiKey → FIGMA_API_KEY → FIGMA_TOKEN."""
    return (
        _section(cfg, "figma").get("apiKey")
        or os.environ.get("FIGMA_API_KEY")
        or os.environ.get("FIGMA_TOKEN")
    )


def conversion_options_from_config(cfg: dict, **overrides) -> ConversionOptions:
    """由 config 建立 ConversionOptions；overrides 中值為 None 的項目略過."""
    output = _section(cfg, "output")
    conversion = _section(cfg, "conversion")
    options = ConversionOptions()

    if isinstance(output.get("title"), str):
        options.title = output["title"]
    if isinstance(output.get("bootstrapVersion"), str):
        options.bootstrap_version = output["bootstrapVersion"]
    depth = conversion.get("rootDepth")
    if isinstance(depth, int) and not isinstance(depth, bool) and depth >= 0:
        options.root_depth = depth
    if isinstance(conversion.get("instanceAsButton"), bool):
        options.instance_as_button = conversion["instanceAsButton"]

    for key, value in overrides.items():
        if value is not None:
            setattr(options, key, value)
    return options
