"""覆写结果的序列化与输出。"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def render_config(config: Any) -> str:
    # 保留键顺序与中文/emoji 组名，便于与订阅原文对照。
    return yaml.safe_dump(config, allow_unicode=True, sort_keys=False, default_flow_style=False)


def write_config(path: Path, config: Any) -> None:
    """写入覆写后的完整配置。"""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_config(config), encoding="utf-8")
