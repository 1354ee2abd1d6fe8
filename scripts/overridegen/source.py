"""订阅配置加载与结构校验。"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_config(path: Path) -> dict[str, Any]:
    """加载 Clash/mihomo YAML 配置。

    空文件视为空配置；顶层不是映射时直接抛错，防止后续静默输出不完整配置。
    """

    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"配置文件顶层不是映射，实际类型为 `{type(data).__name__}`")
    return data


def validate_config(config: dict[str, Any]) -> list[str]:
    """检查覆写前的配置结构，返回需要提示的 warning。

    这里只提示、不改写输入，避免静默修复掩盖问题来源。
    """

    warnings: list[str] = []
    proxies = config.get("proxies")
    if proxies is None:
        warnings.append("配置中没有 `proxies`，覆写不会生效。")
    elif not isinstance(proxies, list):
        warnings.append(f"`proxies` 必须是数组，实际类型为 `{type(proxies).__name__}`。")

    rules = config.get("rules")
    if rules is not None and not isinstance(rules, list):
        warnings.append("`rules` 必须是数组或 null，上游规则将被忽略。")

    dns = config.get("dns")
    if dns is not None and not isinstance(dns, dict):
        warnings.append("`dns` 不是映射，将以空 DNS 段为底重新生成。")
    return warnings
