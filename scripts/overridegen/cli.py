"""命令行参数解析。"""

from __future__ import annotations

import argparse
from typing import Sequence

from .options import parse_argument_string


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """解析命令行参数。

    覆写参数既可以用订阅站的 `k=v&k=v` 串整体传入，也可以用 `--set` 逐项覆盖。
    """

    parser = argparse.ArgumentParser(description="为 Clash/mihomo 订阅生成分组、规则与 DNS 覆写")
    parser.add_argument("input", help="订阅配置 YAML 文件路径")
    parser.add_argument(
        "-o",
        "--output",
        default="",
        help="输出文件路径；为空时写到标准输出",
    )
    parser.add_argument(
        "--arguments",
        default="",
        help="订阅站风格参数串，例如 'ns=SS&use_geosite=0'",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="单项覆写参数，可重复；优先级高于 --arguments",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="严格模式：存在被丢弃的 Emby 覆写条目时返回非 0",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="输出调试日志",
    )
    return parser.parse_args(argv)


def collect_arguments(args: argparse.Namespace) -> dict[str, str]:
    """合并 `--arguments` 与 `--set`，后者覆盖前者。"""

    merged = parse_argument_string(args.arguments) if args.arguments else {}
    for item in args.overrides:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"--set 参数格式应为 KEY=VALUE：{item}")
        merged[key] = value
    return merged
