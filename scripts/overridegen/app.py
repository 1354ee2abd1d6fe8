"""覆写生成器主流程。"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

import yaml

from .cli import collect_arguments, parse_args
from .override import run_override
from .render import render_config, write_config
from .source import load_config, validate_config


def main(argv: Sequence[str] | None = None) -> int:
    """脚本主流程：读取配置 -> 覆写 -> 输出。"""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    input_path = Path(args.input).expanduser().resolve()
    if not input_path.exists():
        print(f"[ERROR] 找不到输入文件: {input_path}", file=sys.stderr)
        return 1

    try:
        arguments = collect_arguments(args)
        config = load_config(input_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    all_warnings = [f"[validate] {item}" for item in validate_config(config)]
    result, report = run_override(config, arguments)
    all_warnings.extend(f"[emby] 已丢弃无法解析的条目 {item}" for item in report.rejected_entries)

    if args.strict and report.rejected_entries:
        print("[ERROR] strict 模式命中 warning，已终止生成：", file=sys.stderr)
        for item in all_warnings:
            print(f"  - {item}", file=sys.stderr)
        return 2

    if args.output:
        output_path = Path(args.output).expanduser().resolve()
        try:
            write_config(output_path, result)
        except OSError as exc:
            print(f"[ERROR] 写入输出文件失败: {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(render_config(result))

    if report.applied:
        print(
            f"[OK] 节点 {report.node_count} 个，"
            f"策略组 {report.group_count} 个，规则 {report.rule_count} 条。",
            file=sys.stderr,
        )
    else:
        print("[WARN] 没有可用节点，配置原样输出。", file=sys.stderr)
    if all_warnings:
        # warning 输出到 stderr，便于在 CI 中与正常输出分流采集。
        print("[WARN] 需要人工关注的项目：", file=sys.stderr)
        for item in all_warnings:
            print(f"  - {item}", file=sys.stderr)

    return 0
