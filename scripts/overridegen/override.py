"""覆写主流程：清洗节点 -> 分池 -> 解析覆写 -> 生成分组/规则/DNS -> 合并配置。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .classify import classify, clean_proxies
from .constants import DEFAULT_LOG_LEVEL
from .dns import assemble_dns
from .entries import (
    collect_rejected,
    parse_domain_entries,
    parse_domain_entry,
    parse_ip_entries,
    parse_ip_entry,
)
from .groups import build_proxy_groups
from .options import OverrideOptions
from .rules import emit_rules


@dataclass
class OverrideReport:
    """一次覆写的统计信息，供命令行输出。"""

    node_count: int = 0
    pool_sizes: dict[str, int] = field(default_factory=dict)
    group_count: int = 0
    rule_count: int = 0
    rejected_entries: list[str] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.node_count > 0


def build_override(config: Any, arguments: Mapping[str, Any] | None = None) -> Any:
    """对订阅配置执行覆写，返回新的配置对象。

    没有可用节点时原样返回输入对象，不生成任何分组与规则。输入对象本身不会被修改。
    """

    config, _ = run_override(config, arguments)
    return config


def run_override(
    config: Any,
    arguments: Mapping[str, Any] | None = None,
) -> tuple[Any, OverrideReport]:
    report = OverrideReport()
    if not isinstance(config, Mapping):
        return config, report

    proxies = clean_proxies(config.get("proxies"))
    if not proxies:
        return config, report

    options = OverrideOptions.from_arguments(arguments)
    pools = classify(proxies)
    domain_entries = parse_domain_entries(options.emby_domains)
    ip_entries = parse_ip_entries(options.emby_ipcidr)

    groups = build_proxy_groups(pools, options)
    rules = emit_rules(domain_entries, ip_entries, config.get("rules"), options)
    log_level = config.get("log-level")

    result = dict(config)
    result.update(
        {
            "proxies": proxies,
            "log-level": DEFAULT_LOG_LEVEL if log_level is None else log_level,
            "dns": assemble_dns(config.get("dns"), options),
            "proxy-groups": [group.to_dict() for group in groups],
            "rules": rules,
        }
    )

    report.node_count = len(proxies)
    report.pool_sizes = {
        "emby": len(pools.emby),
        "video": len(pools.video),
        "google": len(pools.google),
        "global": len(pools.global_out),
    }
    report.group_count = len(groups)
    report.rule_count = len(rules)
    report.rejected_entries = [
        f"emby_domains: {token}"
        for token in collect_rejected(options.emby_domains, parse_domain_entry)
    ] + [
        f"emby_ipcidr: {token}"
        for token in collect_rejected(options.emby_ipcidr, parse_ip_entry)
    ]
    return result, report
