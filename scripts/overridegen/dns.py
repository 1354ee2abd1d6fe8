"""DNS 段合并。"""

from __future__ import annotations

from typing import Any, Mapping

from .constants import (
    DEFAULT_NAMESERVERS,
    NAMESERVER_POLICY,
    NAMESERVERS,
    PROXY_SERVER_NAMESERVERS,
)
from .options import OverrideOptions


def merge_nameserver_policy(
    existing: Any,
    fixed: Mapping[str, list[str]] = NAMESERVER_POLICY,
) -> dict[str, Any]:
    """先保留调用方已有的 nameserver-policy，再叠加固定分区；键冲突时固定分区生效。"""

    merged: dict[str, Any] = dict(existing) if isinstance(existing, Mapping) else {}
    for key, servers in fixed.items():
        merged[key] = list(servers)
    return merged


def assemble_dns(existing: Any, options: OverrideOptions) -> dict[str, Any]:
    """以现有 dns 段为底，覆盖固定的解析策略字段。"""

    base: dict[str, Any] = dict(existing) if isinstance(existing, Mapping) else {}
    base.update(
        {
            "enable": options.dns_enable,
            "ipv6": options.dns_ipv6,
            "enhanced-mode": options.dns_mode,
            "default-nameserver": list(DEFAULT_NAMESERVERS),
            "nameserver": list(NAMESERVERS),
            "proxy-server-nameserver": list(PROXY_SERVER_NAMESERVERS),
            "nameserver-policy": merge_nameserver_policy(base.get("nameserver-policy")),
        }
    )
    return base
