"""规则生成。

内核自上而下匹配、首条命中生效，因此这里的输出顺序就是优先级：
用户覆写 > 固定高价值目的地 > 地区/分类规则 > 上游规则 > 末尾 MATCH。
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from .constants import (
    AI_SERVICE_SUFFIXES,
    DIRECT,
    GOOGLE_FAMILY_RULES,
    TELEGRAM_DOMAINS,
    VIDEO_CATEGORIES,
)
from .models import DomainEntry, IpEntry
from .options import OverrideOptions

_MATCH_RULE = re.compile(r"^MATCH,", re.IGNORECASE)


def strip_match_rules(rules: Any) -> list[Any]:
    """去掉上游已有的 MATCH 规则，末尾兜底由本脚本统一追加。"""

    if not isinstance(rules, list):
        return []
    return [rule for rule in rules if not _MATCH_RULE.match(str(rule).lstrip())]


def geosite_or_domains(
    category: str,
    domains: Iterable[str],
    target: str,
    use_geosite: bool,
) -> list[str]:
    if use_geosite:
        return [f"GEOSITE,{category},{target}"]
    return [f"DOMAIN-SUFFIX,{domain},{target}" for domain in domains]


def emby_rules(
    domain_entries: list[DomainEntry],
    ip_entries: list[IpEntry],
    options: OverrideOptions,
) -> list[str]:
    """Emby 覆写：先域名后 IP，每类都先可直连再需代理。"""

    direct_group = options.emby_group_direct
    proxy_group = options.emby_group_proxy
    rules: list[str] = []
    for force_proxy, group in ((False, direct_group), (True, proxy_group)):
        for entry in domain_entries:
            if entry.force_proxy is force_proxy:
                rules.append(f"{entry.matcher},{entry.host},{group}")
    for force_proxy, group in ((False, direct_group), (True, proxy_group)):
        for entry in ip_entries:
            if entry.force_proxy is force_proxy:
                rules.append(f"IP-CIDR,{entry.cidr},{group},no-resolve")
    return rules


def ai_google_rules(target: str) -> list[str]:
    rules = [f"DOMAIN-SUFFIX,{suffix},{target}" for suffix in AI_SERVICE_SUFFIXES]
    rules.extend(f"{matcher},{domain},{target}" for matcher, domain in GOOGLE_FAMILY_RULES)
    return rules


def video_rules(target: str, use_geosite: bool) -> list[str]:
    rules: list[str] = []
    for category, domains in VIDEO_CATEGORIES:
        rules.extend(geosite_or_domains(category, domains, target, use_geosite))
    return rules


def region_rules(global_out: str, use_geosite: bool) -> list[str]:
    """Telegram 走 Global Out，国内走 DIRECT；GEOIP,cn 始终追加。"""

    if use_geosite:
        rules = [f"GEOSITE,telegram,{global_out}", f"GEOSITE,cn,{DIRECT}"]
    else:
        # 无 geosite 时只回退 Telegram 域名，国内流量由下面的 GEOIP 兜住。
        rules = [f"DOMAIN-SUFFIX,{domain},{global_out}" for domain in TELEGRAM_DOMAINS]
    rules.append(f"GEOIP,cn,{DIRECT},no-resolve")
    return rules


def emit_rules(
    domain_entries: list[DomainEntry],
    ip_entries: list[IpEntry],
    upstream_rules: Any,
    options: OverrideOptions,
) -> list[Any]:
    """按固定顺序拼出完整规则列表，最后一条必定是唯一的 MATCH。"""

    rules: list[Any] = []
    rules.extend(emby_rules(domain_entries, ip_entries, options))
    rules.extend(ai_google_rules(options.ai_google_name))
    rules.extend(video_rules(options.video_name, options.use_geosite))
    rules.extend(region_rules(options.global_out_name, options.use_geosite))
    rules.extend(strip_match_rules(upstream_rules))
    rules.append(f"MATCH,{options.final_name}")
    return rules
