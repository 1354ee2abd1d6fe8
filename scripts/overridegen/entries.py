"""Emby 覆写条目解析。

用户输入是自由文本，任何无法解析的条目只丢弃该条，不中断整批生成。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from .models import DomainEntry, IpEntry
from .text import dedupe_keep_order, is_ipv4_or_cidr, normalize_host, split_list

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 前缀剥离的轮数上限，保证 `!!!!=...` 这类输入也能终止。
DOMAIN_PREFIX_PASSES = 3
IP_PREFIX_PASSES = 2


def parse_domain_entry(raw: Any) -> DomainEntry | None:
    """解析单条域名覆写，支持 `!`、`=` 任意顺序组合，如 `!=emby.example.com`。"""

    text = str(raw or "").strip()
    if not text:
        return None

    force_proxy = False
    exact = False
    for _ in range(DOMAIN_PREFIX_PASSES):
        if text.startswith("!"):
            force_proxy = True
        elif text.startswith("="):
            exact = True
        else:
            break
        text = text[1:].strip()

    host = normalize_host(text)
    # IP 应写到 emby_ipcidr 中。
    if not host or is_ipv4_or_cidr(host):
        return None
    return DomainEntry(host=host, force_proxy=force_proxy, exact=exact)


def parse_ip_entry(raw: Any) -> IpEntry | None:
    """解析单条 IPv4/CIDR 覆写，前缀 `!` 表示不能直连。"""

    text = str(raw or "").strip()
    if not text:
        return None

    force_proxy = False
    for _ in range(IP_PREFIX_PASSES):
        if not text.startswith("!"):
            break
        force_proxy = True
        text = text[1:].strip()

    host = normalize_host(text, keep_prefix=True)
    if not host or not is_ipv4_or_cidr(host):
        return None
    return IpEntry(host=host, force_proxy=force_proxy)


def _parse_all(raw: Any, parser: Callable[[str], T | None]) -> list[T]:
    parsed: list[T] = []
    for token in dedupe_keep_order(split_list(raw)):
        entry = parser(token)
        if entry is None:
            logger.debug("丢弃无法解析的覆写条目: %s", token)
            continue
        parsed.append(entry)
    return parsed


def parse_domain_entries(raw: Any) -> list[DomainEntry]:
    return _parse_all(raw, parse_domain_entry)


def parse_ip_entries(raw: Any) -> list[IpEntry]:
    return _parse_all(raw, parse_ip_entry)


def collect_rejected(raw: Any, parser: Callable[[str], object | None]) -> list[str]:
    """返回被 `parser` 拒绝的原始条目，供命令行提示用户。"""

    return [token for token in dedupe_keep_order(split_list(raw)) if parser(token) is None]
