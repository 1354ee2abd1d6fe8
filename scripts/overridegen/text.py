"""字符串层面的小工具：列表切分、去重、主机名归一化与标签判断。"""

from __future__ import annotations

import re
from typing import Any, Iterable

_DELIMITERS = re.compile(r"[,\n\r;|]+")
_SCHEME = re.compile(r"^[a-zA-Z]+://")
_TAIL = re.compile(r"[/?#]")
_PORT = re.compile(r":[0-9]+$")
_IPV4_PREFIX = re.compile(r"^((?:[0-9]{1,3}\.){3}[0-9]{1,3}/[0-9]{1,2})(?=$|[/?#])")
_IPV4_OR_CIDR = re.compile(r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}(?:/[0-9]{1,2})?")


def split_list(raw: Any) -> list[str]:
    """按逗号/换行/分号/竖线切分用户输入。

    与具体分隔符无关，只返回去掉首尾空白后的非空片段。
    """

    if raw is None:
        return []
    return [token.strip() for token in _DELIMITERS.split(str(raw)) if token.strip()]


def dedupe_keep_order(items: Iterable[Any]) -> list[Any]:
    """按首次出现顺序去重。

    规则与分组成员的顺序会影响命中行为，因此不能使用会打乱顺序的去重方式。
    """

    seen: set[Any] = set()
    result: list[Any] = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def normalize_host(raw: Any, keep_prefix: bool = False) -> str:
    """把 URL/带端口写法归一化为裸主机名。

    `keep_prefix=True` 时保留紧跟在 IPv4 后面的 `/掩码`，供 IP 条目使用。
    """

    text = _SCHEME.sub("", str(raw or "").strip())
    if keep_prefix:
        match = _IPV4_PREFIX.match(text)
        if match:
            return match.group(1)
    text = _TAIL.split(text, maxsplit=1)[0]
    text = _PORT.sub("", text)
    return text.strip()


def is_ipv4_or_cidr(host: str) -> bool:
    """按字面形态判断是否为 IPv4 或 IPv4 CIDR（不校验每段取值范围）。"""

    return _IPV4_OR_CIDR.fullmatch(str(host)) is not None


def tag_pattern(*tags: str) -> re.Pattern[str]:
    """编译 `[tag]` 形式的标签匹配器，多个标签任一命中即可，不区分大小写。"""

    return re.compile("|".join(rf"\[{re.escape(tag)}\]" for tag in tags), re.IGNORECASE)
