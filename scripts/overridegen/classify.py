"""节点清洗与按标签分池。"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Mapping

from .constants import MAINLAND_PATTERN, NOTICE_PATTERN
from .models import NodePools
from .text import dedupe_keep_order, tag_pattern

logger = logging.getLogger(__name__)


class NodeCategory(Enum):
    """节点分类。标签匹配为不区分大小写的子串匹配。"""

    EMBY = "emby"
    VIDEO = "video"
    GOOGLE = "google"
    GLOBAL = "global"

    def matches(self, name: str) -> bool:
        if self is NodeCategory.GLOBAL:
            return MAINLAND_PATTERN.search(name) is None
        return _MATCHERS[self].search(name) is not None


_MATCHERS = {
    NodeCategory.EMBY: tag_pattern("emby"),
    # 兼容常见笔误 [vidio]。
    NodeCategory.VIDEO: tag_pattern("vidio", "video"),
    NodeCategory.GOOGLE: tag_pattern("google"),
}


def clean_proxies(proxies: Any) -> list[Any]:
    """剔除无名节点与订阅商塞入的公告节点。

    其余字段原样透传；名字带首尾空白时返回去空白后的浅拷贝，保证后续引用一致。
    """

    if not isinstance(proxies, list):
        return []

    cleaned: list[Any] = []
    for node in proxies:
        if not isinstance(node, Mapping):
            continue
        name = node.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        if NOTICE_PATTERN.search(name):
            logger.debug("跳过公告节点: %s", name)
            continue
        stripped = name.strip()
        cleaned.append(node if stripped == name else {**node, "name": stripped})
    return cleaned


def pool_for(category: NodeCategory, names: Iterable[str]) -> list[str]:
    return dedupe_keep_order(name for name in names if category.matches(name))


def classify(nodes: Iterable[Mapping[str, Any]]) -> NodePools:
    """把已清洗节点按标签分入 Emby / Video / Google / Global 四个池。"""

    names = dedupe_keep_order(node["name"] for node in nodes)
    return NodePools(
        all_names=names,
        emby=pool_for(NodeCategory.EMBY, names),
        video=pool_for(NodeCategory.VIDEO, names),
        google=pool_for(NodeCategory.GOOGLE, names),
        global_out=pool_for(NodeCategory.GLOBAL, names),
    )
