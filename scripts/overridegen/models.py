"""覆写过程中的中间模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import DIRECT


@dataclass(frozen=True)
class DomainEntry:
    """一条 Emby 域名覆写。

    `force_proxy` 来自前缀 `!`（不能直连），`exact` 来自前缀 `=`（精确匹配 DOMAIN）。
    """

    host: str
    force_proxy: bool = False
    exact: bool = False

    @property
    def matcher(self) -> str:
        return "DOMAIN" if self.exact else "DOMAIN-SUFFIX"


@dataclass(frozen=True)
class IpEntry:
    """一条 Emby IP/CIDR 覆写。"""

    host: str
    force_proxy: bool = False

    @property
    def cidr(self) -> str:
        # 未写掩码的单个地址按 /32 处理。
        return self.host if "/" in self.host else f"{self.host}/32"


@dataclass
class NodePools:
    """按节点名标签划分出的节点池，成员可以同时出现在多个池中。"""

    all_names: list[str]
    emby: list[str] = field(default_factory=list)
    video: list[str] = field(default_factory=list)
    google: list[str] = field(default_factory=list)
    global_out: list[str] = field(default_factory=list)

    def choose(self, pool: list[str] | None) -> list[str]:
        """请求的池为空时依次回落到 Global、全部节点，最后是 DIRECT。"""

        for candidate in (pool, self.global_out, self.all_names):
            members = [name for name in candidate or [] if name]
            if members:
                return members
        return [DIRECT]


@dataclass
class ProxyGroup:
    """一个由内核执行选择逻辑的策略组。"""

    name: str
    type: str
    proxies: list[str]
    url: str | None = None
    interval: int | None = None
    lazy: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "proxies": list(self.proxies),
        }
        if self.url is not None:
            data["url"] = self.url
        if self.interval is not None:
            data["interval"] = self.interval
        if self.lazy is not None:
            data["lazy"] = self.lazy
        return data
