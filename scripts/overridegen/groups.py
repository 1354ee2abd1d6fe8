"""策略组构建。"""

from __future__ import annotations

from .constants import DIRECT, GLOBAL_OUT_LABEL, VIDEO_LABEL
from .models import NodePools, ProxyGroup
from .options import OverrideOptions
from .text import dedupe_keep_order


def create_smart_group(
    label: str,
    pool: list[str],
    pools: NodePools,
    options: OverrideOptions,
) -> list[ProxyGroup]:
    """为一个节点池生成“测速 / 故障转移 / 手动选择”三层组。

    手动选择默认指向故障转移组而不是测速组：优先可用性，其次才是延迟。
    """

    members = pools.choose(pool)
    best = ProxyGroup(
        name=f"⚡ {label} (Best)@{options.namespace}",
        type="url-test",
        proxies=members,
        url=options.health_url,
        interval=options.interval_best,
        lazy=True,
    )
    fallback = ProxyGroup(
        name=f"🛡️ {label} (Fallback)@{options.namespace}",
        type="fallback",
        proxies=list(members),
        url=options.health_url,
        interval=options.interval_fallback,
    )
    selector = ProxyGroup(
        name=options.scoped(label),
        type="select",
        proxies=[fallback.name, best.name, DIRECT],
    )
    return [best, fallback, selector]


def ai_google_proxies(pools: NodePools) -> list[str]:
    """AI & Google 固定出口的候选。

    有 [google] 节点时只列这些节点，不放 DIRECT，防止误点直连；
    否则取首个 Global 节点与首个节点，再附上 DIRECT。
    """

    if pools.google:
        return list(pools.google)
    heads = dedupe_keep_order(names[0] for names in (pools.global_out, pools.all_names) if names)
    return (heads or [DIRECT]) + [DIRECT]


def build_emby_groups(pools: NodePools, options: OverrideOptions) -> list[ProxyGroup]:
    best_name = options.emby_best_name
    return [
        ProxyGroup(
            name=best_name,
            type="url-test",
            proxies=pools.choose(pools.emby),
            url=options.health_url,
            interval=options.interval_best,
            lazy=True,
        ),
        # 可直连：DIRECT 优先，不通时切到 Emby 最优节点。
        ProxyGroup(
            name=options.emby_group_direct,
            type="fallback",
            proxies=[DIRECT, best_name],
            url=options.health_url,
            interval=options.emby_interval,
        ),
        ProxyGroup(
            name=options.emby_group_proxy,
            type="fallback",
            proxies=[best_name, DIRECT],
            url=options.health_url,
            interval=options.emby_interval,
        ),
    ]


def build_proxy_groups(pools: NodePools, options: OverrideOptions) -> list[ProxyGroup]:
    """按固定顺序输出完整的策略组列表。"""

    groups: list[ProxyGroup] = []
    groups.extend(create_smart_group(GLOBAL_OUT_LABEL, pools.global_out, pools, options))
    groups.extend(create_smart_group(VIDEO_LABEL, pools.video, pools, options))
    groups.extend(build_emby_groups(pools, options))
    groups.append(
        ProxyGroup(name=options.ai_google_name, type="select", proxies=ai_google_proxies(pools))
    )
    groups.append(
        ProxyGroup(
            name=options.final_name,
            type="select",
            proxies=[options.global_out_name, DIRECT],
        )
    )
    return groups
