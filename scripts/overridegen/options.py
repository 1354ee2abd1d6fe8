"""调用方参数（`$arguments`）到类型化配置的转换。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import parse_qsl

from .constants import (
    AI_GOOGLE_LABEL,
    DEFAULT_DNS_MODE,
    DEFAULT_EMBY_INTERVAL,
    DEFAULT_HEALTH_URL,
    DEFAULT_INTERVAL_BEST,
    DEFAULT_INTERVAL_FALLBACK,
    DEFAULT_NAMESPACE,
    EMBY_BEST_LABEL,
    EMBY_DIRECT_LABEL,
    EMBY_PROXY_LABEL,
    FINAL_LABEL,
    GLOBAL_OUT_LABEL,
    VIDEO_LABEL,
)


def _text(value: Any, default: str) -> str:
    # 与订阅站脚本一致：缺省或空串才回落默认值，之后再去首尾空白。
    if value is None or value == "":
        return default
    if isinstance(value, (list, tuple)):
        # YAML/类型化调用方可能直接传列表，按逗号拼回原始串。
        value = ",".join("" if item is None else str(item) for item in value)
    return str(value).strip()


def _flag(value: Any, default: str, truthy_when_not_zero: bool) -> bool:
    if isinstance(value, bool):
        text = "1" if value else "0"
    else:
        text = (default if value is None else str(value)).strip()
    if truthy_when_not_zero:
        return text != "0"
    return text == "1"


def _interval(value: Any, default: int) -> int:
    """解析探测间隔秒数；非数字或非正数时使用默认值。"""

    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        seconds = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default
    return seconds if seconds > 0 else default


def parse_argument_string(text: str) -> dict[str, str]:
    """解析 `ns=SS&use_geosite=0` 形式的参数串（订阅站 `#` 后的写法）。"""

    cleaned = text.strip().lstrip("#?")
    return dict(parse_qsl(cleaned, keep_blank_values=True))


@dataclass(frozen=True)
class OverrideOptions:
    """一次覆写的全部可调参数。"""

    namespace: str = DEFAULT_NAMESPACE
    use_geosite: bool = True
    dns_enable: bool = True
    dns_mode: str = DEFAULT_DNS_MODE
    dns_ipv6: bool = False
    health_url: str = DEFAULT_HEALTH_URL
    interval_best: int = DEFAULT_INTERVAL_BEST
    interval_fallback: int = DEFAULT_INTERVAL_FALLBACK
    emby_interval: int = DEFAULT_EMBY_INTERVAL
    emby_group_direct: str = ""
    emby_group_proxy: str = ""
    emby_domains: str = ""
    emby_ipcidr: str = ""

    def __post_init__(self) -> None:
        # Emby 组名默认值依赖命名空间，需在构造后补齐。
        if not self.emby_group_direct:
            object.__setattr__(self, "emby_group_direct", self.scoped(EMBY_DIRECT_LABEL))
        if not self.emby_group_proxy:
            object.__setattr__(self, "emby_group_proxy", self.scoped(EMBY_PROXY_LABEL))

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any] | None = None) -> "OverrideOptions":
        args = arguments if isinstance(arguments, Mapping) else {}
        return cls(
            namespace=_text(args.get("ns"), DEFAULT_NAMESPACE),
            use_geosite=_flag(args.get("use_geosite"), "1", truthy_when_not_zero=True),
            dns_enable=_flag(args.get("dns_enable"), "1", truthy_when_not_zero=True),
            dns_mode=_text(args.get("dns_mode"), DEFAULT_DNS_MODE),
            dns_ipv6=_flag(args.get("dns_ipv6"), "0", truthy_when_not_zero=False),
            health_url=_text(args.get("health_url"), DEFAULT_HEALTH_URL),
            interval_best=_interval(args.get("interval_best"), DEFAULT_INTERVAL_BEST),
            interval_fallback=_interval(args.get("interval_fallback"), DEFAULT_INTERVAL_FALLBACK),
            emby_interval=_interval(args.get("emby_interval"), DEFAULT_EMBY_INTERVAL),
            emby_group_direct=_text(args.get("emby_group_direct"), ""),
            emby_group_proxy=_text(args.get("emby_group_proxy"), ""),
            emby_domains=_text(args.get("emby_domains"), ""),
            emby_ipcidr=_text(args.get("emby_ipcidr"), ""),
        )

    def scoped(self, label: str) -> str:
        """给组名追加命名空间后缀，避免多次覆写写入同一配置时重名。"""

        return f"{label}@{self.namespace}"

    @property
    def global_out_name(self) -> str:
        return self.scoped(GLOBAL_OUT_LABEL)

    @property
    def video_name(self) -> str:
        return self.scoped(VIDEO_LABEL)

    @property
    def final_name(self) -> str:
        return self.scoped(FINAL_LABEL)

    @property
    def ai_google_name(self) -> str:
        return self.scoped(AI_GOOGLE_LABEL)

    @property
    def emby_best_name(self) -> str:
        return self.scoped(EMBY_BEST_LABEL)
