"""覆写脚本使用的静态常量。"""

from __future__ import annotations

import re

DIRECT = "DIRECT"

# 订阅商常把“到期时间/剩余流量”等公告塞进节点名，这类伪节点不能参与分组。
NOTICE_PATTERN = re.compile(r"过期|剩余流量|官网|重置|套餐|到期", re.IGNORECASE)

# ASCII 模式下 `\b` 只按英文单词边界判断，`香港CN01` 这类紧贴中文的写法也能命中。
MAINLAND_PATTERN = re.compile(
    r"\bCN\b|China|Mainland|内网|直连|大陆|中国",
    re.IGNORECASE | re.ASCII,
)

DEFAULT_NAMESPACE = "SS"
DEFAULT_HEALTH_URL = "https://www.gstatic.com/generate_204"
DEFAULT_INTERVAL_BEST = 900
DEFAULT_INTERVAL_FALLBACK = 600
DEFAULT_EMBY_INTERVAL = 300
DEFAULT_DNS_MODE = "fake-ip"
DEFAULT_LOG_LEVEL = "error"

GLOBAL_OUT_LABEL = "🌍 Global Out"
VIDEO_LABEL = "🎬 Video Stream"
FINAL_LABEL = "🐟 Final Match"
AI_GOOGLE_LABEL = "🤖 AI & Google"
EMBY_BEST_LABEL = "⚡ Emby (Best)"
EMBY_DIRECT_LABEL = "📺 Emby-DIRECT"
EMBY_PROXY_LABEL = "📺 Emby-PROXY"

# 按域名后缀固定走 AI&Google 组的 AI 服务。
AI_SERVICE_SUFFIXES = [
    "openai.com",
    "chatgpt.com",
    "oaistatic.com",
    "oaiusercontent.com",
    "anthropic.com",
    "perplexity.ai",
    "huggingface.co",
    "elevenlabs.io",
    "groq.com",
    "cerebras.ai",
    "cursor.com",
    "deepseek.com",
]

# Google 全家桶，刻意不含 YouTube：YouTube 归 Video，两类策略可以分别切换。
# 元素为 (匹配类型, 域名)。
GOOGLE_FAMILY_RULES = [
    ("DOMAIN", "gemini.google.com"),
    ("DOMAIN", "aistudio.google.com"),
    ("DOMAIN", "accounts.google.com"),
    ("DOMAIN-SUFFIX", "clients4.google.com"),
    ("DOMAIN-SUFFIX", "clients2.google.com"),
    ("DOMAIN-SUFFIX", "google.com"),
    ("DOMAIN-SUFFIX", "gmail.com"),
    ("DOMAIN-SUFFIX", "googleapis.com"),
    ("DOMAIN-SUFFIX", "googleusercontent.com"),
    ("DOMAIN-SUFFIX", "gstatic.com"),
    ("DOMAIN-SUFFIX", "ggpht.com"),
    ("DOMAIN-SUFFIX", "1e100.net"),
    ("DOMAIN-SUFFIX", "gvt1.com"),
    ("DOMAIN-SUFFIX", "gvt2.com"),
    ("DOMAIN-SUFFIX", "gvt3.com"),
]

# use_geosite=0 时替代 GEOSITE 的字面域名列表。
NETFLIX_DOMAINS = ["netflix.com", "nflxvideo.net", "nflximg.net", "nflxext.com", "nflxso.net"]
YOUTUBE_DOMAINS = [
    "youtube.com",
    "youtu.be",
    "ytimg.com",
    "youtube-nocookie.com",
    "googlevideo.com",
]
TELEGRAM_DOMAINS = ["telegram.org", "t.me", "tdesktop.com"]

# Video 组按顺序展开的 geosite 分类及其回退域名。
VIDEO_CATEGORIES = [
    ("netflix", NETFLIX_DOMAINS),
    ("youtube", YOUTUBE_DOMAINS),
]

# 纯 IP 形式的引导 DNS，只用于解析下面的 DoH 域名，避免循环依赖。
DEFAULT_NAMESERVERS = ["223.5.5.5", "119.29.29.29"]

DOMESTIC_DOH = ["https://223.5.5.5/dns-query", "https://1.12.12.12/dns-query"]
OVERSEAS_DOH = ["https://1.1.1.1/dns-query", "https://8.8.8.8/dns-query"]

# 国内 + 海外双栈，policy 未命中时仍有冗余。
NAMESERVERS = DOMESTIC_DOH + OVERSEAS_DOH

# 解析节点服务器域名专用，不能依赖已选中的代理。
PROXY_SERVER_NAMESERVERS = DOMESTIC_DOH + OVERSEAS_DOH[:1]

# 局域网域名出现递归解析时，可把 system 换成路由器 DNS（如 192.168.1.1）。
NAMESERVER_POLICY = {
    "geosite:private": ["system"],
    "geosite:cn": DOMESTIC_DOH,
    "geosite:geolocation-!cn": OVERSEAS_DOH,
}
