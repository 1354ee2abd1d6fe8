#!/usr/bin/env python3
"""为 Clash/mihomo 订阅配置生成分组、规则与 DNS 覆写。"""

from __future__ import annotations

import sys

from overridegen.app import main

if __name__ == "__main__":
    sys.exit(main())
