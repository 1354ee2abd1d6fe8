"""覆写主流程测试。"""

from __future__ import annotations

import copy
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SCRIPTS_DIR = ROOT / "scripts"
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from overridegen.override import build_override, run_override  # noqa: E402


def sample_config() -> dict:
    return {
        "mixed-port": 7890,
        "proxies": [
            {"name": "剩余流量：12GB", "type": "ss"},
            {"name": "HK 01 [emby]", "type": "ss", "server": "hk.example.com"},
            {"name": "US 02 [video]", "type": "vmess", "server": "us.example.com"},
            {"name": "SG 03 [google]", "type": "trojan", "server": "sg.example.com"},
            {"name": "CN 04", "type": "ss", "server": "cn.example.com"},
        ],
        "rules": ["DOMAIN-SUFFIX,lan,DIRECT", "MATCH,Proxy"],
        "dns": {"listen": "0.0.0.0:1053", "nameserver-policy": {"+.lan": ["system"]}},
    }


class BuildOverrideTests(unittest.TestCase):
    def test_full_transform(self) -> None:
        config = sample_config()
        snapshot = copy.deepcopy(config)
        result = build_override(
            config,
            {"ns": "T", "emby_domains": "!=emby.example.com|media.example.org", "emby_ipcidr": "1.2.3.4"},
        )

        self.assertEqual(config, snapshot)
        self.assertEqual(result["mixed-port"], 7890)
        self.assertEqual(result["log-level"], "error")
        self.assertEqual(
            [node["name"] for node in result["proxies"]],
            ["HK 01 [emby]", "US 02 [video]", "SG 03 [google]", "CN 04"],
        )
        self.assertEqual(result["dns"]["listen"], "0.0.0.0:1053")
        self.assertEqual(result["dns"]["nameserver-policy"]["+.lan"], ["system"])

        groups = {group["name"]: group for group in result["proxy-groups"]}
        self.assertEqual(len(groups), 11)
        self.assertEqual(groups["⚡ 🌍 Global Out (Best)@T"]["proxies"], ["HK 01 [emby]", "US 02 [video]", "SG 03 [google]"])
        self.assertEqual(groups["⚡ 🎬 Video Stream (Best)@T"]["proxies"], ["US 02 [video]"])
        self.assertEqual(groups["⚡ Emby (Best)@T"]["proxies"], ["HK 01 [emby]"])
        self.assertEqual(groups["🤖 AI & Google@T"]["proxies"], ["SG 03 [google]"])

        rules = result["rules"]
        self.assertEqual(rules[0], "DOMAIN-SUFFIX,media.example.org,📺 Emby-DIRECT@T")
        self.assertEqual(rules[1], "DOMAIN,emby.example.com,📺 Emby-PROXY@T")
        self.assertEqual(rules[2], "IP-CIDR,1.2.3.4/32,📺 Emby-DIRECT@T,no-resolve")
        self.assertEqual(rules[-2], "DOMAIN-SUFFIX,lan,DIRECT")
        self.assertEqual(rules[-1], "MATCH,🐟 Final Match@T")
        self.assertEqual(sum(1 for rule in rules if rule.startswith("MATCH,")), 1)

        known = set(groups) | {node["name"] for node in result["proxies"]} | {"DIRECT"}
        for group in result["proxy-groups"]:
            self.assertTrue(group["proxies"])
            self.assertTrue(set(group["proxies"]) <= known, group["name"])

    def test_list_overrides_produce_clean_rules(self) -> None:
        result = build_override({"proxies": [{"name": "a"}]}, {"emby_domains": ["a.com", "b.com"]})
        self.assertEqual(
            result["rules"][:2],
            [
                "DOMAIN-SUFFIX,a.com,📺 Emby-DIRECT@SS",
                "DOMAIN-SUFFIX,b.com,📺 Emby-DIRECT@SS",
            ],
        )

    def test_keeps_caller_log_level(self) -> None:
        config = sample_config()
        config["log-level"] = "debug"
        self.assertEqual(build_override(config)["log-level"], "debug")

    def test_ai_google_includes_direct_without_google_nodes(self) -> None:
        config = {"proxies": [{"name": "JP 01"}, {"name": "CN 02"}]}
        result = build_override(config)
        ai = next(group for group in result["proxy-groups"] if group["name"].startswith("🤖"))
        self.assertEqual(ai["proxies"], ["JP 01", "DIRECT"])

    def test_only_mainland_nodes_still_fill_every_group(self) -> None:
        result = build_override({"proxies": [{"name": "CN 01"}]})
        for group in result["proxy-groups"]:
            self.assertTrue(group["proxies"])
        best = result["proxy-groups"][0]
        self.assertEqual(best["proxies"], ["CN 01"])

    def test_no_usable_nodes_returns_input_object(self) -> None:
        for config in (
            {"proxies": [], "rules": ["MATCH,DIRECT"]},
            {"proxies": [{"name": "  "}, {"name": "官网：example.com"}]},
            {"rules": []},
        ):
            snapshot = copy.deepcopy(config)
            result, report = run_override(config, {"ns": "X"})
            self.assertIs(result, config)
            self.assertEqual(result, snapshot)
            self.assertFalse(report.applied)
        self.assertIsNone(build_override(None))

    def test_deterministic(self) -> None:
        arguments = {"emby_domains": "a.com,!b.com", "use_geosite": "0"}
        first = build_override(sample_config(), arguments)
        second = build_override(sample_config(), arguments)
        self.assertEqual(first["rules"], second["rules"])
        self.assertEqual(first["proxy-groups"], second["proxy-groups"])

    def test_report_lists_rejected_entries(self) -> None:
        _, report = run_override(
            sample_config(),
            {"emby_domains": "a.com,9.9.9.9", "emby_ipcidr": "b.com,8.8.8.8"},
        )
        self.assertTrue(report.applied)
        self.assertEqual(report.node_count, 4)
        self.assertEqual(report.pool_sizes["emby"], 1)
        self.assertEqual(report.group_count, 11)
        self.assertEqual(report.rejected_entries, ["emby_domains: 9.9.9.9", "emby_ipcidr: b.com"])


if __name__ == "__main__":
    unittest.main()
