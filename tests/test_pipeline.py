"""端到端生成流程测试。"""

from __future__ import annotations

import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[1]
SCRIPT = ROOT / "scripts" / "generate_override.py"

SOURCE = """\
mixed-port: 7890
proxies:
  - {name: "HK 01 [emby]", type: ss, server: hk.example.com, port: 443, cipher: aes-128-gcm, password: x}
  - {name: "SG 02 [google]", type: ss, server: sg.example.com, port: 443, cipher: aes-128-gcm, password: x}
rules:
  - DOMAIN-SUFFIX,lan,DIRECT
  - MATCH,DIRECT
"""


class PipelineTests(unittest.TestCase):
    def run_script(self, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, str(SCRIPT), *args],
            cwd=ROOT,
            capture_output=True,
            text=True,
            check=False,
        )

    def test_generate_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            source = tmp_path / "sub.yaml"
            out = tmp_path / "out" / "config.yaml"
            source.write_text(SOURCE, encoding="utf-8")

            result = self.run_script(
                str(source),
                "--output",
                str(out),
                "--arguments",
                "ns=Home&use_geosite=0",
                "--set",
                "emby_domains=!=emby.example.com",
            )

            self.assertEqual(result.returncode, 0, msg=result.stderr)
            self.assertIn("[OK]", result.stderr)
            data = yaml.safe_load(out.read_text(encoding="utf-8"))
            self.assertEqual(data["mixed-port"], 7890)
            self.assertEqual(data["rules"][0], "DOMAIN,emby.example.com,📺 Emby-PROXY@Home")
            self.assertEqual(data["rules"][-1], "MATCH,🐟 Final Match@Home")
            self.assertNotIn("MATCH,DIRECT", data["rules"])
            self.assertFalse([rule for rule in data["rules"] if rule.startswith("GEOSITE,")])
            self.assertIn("🤖 AI & Google@Home", [group["name"] for group in data["proxy-groups"]])

    def test_stdout_and_strict_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "sub.yaml"
            source.write_text(SOURCE, encoding="utf-8")

            result = self.run_script(str(source), "--set", "emby_ipcidr=not-an-ip")
            self.assertEqual(result.returncode, 0, msg=result.stderr)
            self.assertIn("not-an-ip", result.stderr)
            self.assertEqual(yaml.safe_load(result.stdout)["log-level"], "error")

            strict = self.run_script(str(source), "--strict", "--set", "emby_ipcidr=not-an-ip")
            self.assertEqual(strict.returncode, 2)

    def test_bad_input(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "list.yaml"
            source.write_text("- a\n- b\n", encoding="utf-8")
            self.assertEqual(self.run_script(str(source)).returncode, 1)
            self.assertEqual(self.run_script(str(Path(tmp) / "missing.yaml")).returncode, 1)
            self.assertEqual(self.run_script(str(source), "--set", "novalue").returncode, 1)

    def test_unreadable_input_and_output_report_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            as_input = self.run_script(str(tmp_path))
            self.assertEqual(as_input.returncode, 1)
            self.assertIn("[ERROR]", as_input.stderr)
            self.assertNotIn("Traceback", as_input.stderr)

            source = tmp_path / "sub.yaml"
            source.write_text(SOURCE, encoding="utf-8")
            as_output = self.run_script(str(source), "--output", str(tmp_path))
            self.assertEqual(as_output.returncode, 1)
            self.assertIn("[ERROR]", as_output.stderr)
            self.assertNotIn("Traceback", as_output.stderr)


if __name__ == "__main__":
    unittest.main()
