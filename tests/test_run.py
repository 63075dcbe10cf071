import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests
from helpers import ENDPOINT, TEMPLATE, drop_handlers, make_config, ok

from otel_provisioner.main import run


def _stream(body):
    r = MagicMock()
    r.__enter__.return_value = r
    r.iter_content.return_value = [body]
    return r


def _http_get(url, **kwargs):
    if url.startswith("http://169.254.169.254"):
        raise requests.ConnectTimeout("no metadata service")
    if url.endswith(".tar.gz"):
        return _stream(b"release-archive")
    return _stream(TEMPLATE.encode("utf-8"))


def _install_cmd(argv, **kwargs):
    if argv[0] == "tar":
        staging = Path(argv[argv.index("-C") + 1])
        (staging / "otelcol-contrib").write_text("#!/bin/sh\n", encoding="utf-8")
        return ok(argv)
    return ok(argv, stdout="otelcol-contrib version 0.143.1\n")


class TestRun(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(drop_handlers)

    def test_full_sequence(self):
        log_path = self.root / "provisioner.log"
        with patch("otel_provisioner.steps.step_10_preflight.os.geteuid", return_value=0), patch(
            "otel_provisioner.lib.pkg.shutil.which", side_effect=lambda name: f"/usr/bin/{name}"
        ), patch("otel_provisioner.steps.step_20_detect_arch.platform.machine", return_value="x86_64"), patch(
            "otel_provisioner.lib.net.requests.get", side_effect=_http_get
        ), patch("otel_provisioner.lib.metadata.socket.gethostname", return_value="web-01"), patch(
            "otel_provisioner.steps.step_40_install_binary.run_cmd", side_effect=_install_cmd
        ), patch(
            "otel_provisioner.steps.step_80_validate_config.run_cmd", side_effect=lambda argv, **kw: ok(argv)
        ), patch(
            "otel_provisioner.lib.systemd.run_cmd", side_effect=lambda argv, **kw: ok(argv)
        ) as systemctl, patch("otel_provisioner.steps.step_90_activate.time.sleep"):
            state = run(make_config(self.root, start_service=True), log_path=str(log_path))

        exe = state["execution"]
        self.assertEqual(len(exe["completed_steps"]), 10)
        self.assertEqual(exe["summary"]["ran_steps"], exe["completed_steps"])
        self.assertEqual(exe["errors"], [])
        self.assertEqual(exe["log_path"], str(log_path))

        runtime = state["runtime"]
        self.assertEqual(runtime["artifact_tag"], "linux_amd64")
        self.assertEqual(runtime["hostname"], "checkout-web-01")
        self.assertEqual(runtime["hostname_source"], "local")
        self.assertTrue(runtime["service_started"])

        config_text = (self.root / "etc/otelcol-contrib/config.yaml").read_text(encoding="utf-8")
        self.assertNotIn("PLACEHOLDER_", config_text)
        self.assertIn(ENDPOINT, config_text)
        self.assertTrue((self.root / "usr/local/bin/otelcol-contrib").is_file())
        self.assertTrue((self.root / "etc/systemd/system/otelcol-contrib.service").is_file())
        self.assertTrue((self.root / "var/log/otel-install").is_dir())
        self.assertFalse(list((self.root / "tmp").iterdir()))

        self.assertIn(["systemctl", "start", "otelcol-contrib"], [c.args[0] for c in systemctl.call_args_list])
        self.assertIn("Running step 95_summary", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
