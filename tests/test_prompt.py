import unittest
from unittest.mock import patch

from otel_provisioner.lib.prompt import confirm


class TestConfirm(unittest.TestCase):
    def _ask(self, reply, default=True):
        side_effect = reply if isinstance(reply, BaseException) else [reply]
        with patch("builtins.input", side_effect=side_effect) as ask:
            answer = confirm("Start now?", default=default)
        return answer, ask

    def test_default_yes(self):
        answer, ask = self._ask("")
        self.assertTrue(answer)
        ask.assert_called_once_with("Start now? [Y/n] ")

    def test_declines_only_on_n(self):
        self.assertFalse(self._ask("n")[0])
        self.assertFalse(self._ask("No")[0])
        self.assertFalse(self._ask("  N  ")[0])
        self.assertTrue(self._ask("x")[0])
        self.assertTrue(self._ask("yes")[0])

    def test_eof_takes_default(self):
        self.assertTrue(self._ask(EOFError())[0])
        self.assertFalse(self._ask(EOFError(), default=False)[0])

    def test_default_no(self):
        answer, ask = self._ask("", default=False)
        self.assertFalse(answer)
        ask.assert_called_once_with("Start now? [y/N] ")
        self.assertTrue(self._ask("y", default=False)[0])
        self.assertFalse(self._ask("x", default=False)[0])


if __name__ == "__main__":
    unittest.main()
