import unittest
from unittest.mock import patch

from wtf.errors import EmptyPrompt
from wtf.prompt import SYSTEM_PROMPT, build_prompt, detect_environment


class TestBuildPrompt(unittest.TestCase):
    """Test cases for the prompt builder."""

    def test_wraps_prompt_unmodified(self):
        for text in ["show my ip address", "  spaced  ", "quotes ' \" and {braces}", "ünïcode ✓"]:
            with self.subTest(text=text):
                prompt = build_prompt(text, os_name="Linux", shell="bash")
                expected_system = SYSTEM_PROMPT.format(os_name="Linux", shell="bash")
                self.assertEqual(prompt.user, text)
                self.assertEqual(prompt.system, expected_system)
                self.assertTrue(prompt.combined().startswith(expected_system))
                self.assertTrue(prompt.combined().endswith(text))

    def test_instruction_names_os_and_shell(self):
        prompt = build_prompt("list files", os_name="macOS", shell="zsh")
        self.assertIn("macOS", prompt.system)
        self.assertIn("zsh", prompt.system)
        self.assertIn("Output ONLY the shell command", prompt.system)

    def test_empty_prompt_rejected(self):
        for text in ["", "   ", "\n\t"]:
            with self.subTest(text=text):
                with self.assertRaises(EmptyPrompt):
                    build_prompt(text, os_name="Linux", shell="sh")

    @patch("wtf.prompt.platform.system", return_value="Darwin")
    def test_detect_environment_mac(self, _system):
        self.assertEqual(detect_environment({"SHELL": "/bin/zsh"}), ("macOS", "zsh"))

    @patch("wtf.prompt.platform.system", return_value="Linux")
    def test_detect_environment_without_shell(self, _system):
        self.assertEqual(detect_environment({}), ("Linux", "sh"))

    @patch("wtf.prompt.platform.system", return_value="Windows")
    def test_detect_environment_windows(self, _system):
        self.assertEqual(detect_environment({"PSModulePath": "C:\\x"}), ("Windows", "powershell"))
        self.assertEqual(detect_environment({}), ("Windows", "cmd"))


if __name__ == "__main__":
    unittest.main()
