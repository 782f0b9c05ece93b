import unittest

from wtf.shell_init import render_init, supported_shells


class TestRenderInit(unittest.TestCase):

    def test_supported_shells(self):
        self.assertEqual(supported_shells(), ["bash", "fish", "zsh"])

    def test_scripts_call_raw_mode(self):
        for shell in supported_shells():
            with self.subTest(shell=shell):
                script = render_init(shell)
                self.assertIn("wtf --raw", script)
                # Exit code of MissingCredential triggers setup help
                self.assertIn("-eq 3", script)
                self.assertNotIn("%(missing)", script)

    def test_buffer_injection(self):
        self.assertIn("print -z", render_init("zsh"))
        self.assertIn("commandline -r", render_init("fish"))

    def test_fish_also_prints_command(self):
        script = render_init("fish")
        self.assertLess(script.index("echo (set_color cyan)"), script.index("commandline -r"))
        self.assertIn("read -r -e", render_init("bash"))

    def test_case_insensitive(self):
        self.assertEqual(render_init("ZSH"), render_init("zsh"))

    def test_unknown_shell(self):
        with self.assertRaises(ValueError):
            render_init("tcsh")


if __name__ == "__main__":
    unittest.main()
