import os
import platform
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .errors import EmptyPrompt

SYSTEM_PROMPT = """You are a shell command expert. Your task is to translate the user's natural language request into a valid shell command for {os_name} using the {shell} shell.

Rules:
1. Output ONLY the shell command, nothing else. No explanations, no markdown, no code blocks.
2. The command must fit on a single line. For multi-step operations, chain commands with && or use a one-liner.
3. Use standard POSIX commands when possible for portability, and platform-specific commands when the task needs them.
4. If the request is dangerous (like rm -rf /), still provide the command but append a shell comment warning.
5. If the request is ambiguous, provide the most common interpretation.
6. Use single quotes for strings unless double quotes are necessary for variable expansion.

Examples:
User: show my ip address
Output: curl -s ifconfig.me

User: find large files over 100mb
Output: find . -type f -size +100M

User: kill process on port 3000
Output: lsof -ti:3000 | xargs kill -9

User: compress this folder
Output: tar -czvf archive.tar.gz ."""

OS_NAMES = {"Darwin": "macOS", "Linux": "Linux", "Windows": "Windows"}


@dataclass(frozen=True)
class BuiltPrompt:
    """The system instruction and the user's request, kept apart for providers that take them separately."""

    system: str
    user: str

    def combined(self) -> str:
        return f"{self.system}\n\n{self.user}"


def detect_environment(env: Optional[Mapping[str, str]] = None) -> Tuple[str, str]:
    """Returns (os_name, shell) for the current machine."""
    if env is None:
        env = os.environ
    system = platform.system()
    os_name = OS_NAMES.get(system, system or "Linux")

    shell_path = env.get("SHELL")
    if shell_path:
        shell = os.path.basename(shell_path)
    elif system == "Windows":
        shell = "powershell" if env.get("PSModulePath") else "cmd"
    else:
        shell = "sh"
    return os_name, shell


def build_prompt(text: str, os_name: Optional[str] = None, shell: Optional[str] = None) -> BuiltPrompt:
    """
    Wraps the user's request with the system instruction.

    The request itself is passed through untouched.
    """
    if not text or not text.strip():
        raise EmptyPrompt()
    if os_name is None or shell is None:
        detected_os, detected_shell = detect_environment()
        os_name = os_name or detected_os
        shell = shell or detected_shell
    return BuiltPrompt(system=SYSTEM_PROMPT.format(os_name=os_name, shell=shell), user=text)
