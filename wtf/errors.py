"""Errors raised by the translation pipeline.

Each error maps to its own exit code so the shell integration can react
to a specific failure (for example, printing setup help when no API key
is configured).
"""
from typing import Sequence


class WtfError(Exception):
    """Base exception for wtf."""
    category = "Error"
    exit_code = 1

    def __str__(self) -> str:
        return f"{self.category}: {super().__str__()}"


class EmptyPrompt(WtfError):
    """Raised when the prompt is empty after trimming."""
    category = "EmptyPrompt"
    exit_code = 2

    def __init__(self, message: str = "No prompt given. Usage: wtf <what you want to do>"):
        super().__init__(message)


class MissingCredential(WtfError):
    """Raised when none of the credential variables is set."""
    category = "MissingCredential"
    exit_code = 3

    def __init__(self, variables: Sequence[str]):
        self.variables = tuple(variables)
        names = " or ".join(self.variables)
        super().__init__(
            f"{names} is not set. Get a key at https://aistudio.google.com/app/apikey "
            f"and run: export {self.variables[0]}='your-key-here'"
        )


class NetworkError(WtfError):
    """Raised when the provider could not be reached."""
    category = "NetworkError"
    exit_code = 4


class UpstreamError(WtfError):
    """Raised when the provider answers with an error."""
    category = "UpstreamError"
    exit_code = 5

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"provider returned HTTP {status}: {body}")


class MalformedResponse(WtfError):
    """Raised when the provider response has no usable text."""
    category = "MalformedResponse"
    exit_code = 6


class EmptyCommand(WtfError):
    """Raised when nothing runnable is left after sanitizing."""
    category = "EmptyCommand"
    exit_code = 7

    def __init__(self, message: str = "the model returned no command"):
        super().__init__(message)
