import re

from .errors import EmptyCommand

FENCED_BLOCK = re.compile(r"```[^\n`]*\n(.*?)(?:```|$)", re.DOTALL)
LEADING_LABEL = re.compile(
    r"^(?:command|output|shell|answer|bash|zsh|sh|fish|powershell|cmd)\s*:\s*",
    re.IGNORECASE,
)
PROMPT_MARKER = re.compile(r"^[$>]\s+")
QUOTES = ('"', "'", "`")


def _strip_fence(text: str) -> str:
    match = FENCED_BLOCK.search(text)
    if match:
        return match.group(1)
    # Single-line fence, or a closing fence with no opener.
    return text.replace("```", "")


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in QUOTES:
        inner = text[1:-1]
        if text[0] not in inner:
            return inner.strip()
    return text


def _clean_line(line: str) -> str:
    """Strips labels, prompt markers and wrapping quotes until none are left."""
    previous = None
    line = line.strip()
    while line != previous:
        previous = line
        line = LEADING_LABEL.sub("", line, count=1)
        line = PROMPT_MARKER.sub("", line, count=1)
        line = _strip_quotes(line.strip())
    return line


def sanitize(raw: str) -> str:
    """
    Reduce raw model text to a single runnable command line.

    Removes a surrounding code fence, drops leading labels such as
    ``Command:``, ``$``/``>`` prompt markers and matching surrounding
    quotes from each line, then keeps the first line with anything left.
    Running it again on its own output changes nothing.

    Raises:
        EmptyCommand: If nothing is left.
    """
    text = (raw or "").strip()
    if "```" in text:
        text = _strip_fence(text)
    for line in text.splitlines():
        command = _clean_line(line)
        if command:
            return command
    raise EmptyCommand()
