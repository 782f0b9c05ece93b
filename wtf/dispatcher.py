import logging
import subprocess
import sys
from typing import Callable, Optional, TextIO

import pyperclip
from rich.console import Console
from rich.markup import escape

# Configure logging
logger = logging.getLogger(__name__)

RUN = "run"
EDIT = "edit"
CANCEL = "cancel"

EXECUTE_PROMPT = "Execute? [[bold green]y[/bold green]es/[bold red]N[/bold red]o/[bold yellow]e[/bold yellow]dit]: "


def emit_raw(command: str, stream: Optional[TextIO] = None) -> None:
    """Write the command alone on stdout, for the shell integration to capture."""
    stream = stream or sys.stdout
    stream.write(command + "\n")
    stream.flush()


def decide(answer: str) -> str:
    """Map the user's answer to run, edit or cancel. Anything unrecognised cancels."""
    answer = (answer or "").strip().lower()
    if answer in ("y", "yes"):
        return RUN
    if answer in ("e", "edit"):
        return EDIT
    return CANCEL


def copy_to_clipboard(command: str) -> bool:
    """Copy the command to the system clipboard. Returns False if no clipboard is available."""
    try:
        pyperclip.copy(command)
        return True
    except pyperclip.PyperclipException as e:
        logger.warning(f"Could not copy to clipboard: {e}")
        return False


def execute(command: str) -> int:
    """
    Run the command in a shell with the terminal's stdin/stdout/stderr.

    Returns:
        The command's exit code.
    """
    logger.info(f"Executing command: {command}")
    try:
        result = subprocess.run(command, shell=True, check=False)
    except OSError as e:
        logger.error(f"Could not start shell for '{command}': {e}")
        return 127
    if result.returncode != 0:
        logger.warning(f"Command exited with code {result.returncode}: {command}")
    return result.returncode


def display_command(console: Console, command: str) -> None:
    """Shows the suggested command."""
    console.print("\n💡 [bold]Suggested command:[/bold]\n")
    console.print(f"   [cyan]{escape(command)}[/cyan]\n")


def run_interactive(
    command: str,
    console: Optional[Console] = None,
    input_func: Optional[Callable[[str], str]] = None,
) -> int:
    """
    Show the command and ask whether to run it, copy it for editing, or cancel.

    Returns:
        The executed command's exit code, or 0 when it was not run.
    """
    console = console or Console()
    input_func = input_func or console.input

    display_command(console, command)
    try:
        answer = input_func(EXECUTE_PROMPT)
    except EOFError:
        answer = ""
    choice = decide(answer)
    logger.info(f"User chose '{choice}' for: {command}")

    if choice == RUN:
        console.print("\n▶️  [bold]Running...[/bold]\n")
        return execute(command)

    if not copy_to_clipboard(command):
        console.print("[yellow]Clipboard unavailable, copy the command manually:[/yellow]")
        console.print(escape(command), highlight=False)
    elif choice == EDIT:
        console.print("📋 Command copied to clipboard. Paste and edit it!")
    else:
        console.print("📋 Cancelled. Command copied to clipboard.")
    return 0
