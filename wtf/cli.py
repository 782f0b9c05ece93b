import argparse
import logging
import sys
from typing import List, Mapping, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_config
from .dispatcher import emit_raw, run_interactive
from .errors import EmptyPrompt, WtfError
from .logger import setup_logging
from .prompt import build_prompt, detect_environment
from .providers import get_provider
from .sanitizer import sanitize
from .shell_init import render_init, supported_shells

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wtf",
        description="Translate natural language into a shell command using an LLM.",
        epilog="Example: wtf find files larger than 100mb",
    )
    parser.add_argument("prompt", nargs="*", help="What you want to do, in plain words.")
    parser.add_argument(
        "-r", "--raw",
        action="store_true",
        help="Print only the command, with no prompt. Used by the shell integration.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log requests and decisions to stderr.",
    )
    parser.add_argument(
        "--init",
        metavar="SHELL",
        help=f"Print the shell integration script ({', '.join(supported_shells())}).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def translate(prompt_text: str, env: Optional[Mapping[str, str]] = None, verbose: bool = False) -> str:
    """
    Runs the whole pipeline: configuration, prompt, provider call, sanitizing.

    Returns:
        The sanitized single-line command.
    """
    if not prompt_text.strip():
        raise EmptyPrompt()
    config = load_config(env)
    if verbose:
        config.verbose = True
    setup_logging(config)
    logger.info(f"Using {config.provider} provider at {config.endpoint}")

    os_name, shell = detect_environment(env)
    prompt = build_prompt(prompt_text, os_name=os_name, shell=shell)
    raw_text = get_provider(config).translate(prompt)
    logger.debug(f"Raw model output: {raw_text!r}")
    return sanitize(raw_text)


def report_error(error: WtfError, raw: bool) -> None:
    logger.info(f"Translation failed: {error}")
    if raw:
        print(str(error), file=sys.stderr)
    else:
        Console(stderr=True).print(f"[bold red]❌ {escape(str(error))}[/bold red]")


def run_cli(argv: Optional[List[str]] = None, env: Optional[Mapping[str, str]] = None) -> int:
    """Parses arguments, runs one translation and returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.init:
        try:
            script = render_init(args.init)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        sys.stdout.write(script)
        return 0

    prompt_text = " ".join(args.prompt)
    try:
        command = translate(prompt_text, env=env, verbose=args.verbose)
    except WtfError as e:
        report_error(e, args.raw)
        return e.exit_code

    if args.raw:
        emit_raw(command)
        return 0
    return run_interactive(command)
