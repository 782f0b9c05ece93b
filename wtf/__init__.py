"""
wtf: translate natural language into shell commands.

This package turns a plain-language request into a single shell command by
asking an LLM (Google Gemini by default, or any OpenAI-compatible API), then
either prints it for the shell integration to place in the editing buffer or
offers to run it.
"""

__version__ = "0.1.0"
