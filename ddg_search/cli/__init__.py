"""CLI module - argument parsing, usage text and entry point."""

from .args import CliArgs, parse_cli_args
from .main import main, run
from .usage import USAGE, usage

__all__ = ["CliArgs", "USAGE", "main", "parse_cli_args", "run", "usage"]
