import os.path
import sys
from argparse import ArgumentParser, Namespace
from typing import Optional, Sequence

from pcpreset.config import Config, get_config, loader
from pcpreset.config.version import get_version
from pcpreset.log import setup
from pcpreset.ui.base import UIBase
from pcpreset.ui.console import ConsoleUI


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Namespace:
    """
    Parse command-line arguments.

    The tool is interactive and needs no arguments; these only
    tune the environment it runs in.

    Available arguments:
        --help: Show the help message
        --config: Path to the configuration file
        --show-config: Output the configuration to stdout
        --level: Log level (debug,info,warning,error,critical)
        --version: Show the version and exit
    :return: Parsed arguments object.
    """
    version = get_version()

    parser = ArgumentParser(
        description="Create a new project from the PC preset template",
        epilog="Exits with status 0 when the project was created, 1 on failure or when cancelled.",
    )
    parser.add_argument("--config", help="Path to the configuration file", required=False)
    parser.add_argument("--show-config", help="Output the configuration to stdout", action="store_true")
    parser.add_argument("--level", help="Log level (debug,info,warning,error,critical)", required=False)
    parser.add_argument("--version", action="version", version=version)
    return parser.parse_args(argv)


def load_config(args: Namespace) -> Optional[Config]:
    """
    Load JSON configuration file and apply command-line arguments.

    :param args: Command-line arguments (at least `config` and `level` must be present).
    :return: Configuration object, or None if config couldn't be loaded.
    """
    if not args.config:
        config = get_config()
    elif not os.path.isfile(args.config):
        print(f"Configuration file not found: {args.config}; using default", file=sys.stderr)
        config = get_config()
    else:
        try:
            config = loader.load(args.config)
        except ValueError as err:
            print(f"Error parsing config file {args.config}: {err}", file=sys.stderr)
            return None

    if args.level:
        config.log.level = args.level.upper()

    try:
        Config.model_validate(config.model_dump())
    except ValueError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        return None

    return config


def show_config(config: Config):
    """
    Print the configuration to stdout.
    """
    print(config.model_dump_json(indent=2))


def init(argv: Optional[Sequence[str]] = None) -> tuple[Optional[UIBase], Optional[Config], Namespace]:
    """
    Initialize the application.

    Loads configuration, sets up logging and the UI.

    :return: Tuple with UI, configuration and command-line arguments.
    """
    args = parse_arguments(argv)
    config = load_config(args)
    if not config:
        return (None, None, args)

    setup(config.log, force=True)
    return (ConsoleUI(), config, args)


__all__ = ["parse_arguments", "load_config", "show_config", "init"]
