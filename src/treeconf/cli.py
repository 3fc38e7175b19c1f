"""Command line glue for treeconf.

Two flags select which files a ConfigStore loads:

    --config:ignore-default     do not load the default configuration files
    --config:file=PATH          load PATH after the defaults (repeatable)

Example:
    myapp --config:file=/tmp/test.config.json --config:file=/tmp/test2.config.ini
"""

import argparse
import logging
import sys
from collections.abc import Sequence

import yaml

from .exceptions import ConfigError
from .models import OPTION_PREFIX
from .models import CommandLineOptions
from .store import ConfigStore

logger = logging.getLogger(__name__)

IGNORE_DEFAULT_FLAG = f"--{OPTION_PREFIX}:ignore-default"
FILE_FLAG = f"--{OPTION_PREFIX}:file"


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Install the configuration flags on parser."""
    parser.add_argument(
        IGNORE_DEFAULT_FLAG,
        dest="config_ignore_default",
        action="store_true",
        help="do not load the default configuration files",
    )
    parser.add_argument(
        FILE_FLAG,
        dest="config_files",
        action="append",
        default=[],
        metavar="PATH",
        help="load an additional configuration file or URL (repeatable)",
    )


def parse_command_line(argv: Sequence[str] | None = None) -> CommandLineOptions:
    """Extract configuration options from argv, ignoring unrelated flags.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:]
    """
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    add_config_arguments(parser)
    args, _ = parser.parse_known_args(argv)
    return _options_from_namespace(args)


def from_command_line(argv: Sequence[str] | None = None, base_dir: str = "./") -> ConfigStore:
    """Build a ConfigStore honoring the configuration flags in argv."""
    return build_store(parse_command_line(argv), base_dir)


def build_store(options: CommandLineOptions, base_dir: str = "./") -> ConfigStore:
    """Build a ConfigStore from parsed command line options."""
    store = ConfigStore(base_dir, ignore_defaults=options.ignore_defaults)
    for source in options.files:
        store.load(source)
    return store


def _options_from_namespace(args: argparse.Namespace) -> CommandLineOptions:
    return CommandLineOptions(
        ignore_defaults=args.config_ignore_default,
        files=tuple(args.config_files),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Print a configuration value (or the whole tree) as YAML."""
    parser = argparse.ArgumentParser(prog="treeconf", description="Show merged configuration values.")
    parser.add_argument("key", nargs="?", default="", help="'/'-separated key to show (default: everything)")
    parser.add_argument("--namespace", default="", help="namespace to resolve the key in")
    parser.add_argument("--base-dir", default="./", help="directory holding config/config.{json,yml,ini}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    add_config_arguments(parser)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        store = build_store(_options_from_namespace(args), args.base_dir)
        store.set_namespace(args.namespace)
        value = store.get(args.key)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(yaml.dump(value, default_flow_style=False, sort_keys=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
