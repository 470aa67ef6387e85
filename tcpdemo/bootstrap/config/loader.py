import argparse
import os
from functools import lru_cache
from pathlib import Path

CONFIG_ENV_VAR = "TCPDEMOCONFIG"
DEFAULT_CONFIG_NAME = "tcpdemo.yaml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tcpdemo-server",
        description=(
            "Start a tcpdemo server.\n\n"
            "The server answers Echo and Jumble requests sent with the tcpdemo\n"
            "binary protocol, one worker per connection."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a tcpdemo configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity for the server.\n"
            "DEBUG logs every connection and request, INFO (default) only\n"
            "startup and shutdown."
        ),
    )

    return parser


@lru_cache
def get_cli_args() -> argparse.Namespace:
    return build_parser().parse_args()


def find_configfile(explicit: str | None) -> Path | None:
    """
    Locate the YAML configuration file.

    Priority: CLI > ENV > default file in current working directory.
    A file named explicitly (CLI or ENV) must exist; the default file is
    optional and settings fall back to built-in defaults without it.
    """
    raw = explicit or os.getenv(CONFIG_ENV_VAR)

    if raw is None:
        file = Path.cwd() / DEFAULT_CONFIG_NAME
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV_VAR} environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIG_NAME}' file in the current working directory."
        )

    return file


@lru_cache
def get_configfile() -> Path | None:
    return find_configfile(get_cli_args().config)
