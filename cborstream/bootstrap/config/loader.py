import os
from pathlib import Path

CONFIG_ENV = "CBORSTREAMCONFIG"
DEFAULT_CONFIG_NAME = "cborstream.yaml"

_configfile: Path | None = None


def set_configfile(path: str | Path | None) -> None:
    """Explicit configuration file, typically from the --config flag."""
    global _configfile
    _configfile = Path(path) if path is not None else None


def get_configfile() -> Path | None:
    # Priority: CLI > ENV > default file in current working directory
    if _configfile is not None:
        file = _configfile
    elif os.getenv(CONFIG_ENV):
        file = Path(os.environ[CONFIG_ENV])
    else:
        file = Path.cwd() / DEFAULT_CONFIG_NAME
        return file if file.is_file() else None

    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV} environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIG_NAME}' file in the current working directory."
        )

    return file
