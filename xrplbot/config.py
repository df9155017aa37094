import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

DEFAULT_MENTION = "@xrpl-bot"
DEFAULT_BOT_LOGIN = "xrpl-bot[bot]"
DEFAULT_RPC_URL = "https://xrplcluster.com/"
DEFAULT_EXPLORER_URL = "https://bithomp.com/explorer/"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_CONFIG_PATH = "xrplbot.toml"

BUNDLED_ACCOUNT_NAMES = Path(__file__).parent / "data" / "well_known_accounts.json"

ENV_PREFIX = "XRPLBOT_"


def _env(name: str, default: Any = None) -> Any:
    return os.environ.get(ENV_PREFIX + name, default)


def _env_flag(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BotConfig:
    """Runtime settings for the bot.

    Environment variables (``XRPLBOT_*``) are read when a field is not given
    explicitly. ``load_config`` layers a TOML file underneath them.
    """

    mention: str = field(default_factory=lambda: _env("MENTION", DEFAULT_MENTION))
    bot_login: str = field(default_factory=lambda: _env("BOT_LOGIN", DEFAULT_BOT_LOGIN))
    require_adjacent_mention: bool = field(
        default_factory=lambda: _env_flag("REQUIRE_ADJACENT", True)
    )
    rpc_url: str = field(default_factory=lambda: _env("RPC_URL", DEFAULT_RPC_URL))
    explorer_url: str = field(
        default_factory=lambda: _env("EXPLORER_URL", DEFAULT_EXPLORER_URL)
    )
    github_api_url: str = field(
        default_factory=lambda: _env("GITHUB_API_URL", DEFAULT_GITHUB_API_URL)
    )
    github_token: Optional[str] = field(default_factory=lambda: _env("GITHUB_TOKEN"))
    account_names_path: str = field(
        default_factory=lambda: _env("ACCOUNT_NAMES_PATH", str(BUNDLED_ACCOUNT_NAMES))
    )
    account_names_url: Optional[str] = field(
        default_factory=lambda: _env("ACCOUNT_NAMES_URL")
    )
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))


def load_config(path: Optional[str] = None, **overrides) -> BotConfig:
    """Build a BotConfig from a TOML file, the environment and overrides.

    Precedence, highest first: ``overrides``, ``XRPLBOT_*`` environment
    variables, the ``[xrplbot]`` table of the TOML file, field defaults.
    A missing file is skipped.
    """
    config_path = Path(path or DEFAULT_CONFIG_PATH)
    file_values: Dict[str, Any] = {}
    if config_path.exists():
        file_values = toml.load(config_path).get("xrplbot", {})
        logger.debug(f"load_config: Read {len(file_values)} settings from {config_path}")
    elif path:
        logger.warning(f"load_config: Config file {config_path} not found, using environment and defaults")

    known = {f.name for f in fields(BotConfig)}
    unknown = set(file_values) - known
    if unknown:
        logger.warning(f"load_config: Ignoring unknown settings {sorted(unknown)}")

    kwargs = {}
    for name in known:
        if name in overrides:
            kwargs[name] = overrides[name]
        elif ENV_PREFIX + _env_name(name) in os.environ:
            continue
        elif name in file_values:
            kwargs[name] = file_values[name]
    return BotConfig(**kwargs)


def _env_name(field_name: str) -> str:
    if field_name == "require_adjacent_mention":
        return "REQUIRE_ADJACENT"
    return field_name.upper()
