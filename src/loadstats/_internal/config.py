"""Configuration loading for loadstats."""

from __future__ import annotations

import os
from dataclasses import dataclass

from loadstats._internal.errors import ConfigError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class ReportConfig:
    """Options shared by the live registry and the batch summaries.

    Attributes:
        use_assertion_message: Key assertion failures by their failure
            message instead of the generic "Assertion failed" label.
        ignore_transaction_controllers: Leave group samples out of the
            per-sampler top errors rows as well as the overall row.
        use_group_name: Prefix live registry keys with the thread group name.
        tick_interval: Seconds between live snapshots.
    """

    use_assertion_message: bool = True
    ignore_transaction_controllers: bool = False
    use_group_name: bool = False
    tick_interval: float = 1.0


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean (true/false), got: {raw!r}"
    raise ConfigError(msg)


def load_config() -> ReportConfig:
    """Load configuration from environment variables with defaults.

    Environment variables:
        LOADSTATS_ASSERTION_MESSAGE: Use failure messages as error keys
            (default: true).
        LOADSTATS_IGNORE_TC: Ignore transaction controllers in the top
            errors summary (default: false).
        LOADSTATS_USE_GROUP_NAME: Include the thread group in live keys
            (default: false).
        LOADSTATS_TICK_INTERVAL: Seconds between live snapshots (default: 1.0).

    Returns:
        Populated ReportConfig instance.

    Raises:
        ConfigError: If an environment variable has an invalid value.
    """
    tick_str = os.environ.get("LOADSTATS_TICK_INTERVAL", "1.0")

    try:
        tick_interval = float(tick_str)
    except ValueError:
        msg = f"LOADSTATS_TICK_INTERVAL must be a number, got: {tick_str!r}"
        raise ConfigError(msg) from None

    if tick_interval <= 0:
        msg = f"LOADSTATS_TICK_INTERVAL must be positive, got: {tick_interval}"
        raise ConfigError(msg)

    return ReportConfig(
        use_assertion_message=_env_flag("LOADSTATS_ASSERTION_MESSAGE", True),
        ignore_transaction_controllers=_env_flag("LOADSTATS_IGNORE_TC", False),
        use_group_name=_env_flag("LOADSTATS_USE_GROUP_NAME", False),
        tick_interval=tick_interval,
    )
