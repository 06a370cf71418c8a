from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from .metrics import WEIGHT_PRESETS, Weights

logger = logging.getLogger(__name__)

# Environment variable -> settings field.
ENV_VARS: Dict[str, str] = {
    "GROWTH_INDEX_WEIGHTS": "weight_preset",
    "GROWTH_INDEX_MAX_WORKERS": "max_workers",
    "GROWTH_INDEX_LOG_LEVEL": "log_level",
    "ALPHA_VANTAGE_MAX_TICKERS": "alpha_vantage_max_tickers",
    "YAHOO_MAX_TICKERS": "yahoo_max_tickers",
    "ALPHA_VANTAGE_REQUEST_DELAY": "alpha_vantage_request_delay",
}


@dataclass(slots=True)
class EngineSettings:
    """Runtime knobs for batch runs and the fetch layer."""

    weight_preset: str = "default"
    max_workers: int = 1
    log_level: str = "INFO"
    alpha_vantage_max_tickers: int = 5
    yahoo_max_tickers: int = 10
    alpha_vantage_request_delay: float = 1.0

    @property
    def weights(self) -> Weights:
        return Weights.preset(self.weight_preset)

    def max_tickers_for(self, provider: str) -> int:
        if str(provider).lower() in {"alphavantage", "alpha_vantage"}:
            return self.alpha_vantage_max_tickers
        return self.yahoo_max_tickers

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "EngineSettings":
        defaults = cls()
        if not payload:
            return defaults
        preset = str(payload.get("weight_preset", defaults.weight_preset)).lower()
        if preset not in WEIGHT_PRESETS:
            logger.warning("Ignoring unknown weight preset %r", preset)
            preset = defaults.weight_preset
        return cls(
            weight_preset=preset,
            max_workers=_coerce(payload, "max_workers", int, defaults.max_workers, minimum=1),
            log_level=_log_level(payload.get("log_level"), defaults.log_level),
            alpha_vantage_max_tickers=_coerce(
                payload, "alpha_vantage_max_tickers", int, defaults.alpha_vantage_max_tickers, minimum=1
            ),
            yahoo_max_tickers=_coerce(payload, "yahoo_max_tickers", int, defaults.yahoo_max_tickers, minimum=1),
            alpha_vantage_request_delay=_coerce(
                payload, "alpha_vantage_request_delay", float, defaults.alpha_vantage_request_delay, minimum=0.0
            ),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        environ = os.environ if environ is None else environ
        payload = {field: environ[name] for name, field in ENV_VARS.items() if environ.get(name)}
        return cls.from_dict(payload)


def _log_level(value: Any, default: str) -> str:
    if value is None:
        return default
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring unknown log level %r", value)
        return default
    return level


def _coerce(
    payload: Mapping[str, Any],
    key: str,
    cast: Callable[[Any], Any],
    default: Any,
    *,
    minimum: float,
) -> Any:
    if key not in payload:
        return default
    try:
        value = cast(payload[key])
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s=%r", key, payload[key])
        return default
    if value < minimum:
        logger.warning("Ignoring out-of-range %s=%r", key, value)
        return default
    return value
