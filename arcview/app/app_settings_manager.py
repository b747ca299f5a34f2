from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict
from PySide6.QtCore import QSettings
import logging

logger = logging.getLogger(__name__)

ORG_DOMAIN = "arcview.org"
APP_NAME = "ArcView"


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value
    def __repr__(self):
        return self.value


# ----------------------
# Defaults
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "view": {
        "zoom_speed": 10.0,
        "zoom_scale": 0.5,
        "tick_interval_ms": 16,
    },
}

SECTIONS = tuple(DEFAULTS)

# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"

@dataclass
class ViewConfig:
    zoom_speed: float = 10.0
    zoom_scale: float = 0.5
    tick_interval_ms: int = 16

@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    view: ViewConfig = field(default_factory=ViewConfig)

# ----------------------
# Utility
# ----------------------
def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    mode = str(v).strip().lower()
    try:
        return RunMode(mode)
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])

def _validate_logging_level(v: str) -> str:
    v = str(v).upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

def _validate_zoom_speed(v: Any) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return DEFAULTS["view"]["zoom_speed"]
    return f if f > 0 else DEFAULTS["view"]["zoom_speed"]

def _validate_zoom_scale(v: Any) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return DEFAULTS["view"]["zoom_scale"]
    return f if (0 < f <= 10) else DEFAULTS["view"]["zoom_scale"]

def _validate_tick_interval(v: Any) -> int:
    try:
        i = int(float(v))
    except (TypeError, ValueError):
        return DEFAULTS["view"]["tick_interval_ms"]
    return i if (1 <= i <= 1000) else DEFAULTS["view"]["tick_interval_ms"]


_VALIDATORS = {
    "general/run_mode": lambda v: _validate_run_mode(v).value,
    "general/logging_level": _validate_logging_level,
    "view/zoom_speed": _validate_zoom_speed,
    "view/zoom_scale": _validate_zoom_scale,
    "view/tick_interval_ms": _validate_tick_interval,
}


# ---------------------
# AppSettingsManager
# ---------------------
class AppSettingsManager:
    """
    Application settings with validated QSettings overrides.
    Values start from DEFAULTS in code; stored values are validated on load and
    fall back to the default when out of range.
    set_* writes through to QSettings immediately.
    """
    def __init__(self, org_domain: str = ORG_DOMAIN, app_name: str = APP_NAME):
        self._settings = QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # Read
    @property
    def data(self) -> AppSettingsData:
        return self._data

    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    @property
    def zoom_speed(self) -> float:
        return self._data.view.zoom_speed

    @property
    def zoom_scale(self) -> float:
        return self._data.view.zoom_scale

    @property
    def tick_interval_ms(self) -> int:
        return self._data.view.tick_interval_ms

    # Write
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_zoom_speed(self, v: float) -> None:
        speed = _validate_zoom_speed(v)
        self._settings.setValue("view/zoom_speed", speed)
        self._data.view.zoom_speed = speed

    def set_zoom_scale(self, v: float) -> None:
        scale = _validate_zoom_scale(v)
        self._settings.setValue("view/zoom_scale", scale)
        self._data.view.zoom_scale = scale

    def set_tick_interval_ms(self, v: int) -> None:
        interval = _validate_tick_interval(v)
        self._settings.setValue("view/tick_interval_ms", interval)
        self._data.view.tick_interval_ms = interval

    # Reset
    def reset_all_to_default(self) -> None:
        """Remove every user override."""
        for section in SECTIONS:
            self._settings.remove(section)
        self._data = self._load_effective()

    def reset_section(self, section: str) -> None:
        """Restore the defaults of one section."""
        if section not in SECTIONS:
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "view": asdict(self._data.view),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- internals ---------------
    def _load_effective(self) -> AppSettingsData:
        """Merge QSettings overrides over DEFAULTS, validate and build the model."""
        merged = self._apply_qsettings_overrides(DEFAULTS)
        return self._make_model_from(merged)

    def _apply_qsettings_overrides(self, base: dict[str, Any]) -> dict[str, Any]:
        """
        Copy base and replace every key that has a stored override.
        :param base: DEFAULTS-shaped dict
        :return: merged dict
        """
        merged = {section: dict(values) for section, values in base.items()}
        for key, validate in _VALIDATORS.items():
            v = self._settings.value(key, None)
            if v is None:
                continue
            section, name = key.split("/")
            merged[section][name] = validate(v)
            logger.debug("Settings override %s=%r", key, merged[section][name])
        return merged

    def _make_model_from(self, merged: dict[str, Any]) -> AppSettingsData:
        """
        Build AppSettingsData from a merged dict, validating again.
        :param merged:
        :return: AppSettingsData
        """
        g = merged.get("general", {})
        vw = merged.get("view", {})
        return AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g.get("run_mode", DEFAULTS["general"]["run_mode"])),
                logging_level=_validate_logging_level(g.get("logging_level", DEFAULTS["general"]["logging_level"])),
            ),
            view=ViewConfig(
                zoom_speed=_validate_zoom_speed(vw.get("zoom_speed", DEFAULTS["view"]["zoom_speed"])),
                zoom_scale=_validate_zoom_scale(vw.get("zoom_scale", DEFAULTS["view"]["zoom_scale"])),
                tick_interval_ms=_validate_tick_interval(vw.get("tick_interval_ms", DEFAULTS["view"]["tick_interval_ms"])),
            ),
        )
