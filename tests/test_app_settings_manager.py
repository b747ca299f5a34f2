import pytest

from arcview.app.app_settings_manager import AppSettingsManager, DEFAULTS, RunMode


def test_defaults_without_overrides(tmp_settings):
    mgr = AppSettingsManager()

    assert mgr.run_mode is RunMode.PRODUCTION
    assert mgr.dev_mode is False
    assert mgr.logging_level == "INFO"
    assert mgr.zoom_speed == DEFAULTS["view"]["zoom_speed"]
    assert mgr.zoom_scale == DEFAULTS["view"]["zoom_scale"]
    assert mgr.tick_interval_ms == DEFAULTS["view"]["tick_interval_ms"]


def test_setters_persist_to_qsettings(tmp_settings):
    mgr = AppSettingsManager()
    mgr.set_run_mode("development")
    mgr.set_zoom_speed(2.5)
    mgr.set_zoom_scale(1.0)
    mgr.set_tick_interval_ms(33)
    mgr.set_logging_level("debug")

    reloaded = AppSettingsManager()
    assert reloaded.run_mode is RunMode.DEVELOPMENT
    assert reloaded.dev_mode is True
    assert reloaded.zoom_speed == pytest.approx(2.5)
    assert reloaded.zoom_scale == pytest.approx(1.0)
    assert reloaded.tick_interval_ms == 33
    assert reloaded.logging_level == "DEBUG"


def test_invalid_overrides_fall_back_to_defaults(tmp_settings):
    tmp_settings.setValue("general/run_mode", "chaos")
    tmp_settings.setValue("general/logging_level", "loud")
    tmp_settings.setValue("view/zoom_speed", "-3")
    tmp_settings.setValue("view/zoom_scale", "fast")
    tmp_settings.setValue("view/tick_interval_ms", "5000")
    tmp_settings.sync()

    mgr = AppSettingsManager()
    assert mgr.run_mode is RunMode.PRODUCTION
    assert mgr.logging_level == "INFO"
    assert mgr.zoom_speed == DEFAULTS["view"]["zoom_speed"]
    assert mgr.zoom_scale == DEFAULTS["view"]["zoom_scale"]
    assert mgr.tick_interval_ms == DEFAULTS["view"]["tick_interval_ms"]


def test_reset_section(tmp_settings):
    mgr = AppSettingsManager()
    mgr.set_zoom_speed(3.0)
    mgr.set_run_mode(RunMode.VERBOSE)

    mgr.reset_section("view")
    assert mgr.zoom_speed == DEFAULTS["view"]["zoom_speed"]
    assert mgr.run_mode is RunMode.VERBOSE

    mgr.reset_all_to_default()
    assert mgr.run_mode is RunMode.PRODUCTION


def test_reset_unknown_section_raises(tmp_settings):
    mgr = AppSettingsManager()
    with pytest.raises(ValueError):
        mgr.reset_section("shortcuts")


def test_to_dict(tmp_settings):
    data = AppSettingsManager().to_dict()
    assert data["general"]["run_mode"] == "production"
    assert set(data["view"]) == {"zoom_speed", "zoom_scale", "tick_interval_ms"}
