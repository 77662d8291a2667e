"""Tests for paramguard.config.settings."""

from collections import OrderedDict

import pytest

from paramguard.security.exposure import (
    get_default_config,
    log_no_exposure,
    raise_no_exposure,
)


class TestSettings:
    """Test the Settings pydantic-settings class."""

    def _make(self, **kwargs):
        """Create a Settings instance that ignores any local .env file."""
        from paramguard.config.settings import Settings
        return Settings(_env_file=None, **kwargs)

    # -- defaults --

    def test_defaults(self):
        s = self._make()
        assert s.NO_EXPOSE_ACTION == "log"
        assert s.MAP_FACTORY == "builtins.dict"
        assert s.AUDIT_UNEXPOSED is True

    # -- env overrides --

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PARAMGUARD_NO_EXPOSE_ACTION", "raise")
        monkeypatch.setenv("PARAMGUARD_MAP_FACTORY", "collections.OrderedDict")
        monkeypatch.setenv("PARAMGUARD_AUDIT_UNEXPOSED", "false")
        s = self._make()
        assert s.NO_EXPOSE_ACTION == "raise"
        assert s.MAP_FACTORY == "collections.OrderedDict"
        assert s.AUDIT_UNEXPOSED is False

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("NO_EXPOSE_ACTION", "raise")
        assert self._make().NO_EXPOSE_ACTION == "log"

    # -- validators --

    def test_action_is_case_insensitive(self):
        assert self._make(NO_EXPOSE_ACTION="  RAISE ").NO_EXPOSE_ACTION == "raise"

    def test_invalid_action_rejected(self):
        from pydantic import ValidationError
        with pytest.raises(ValidationError):
            self._make(NO_EXPOSE_ACTION="explode")

    def test_invalid_map_factory_rejected(self):
        from pydantic import ValidationError
        with pytest.raises(ValidationError):
            self._make(MAP_FACTORY="no_such_module_xyz.Map")

    # -- exposure config --

    @pytest.mark.parametrize("action, hook", [
        ("ignore", None),
        ("log", log_no_exposure),
        ("raise", raise_no_exposure),
    ])
    def test_to_exposure_config_hook(self, action, hook):
        config = self._make(NO_EXPOSE_ACTION=action).to_exposure_config()
        assert config.on_no_expose is hook

    def test_to_exposure_config_factory(self):
        config = self._make(MAP_FACTORY="collections.OrderedDict").to_exposure_config()
        assert config.map_factory is OrderedDict

    def test_apply_installs_default(self):
        installed = self._make(NO_EXPOSE_ACTION="raise").apply()
        assert get_default_config() is installed
        assert installed.on_no_expose is raise_no_exposure
