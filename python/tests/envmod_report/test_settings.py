from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from envmod_report.settings import DATA_DIR, ModuleToolSettings


class TestDefaults:
    def test_prefix_relative_paths(self):
        settings = ModuleToolSettings(prefix=Path("/opt/tools/envmod"))
        assert settings.modulepath_root == Path("/opt/tools/envmod/modulefiles")
        assert settings.modulercfile == Path("/opt/tools/envmod/etc/rc.yaml")
        assert settings.admin_file == Path("/opt/tools/envmod/etc/admin.list")

    def test_package_path_ends_with_bundled_data(self):
        settings = ModuleToolSettings()
        assert settings.package_search_path()[-1] == f"{DATA_DIR}/?.py"

    def test_explicit_paths_are_kept(self):
        settings = ModuleToolSettings(admin_file=Path("/etc/admin.list"))
        assert settings.admin_file == Path("/etc/admin.list")


class TestFromEnv:
    def test_flags_and_numbers_are_parsed(self):
        settings = ModuleToolSettings.from_env(
            {
                "ENVMOD_AUTO_SWAP": "no",
                "ENVMOD_EXACT_MATCH": "yes",
                "ENVMOD_ANCIENT_TIME": "3600",
                "ENVMOD_SITE_NAME": "TACC",
            }
        )
        assert settings.auto_swap is False
        assert settings.exact_match is True
        assert settings.ancient_time == 3600
        assert settings.site_name == "TACC"

    def test_empty_values_fall_back_to_defaults(self):
        settings = ModuleToolSettings.from_env({"ENVMOD_PAGER": ""})
        assert settings.pager == "less"

    def test_unrelated_variables_are_ignored(self):
        settings = ModuleToolSettings.from_env({"PAGER": "more"})
        assert settings.pager == "less"

    def test_negative_time_is_rejected(self):
        with pytest.raises(ValidationError):
            ModuleToolSettings.from_env({"ENVMOD_SHORT_TIME": "-1"})

    def test_invalid_prepend_block_is_rejected(self):
        with pytest.raises(ValidationError):
            ModuleToolSettings.from_env({"ENVMOD_PREPEND_BLOCK": "sideways"})


class TestGet:
    def test_get_by_env_name_and_field_name(self):
        settings = ModuleToolSettings(pager="more")
        assert settings.get("ENVMOD_PAGER") == "more"
        assert settings.get("pager") == "more"

    def test_get_returns_default_for_unset_or_unknown(self):
        settings = ModuleToolSettings()
        assert settings.get("ENVMOD_SITE_NAME", "<empty>") == "<empty>"
        assert settings.get("ENVMOD_NO_SUCH_SETTING", 42) == 42


class TestRcSearchPath:
    def test_rc_variable_overrides_defaults(self, tmp_path: Path):
        first = tmp_path / "one.yaml"
        second = tmp_path / "two.yaml"
        settings = ModuleToolSettings(rc=f"{first}{os.pathsep}{second}")
        assert settings.rc_search_path() == [first, second]

    def test_default_search_path_starts_with_prefix(self):
        settings = ModuleToolSettings(prefix=Path("/opt/envmod"))
        assert settings.rc_search_path()[0] == Path("/opt/envmod/etc/envmodrc.yaml")
