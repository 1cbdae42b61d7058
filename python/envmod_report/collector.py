"""
有効な設定値を集めて ConfigurationSnapshot を組み立てる。

スナップショットは最初にアクセスされたときに一度だけ構築し、以降は同じ
オブジェクトを返す。構築中の外部コマンド呼び出し (uname, ハッシュ計算) が
二重に走らないよう、初回構築はロックで保護する。
"""

from __future__ import annotations

import logging
import platform
import sys
import threading
from pathlib import Path
from typing import Callable, Dict, Optional

from . import __version__
from .models import ActiveConfiguration, ConfigEntry, ConfigurationSnapshot, ConfigValue
from .probes import HostProbe, SystemProbe
from .settings import ModuleToolSettings
from .site_package import SitePackageIdentifier

logger = logging.getLogger(__name__)

EMPTY = "<empty>"
MISSING_SUFFIX = " -> <empty>"


def _flag(value: bool) -> str:
    return "yes" if value else "no"


def _or_empty(value: Optional[str]) -> str:
    return value if value else EMPTY


class ConfigCollector:
    def __init__(
        self,
        settings: ModuleToolSettings,
        active: ActiveConfiguration,
        probe: Optional[HostProbe] = None,
        *,
        identifier: Optional[SitePackageIdentifier] = None,
        is_terminal: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.settings = settings
        self.active = active
        self._probe: HostProbe = probe if probe is not None else SystemProbe()
        self._identifier = identifier or SitePackageIdentifier(
            self._probe,
            settings.package_search_path(),
            package_name=settings.site_package_name,
            hashsum_path=settings.hashsum_path,
        )
        self._is_terminal = is_terminal or sys.stdout.isatty
        self._snapshot: Optional[ConfigurationSnapshot] = None
        self._lock = threading.Lock()

    def snapshot(self) -> ConfigurationSnapshot:
        if self._snapshot is None:
            with self._lock:
                if self._snapshot is None:
                    self._snapshot = self._build()
        return self._snapshot

    def _file_value(self, path: Path) -> str:
        if self._probe.exists(path) and self._probe.readable(path):
            return str(path)
        return f"{path}{MISSING_SUFFIX}"

    def _host_identification(self) -> str:
        uname = self._probe.run(["uname", "-a"]).strip()
        if not uname:
            logger.warning("uname -a の出力が空でした。")
        return uname

    def _build(self) -> ConfigurationSnapshot:
        s = self.settings
        # サイトパッケージの判定はハッシュコマンドが無ければここで中断する
        site_pkg = self._identifier.classify()

        values: Dict[str, tuple[str, ConfigValue]] = {
            "allowTCL": ("Allow TCL modulefiles", _flag(s.allow_tcl_mfiles)),
            "autoSwap": ("Auto swapping", _flag(s.auto_swap)),
            "case": ("Case Independent Sorting", _flag(s.case_independent_sorting)),
            "colorize": ("Colorize output", _flag(s.colorize)),
            "disable1N": ("Disable Same Name AutoSwap", _flag(s.disable_same_name_autoswap)),
            "dot_files": ("Using dotfiles", _flag(s.use_dot_files)),
            "dupPaths": ("Allow duplicate paths", _flag(s.duplicate_paths)),
            "exactMatch": ("Require Exact Match/no defaults", _flag(s.exact_match)),
            "expMCmd": ("Export the module command", _flag(s.export_module)),
            "ld_preload": ("LD_PRELOAD at config time", _or_empty(s.ld_preload)),
            "ld_lib_path": ("LD_LIBRARY_PATH at config time", _or_empty(s.ld_library_path)),
            "toolV": ("Tool version", __version__),
            "pyV": ("Python Version", platform.python_version()),
            "term_A": ("Active terminal support", _flag(self._is_terminal())),
            "mpath_av": ("avail: Include modulepath dir", _flag(s.mpath_avail)),
            "mpath_root": ("MODULEPATH_ROOT", str(s.modulepath_root)),
            "modRC": ("MODULERCFILE", self._file_value(s.modulercfile)),
            "numSC": ("number of cache dirs", len(self.active.cache_descriptors)),
            "pager": ("Pager", s.pager),
            "pager_opts": ("Pager Options", s.pager_opts),
            "path_hash": ("Path to HashSum", _or_empty(s.hashsum_path)),
            "path_py": ("Path to Python", sys.executable or EMPTY),
            "pin_v": ("Pin Versions in restore", _flag(s.pin_versions)),
            "pkg": ("Pkg Class name", s.package_class_name),
            "prefix": ("Tool prefix", str(s.prefix)),
            "prpnd_blk": ("Prepend order", s.prepend_block),
            "settarg": ("Supporting Full Settarg Use", _flag(s.full_settarg_support)),
            "sitePkg": ("Site Pkg location", site_pkg),
            "siteName": ("Site Name", _or_empty(s.site_name)),
            "spdr_ignore": ("Ignore Cache", _flag(s.ignore_cache)),
            "spdr_loads": ("Cached loads", _flag(s.cached_loads)),
            "tm_ancient": ("User cache valid time(sec)", s.ancient_time),
            "tm_short": ("Write cache after (sec)", s.short_time),
            "tm_threshold": ("Threshold (sec)", s.threshold),
            "tmod_rule": ("Tmod prepend PATH Rule", _flag(s.tmod_path_rule)),
            "uname": ("uname -a", self._host_identification()),
            "z01_admin": ("Admin file", self._file_value(s.admin_file)),
            "redirect": ("Redirect to stdout", _flag(s.redirect)),
        }
        return ConfigurationSnapshot(
            {key: ConfigEntry(label=label, value=value) for key, (label, value) in values.items()}
        )
