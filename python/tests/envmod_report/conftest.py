from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import Dict, Optional, Sequence

# python ディレクトリをパスに追加
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from envmod_report.models import ActiveConfiguration, CacheDescriptor
from envmod_report.settings import ModuleToolSettings
from envmod_report.site_package import STD_MD5, STD_SHA1

UNAME = "Linux node01 6.1.0 #1 SMP x86_64 GNU/Linux"


class FakeProbe:
    """呼び出し回数を数えるテスト用プローブ。"""

    def __init__(
        self,
        files: Optional[Dict[str, bool]] = None,
        tools: Optional[Dict[str, str]] = None,
        outputs: Optional[Dict[str, str]] = None,
    ) -> None:
        # path -> readable
        self.files = files or {}
        # name -> path
        self.tools = tools or {}
        # コマンド先頭 -> 標準出力
        self.outputs = outputs or {}
        self.calls: Counter[str] = Counter()

    def exists(self, path) -> bool:
        self.calls[f"exists:{path}"] += 1
        return str(path) in self.files

    def readable(self, path) -> bool:
        self.calls[f"readable:{path}"] += 1
        return self.files.get(str(path), False)

    def which(self, name: str) -> Optional[str]:
        self.calls[f"which:{name}"] += 1
        return self.tools.get(name)

    def run(self, command: Sequence[str]) -> str:
        self.calls[f"run:{command[0]}"] += 1
        return self.outputs.get(command[0], "")


@pytest.fixture
def settings(tmp_path: Path) -> ModuleToolSettings:
    return ModuleToolSettings(
        prefix=tmp_path / "envmod",
        package_path=f"{tmp_path}/site/?.py",
        site_name="test-site",
    )


@pytest.fixture
def site_package_path(tmp_path: Path) -> str:
    return f"{tmp_path}/site/SitePackage.py"


@pytest.fixture
def probe(settings: ModuleToolSettings, site_package_path: str) -> FakeProbe:
    return FakeProbe(
        files={
            site_package_path: True,
            str(settings.modulercfile): True,
            str(settings.admin_file): True,
        },
        tools={"sha1sum": "/usr/bin/sha1sum"},
        outputs={
            "/usr/bin/sha1sum": f"{STD_SHA1}  {site_package_path}\n",
            "/sbin/md5": f"MD5 ({site_package_path}) = {STD_MD5}\n",
            "uname": UNAME + "\n",
        },
    )


@pytest.fixture
def active(tmp_path: Path) -> ActiveConfiguration:
    return ActiveConfiguration(
        rc_files=[tmp_path / "b" / "envmodrc.yaml", tmp_path / "a" / "envmodrc.yaml"],
        cache_descriptors=[
            CacheDescriptor(directory="/opt/mdata/zzz", timestamp_file="/opt/mdata/z.txt"),
            CacheDescriptor(directory="/opt/mdata/cacheDir", timestamp_file="/opt/mdata/system.txt"),
        ],
        prop_table={"state": {"validT": {"experimental": 1, "testing": 1}}},
    )
