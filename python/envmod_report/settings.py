"""
環境モジュール管理ツールの設定値。

設定は ENVMOD_<フィールド名大文字> 形式の環境変数から読み込む。
各フィールドの既定値はサイト構成時の標準値に合わせている。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

ENV_PREFIX = "ENVMOD_"
DATA_DIR = Path(__file__).resolve().parent / "data"


class ModuleToolSettings(BaseModel):
    # 動作フラグ
    allow_tcl_mfiles: bool = True
    auto_swap: bool = True
    case_independent_sorting: bool = False
    colorize: bool = True
    disable_same_name_autoswap: bool = False
    use_dot_files: bool = True
    duplicate_paths: bool = False
    exact_match: bool = False
    export_module: bool = True
    mpath_avail: bool = False
    pin_versions: bool = False
    full_settarg_support: bool = False
    ignore_cache: bool = False
    cached_loads: bool = False
    tmod_path_rule: bool = False
    redirect: bool = False

    # 構成時の値
    site_name: Optional[str] = None
    ld_preload: Optional[str] = None
    ld_library_path: Optional[str] = None
    pager: str = "less"
    pager_opts: str = "-XqMREF"
    package_class_name: str = "Pkg"
    prepend_block: Literal["normal", "reverse"] = "normal"

    # キャッシュ関連のしきい値（秒）
    ancient_time: int = 86400
    short_time: int = 2
    threshold: int = 1

    # パス
    prefix: Path = Field(default=Path("/opt/envmod"))
    modulepath_root: Optional[Path] = None
    modulercfile: Optional[Path] = None
    admin_file: Optional[Path] = None
    hashsum_path: Optional[str] = None
    site_package_name: str = "SitePackage"
    package_path: Optional[str] = None
    rc: Optional[str] = None

    term_width: int = 80

    @field_validator("ancient_time", "short_time", "threshold")
    @classmethod
    def _validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("時間のしきい値は 0 以上を指定してください。")
        return value

    @field_validator("term_width")
    @classmethod
    def _validate_term_width(cls, value: int) -> int:
        if value < 20:
            raise ValueError("term_width は 20 以上を指定してください。")
        return value

    @model_validator(mode="after")
    def _populate_prefix_paths(self) -> "ModuleToolSettings":
        # prefix を基準にしたパスは未指定のときだけ補完する
        if self.modulepath_root is None:
            self.modulepath_root = self.prefix / "modulefiles"
        if self.modulercfile is None:
            self.modulercfile = self.prefix / "etc" / "rc.yaml"
        if self.admin_file is None:
            self.admin_file = self.modulepath_root.parent / "etc" / "admin.list"
        if self.package_path is None:
            self.package_path = ";".join(
                [
                    f"{self.prefix}/site/?.py",
                    f"{self.prefix}/libexec/?.py",
                    f"{DATA_DIR}/?.py",
                ]
            )
        return self

    @classmethod
    def env_name(cls, field_name: str) -> str:
        return f"{ENV_PREFIX}{field_name.upper()}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ModuleToolSettings":
        """環境変数から設定を組み立てる。空文字の変数は未設定として扱う。"""
        if environ is None:
            environ = os.environ
        data: dict[str, Any] = {}
        for name in cls.model_fields:
            value = environ.get(cls.env_name(name))
            if value is None or value == "":
                continue
            data[name] = value
        return cls(**data)

    def get(self, name: str, default: Any = None) -> Any:
        """ENVMOD_* 名またはフィールド名で値を引く。未知の名前や未設定は default を返す。"""
        field_name = name
        if field_name.startswith(ENV_PREFIX):
            field_name = field_name[len(ENV_PREFIX):]
        field_name = field_name.lower()
        if field_name not in type(self).model_fields:
            return default
        value = getattr(self, field_name)
        if value is None:
            return default
        return value

    def package_search_path(self) -> List[str]:
        return [entry for entry in (self.package_path or "").split(";") if entry]

    def rc_search_path(self) -> List[Path]:
        if self.rc:
            return [Path(entry).expanduser() for entry in self.rc.split(os.pathsep) if entry]
        return [
            self.prefix / "etc" / "envmodrc.yaml",
            Path("/etc/envmodrc.yaml"),
            Path("~/.envmodrc.yaml").expanduser(),
        ]
