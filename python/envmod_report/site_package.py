"""
サイトパッケージ (SitePackage) が標準版かどうかを判定する。

検索パス上で最初に見つかったファイルを外部のハッシュコマンドで計算し、
配布物に含まれる標準版のダイジェストと比較する。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Literal, Optional, Sequence

from .errors import HashSumUnavailable
from .probes import HostProbe

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
STANDARD = "standard"

# envmod_report/data/SitePackage.py のダイジェスト
STD_SHA1 = "330ffd3cf0465c978f7cfd3e272da051ea8cbd7e"
STD_MD5 = "90c2b990342a9e1dbc9c2ece1f5e24f6"

HASHSUM_CANDIDATES = ("sha1sum", "shasum", "md5sum", "md5")

DigestFamily = Literal["sha1", "md5"]

# "MD5 (file) = <hex>" 形式（BSD の md5 や --tag 付きの出力）
_TAGGED_OUTPUT = re.compile(r"^\S+ \(.*\) ?= *(?P<digest>\S*)", re.DOTALL)
_HEX = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class HashTool:
    path: str
    family: DigestFamily


@dataclass(frozen=True)
class HashToolResolution:
    """ハッシュコマンドの解決結果。tool か reason のどちらか一方が入る。"""

    tool: Optional[HashTool] = None
    reason: Optional[str] = None

    def require(self) -> HashTool:
        if self.tool is None:
            raise HashSumUnavailable(self.reason or "HashSum program is not available")
        return self.tool


def digest_family(path: str) -> DigestFamily:
    return "md5" if "md5" in Path(path).name else "sha1"


def resolve_hash_tool(
    probe: HostProbe,
    configured: Optional[str] = None,
    candidates: Sequence[str] = HASHSUM_CANDIDATES,
) -> HashToolResolution:
    if configured:
        logger.debug("設定済みのハッシュコマンドを使用します: %s", configured)
        return HashToolResolution(tool=HashTool(configured, digest_family(configured)))

    for name in candidates:
        found = probe.which(name)
        if found:
            logger.debug("ハッシュコマンドを検出しました: %s", found)
            return HashToolResolution(tool=HashTool(found, digest_family(found)))

    return HashToolResolution(
        reason=f"Unable to find HashSum program ({', '.join(candidates)})"
    )


def extract_digest(output: str) -> str:
    """
    ハッシュコマンドの出力からダイジェスト部分を取り出す。

    出力は次のどちらかの形になる::

        MD5 (Makefile) = 3fecf96f61c44f67ce13124e97cfd612
        3160f0cc15e577c476bd1acd7c096333ba1ec1ea  Makefile
    """
    text = output.strip()
    match = _TAGGED_OUTPUT.match(text)
    if match:
        return match.group("digest")
    tokens = text.split()
    return tokens[0] if tokens else ""


class SitePackageIdentifier:
    def __init__(
        self,
        probe: HostProbe,
        search_path: Sequence[str],
        *,
        package_name: str = "SitePackage",
        hashsum_path: Optional[str] = None,
        reference_digests: Optional[Dict[DigestFamily, str]] = None,
    ) -> None:
        self._probe = probe
        self._search_path = list(search_path)
        self._package_name = package_name
        self._hashsum_path = hashsum_path
        self._references: Dict[DigestFamily, str] = reference_digests or {
            "sha1": STD_SHA1,
            "md5": STD_MD5,
        }
        self._resolution: Optional[HashToolResolution] = None

    def locate(self) -> Optional[str]:
        for template in self._search_path:
            candidate = template.replace("?", self._package_name)
            if self._probe.exists(candidate):
                return candidate
        return None

    def hash_tool(self) -> HashToolResolution:
        if self._resolution is None:
            self._resolution = resolve_hash_tool(self._probe, self._hashsum_path)
        return self._resolution

    def classify(self) -> str:
        """"standard"、"unknown"、または見つかったファイルのパスを返す。"""
        location = self.locate()
        if location is None:
            return UNKNOWN

        tool = self.hash_tool().require()
        output = self._probe.run([tool.path, location])
        digest = extract_digest(output)
        if not _HEX.fullmatch(digest):
            logger.warning(
                "%s の出力からダイジェストを取得できませんでした: %r", tool.path, output
            )
            return location

        if digest == self._references[tool.family]:
            return STANDARD
        return location
