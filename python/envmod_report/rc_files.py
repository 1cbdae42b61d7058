from __future__ import annotations

import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from .errors import RcFileError
from .models import ActiveConfiguration, CacheDescriptor

logger = logging.getLogger(__name__)


def load_rc_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except OSError as exc:
        raise RcFileError(path, f"読み込みに失敗しました: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RcFileError(path, f"YAML の形式が不正です: {exc}") from exc
    if not isinstance(data, dict):
        raise RcFileError(path, "トップレベルはマッピングである必要があります。")
    return data


def merge_properties(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """入れ子のマッピングを再帰的にマージする。同じキーは update 側が優先。"""
    merged = dict(base)
    for key, value in update.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_properties(current, value)
        else:
            merged[key] = value
    return merged


def normalize_properties(value: Any) -> Any:
    """
    YAML から読んだ値を JSON にそのまま出せる形にそろえる。

    YAML 1.1 では on / yes や数字のキーが bool / int になり、日付は date になるため、
    キーは文字列に、日付は ISO 形式の文字列に変換する。
    """
    if isinstance(value, dict):
        return {str(key): normalize_properties(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize_properties(item) for item in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _cache_field(path: Path, entry: Dict[str, Any], name: str) -> str:
    value = entry[name]
    if not isinstance(value, str) or not value:
        raise RcFileError(path, f"cache の {name} には空でない文字列を指定してください: {entry!r}")
    return value


def _parse_cache_entries(path: Path, entries: Any) -> List[CacheDescriptor]:
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise RcFileError(path, "cache はリストで指定してください。")
    descriptors: List[CacheDescriptor] = []
    for entry in entries:
        if not isinstance(entry, dict) or "dir" not in entry or "timestamp" not in entry:
            raise RcFileError(path, f"cache の要素には dir と timestamp が必要です: {entry!r}")
        descriptors.append(
            CacheDescriptor(
                directory=_cache_field(path, entry, "dir"),
                timestamp_file=_cache_field(path, entry, "timestamp"),
            )
        )
    return descriptors


def load_active_configuration(search_path: Iterable[Path]) -> ActiveConfiguration:
    """検索パス上に存在する rc ファイルを順に読み込み、一つの構成にまとめる。"""
    rc_files: List[Path] = []
    cache: List[CacheDescriptor] = []
    prop_table: Dict[str, Any] = {}

    for path in search_path:
        if not path.is_file():
            logger.debug("rc ファイルが存在しないためスキップします: %s", path)
            continue
        data = load_rc_file(path)
        rc_files.append(path)
        prop_t = data.get("propT") or {}
        if not isinstance(prop_t, dict):
            raise RcFileError(path, "propT はマッピングで指定してください。")
        prop_table = merge_properties(prop_table, normalize_properties(prop_t))
        cache.extend(_parse_cache_entries(path, data.get("cache")))

    return ActiveConfiguration(rc_files=rc_files, cache_descriptors=cache, prop_table=prop_table)
