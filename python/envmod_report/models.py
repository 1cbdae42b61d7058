from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

ConfigValue = Union[str, int, bool]


class ConfigEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: ConfigValue


class CacheDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    directory: str
    timestamp_file: str

    def as_pair(self) -> List[str]:
        return [self.directory, self.timestamp_file]


class ActiveConfiguration(BaseModel):
    """rc ファイルから読み込んだ有効な構成。"""

    rc_files: List[Path] = Field(default_factory=list)
    cache_descriptors: List[CacheDescriptor] = Field(default_factory=list)
    prop_table: Dict[str, Any] = Field(default_factory=dict)


class ConfigurationSnapshot(Mapping[str, ConfigEntry]):
    """キー -> ConfigEntry の読み取り専用マッピング。"""

    def __init__(self, entries: Mapping[str, ConfigEntry]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, key: str) -> ConfigEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def values_by_key(self) -> Dict[str, ConfigValue]:
        return {key: entry.value for key, entry in self._entries.items()}

    def sorted_items(self) -> List[tuple[str, ConfigEntry]]:
        return sorted(self._entries.items())
