from __future__ import annotations

import json
from typing import Any, Dict, List

import yaml

from .collector import ConfigCollector
from .rc_files import normalize_properties
from .table import TextTable, banner


def dump_property_table(prop_table: Dict[str, Any]) -> str:
    return yaml.safe_dump(
        {"propT": prop_table},
        sort_keys=True,
        default_flow_style=False,
        allow_unicode=True,
        indent=2,
    ).rstrip("\n")


class ReportFormatter:
    """スナップショットと rc ファイル由来の情報をテキストのレポートにする。"""

    def __init__(self, collector: ConfigCollector) -> None:
        self._collector = collector

    def config_table(self) -> TextTable:
        table = TextTable(["Description", "Value"])
        for _, entry in self._collector.snapshot().sorted_items():
            table.add_row(entry.label, entry.value)
        return table

    def rc_file_block(self) -> str:
        rc_files = self._collector.active.rc_files
        if not rc_files:
            return ""
        title = "Active RC file(s):"
        return "\n".join([title, "-" * len(title), *(str(path) for path in rc_files)])

    def cache_block(self) -> str:
        descriptors = self._collector.active.cache_descriptors
        if not descriptors:
            return ""
        table = TextTable(["Cache Directory", "Time Stamp File"])
        for descriptor in descriptors:
            table.add_row(descriptor.directory, descriptor.timestamp_file)
        return table.render()

    def property_block(self) -> str:
        prop_table = self._collector.active.prop_table
        if not prop_table:
            return ""
        width = self._collector.settings.term_width
        return "\n".join([banner("Property Table:", width), "", dump_property_table(prop_table)])

    def report(self) -> str:
        # 先にスナップショットを確定させ、失敗時は何も出力しない
        table = self.config_table()
        blocks = [table.render(), self.rc_file_block(), self.cache_block(), self.property_block()]
        return "\n\n".join(block for block in blocks if block)


class JSONReportFormatter:
    """同じ情報を JSON で出力する。値のみを持ち、ラベルは含めない。"""

    def __init__(self, collector: ConfigCollector) -> None:
        self._collector = collector

    def document(self) -> Dict[str, Any]:
        snapshot = self._collector.snapshot()
        active = self._collector.active
        result: Dict[str, Any] = {}
        if len(snapshot):
            result["config"] = snapshot.values_by_key()
        if active.rc_files:
            result["rcfiles"] = [str(path) for path in active.rc_files]
        if active.cache_descriptors:
            cache: List[List[str]] = [d.as_pair() for d in active.cache_descriptors]
            result["cache"] = cache
        if active.prop_table:
            result["propT"] = normalize_properties(active.prop_table)
        return result

    def report_json(self) -> str:
        return json.dumps(self.document(), ensure_ascii=False, indent=2, sort_keys=True)


def report(collector: ConfigCollector) -> str:
    return ReportFormatter(collector).report()


def report_json(collector: ConfigCollector) -> str:
    return JSONReportFormatter(collector).report_json()
