"""桁揃えしたテキスト表とバナーの組み立て。"""

from __future__ import annotations

from typing import List, Sequence

COLUMN_GAP = "  "


class TextTable:
    """
    列幅を揃えたテキスト表。

    各列の幅はその表の中で最も長いセルに合わせる。見出しの下には
    見出しと同じ長さの破線を入れる。行は追加した順に出力する。
    """

    def __init__(self, headers: Sequence[str]) -> None:
        self._headers = [str(header) for header in headers]
        self._rows: List[List[str]] = []

    def add_row(self, *cells: object) -> None:
        if len(cells) != len(self._headers):
            raise ValueError(
                f"列数が一致しません: expected {len(self._headers)}, got {len(cells)}"
            )
        self._rows.append([str(cell) for cell in cells])

    def __len__(self) -> int:
        return len(self._rows)

    def column_widths(self) -> List[int]:
        widths = [len(header) for header in self._headers]
        for row in self._rows:
            for index, cell in enumerate(row):
                widths[index] = max(widths[index], len(cell))
        return widths

    def render(self) -> str:
        widths = self.column_widths()
        rules = ["-" * len(header) for header in self._headers]
        lines = []
        for row in [self._headers, rules, *self._rows]:
            padded = [cell.ljust(width) for cell, width in zip(row, widths)]
            lines.append(COLUMN_GAP.join(padded).rstrip())
        return "\n".join(lines)


def border(width: int, indent: int = 2) -> str:
    return "-" * max(width - 1 - indent, 1)


def banner(title: str, width: int) -> str:
    line = border(width)
    return "\n".join([line, f" {title}", line])
