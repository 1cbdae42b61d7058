"""
サイト固有のフックを定義するためのパッケージ。

このファイルは配布物に含まれる標準版です。サイトで挙動を変更したい場合は
コピーして検索パス上の別ディレクトリに置き、そちらを編集してください。
"""

from __future__ import annotations

from typing import Any, Callable, Dict

hooks: Dict[str, Callable[..., Any]] = {}


def register(name: str, func: Callable[..., Any]) -> None:
    hooks[name] = func
