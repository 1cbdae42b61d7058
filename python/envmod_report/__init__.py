"""
envmod_report パッケージ。

環境モジュール管理ツールがホスト上でどのように構成されているかを集め、
テキストまたは JSON のレポートとして出力するモジュール群をまとめる。
"""

__version__ = "0.3.0"

__all__ = [
    "errors",
    "settings",
    "models",
    "probes",
    "site_package",
    "rc_files",
    "collector",
    "table",
    "reporting",
    "cli",
]
