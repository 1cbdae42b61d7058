from __future__ import annotations


class EnvModReportError(Exception):
    """envmod_report が送出する例外の基底クラス。"""


class HashSumUnavailable(EnvModReportError):
    """ハッシュ計算用のコマンド (sha1sum, shasum, md5sum, md5) が見つからない。"""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class RcFileError(EnvModReportError):
    """rc ファイルの読み込みまたは形式に問題がある。"""

    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
