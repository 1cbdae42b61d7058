"""ファイルシステムと外部コマンドへのアクセスをまとめたプローブ。"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class HostProbe(Protocol):
    def exists(self, path: PathLike) -> bool: ...

    def readable(self, path: PathLike) -> bool: ...

    def run(self, command: Sequence[str]) -> str: ...

    def which(self, name: str) -> Optional[str]: ...


class SystemProbe:
    """実際のホストに対するプローブ。

    コマンドの終了ステータスは失敗扱いにしない。標準出力をそのまま返し、
    異常はログに残すだけにする。timeout は既定で無制限。
    """

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self._timeout = timeout

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def readable(self, path: PathLike) -> bool:
        return os.access(path, os.R_OK)

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def run(self, command: Sequence[str]) -> str:
        try:
            completed = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
                check=False,
                timeout=self._timeout,
            )
        except FileNotFoundError:
            logger.warning("コマンドが見つかりません: %s", command[0])
            return ""
        except subprocess.TimeoutExpired as exc:
            logger.warning("コマンドがタイムアウトしました: %s", " ".join(command))
            output = exc.stdout or ""
            return output.decode("utf-8", "replace") if isinstance(output, bytes) else output
        if completed.returncode != 0:
            logger.warning(
                "コマンドが終了ステータス %d で終了しました: %s (%s)",
                completed.returncode,
                " ".join(command),
                completed.stderr.strip(),
            )
        return completed.stdout
