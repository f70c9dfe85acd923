"""视图存储实现模块.

视图存储是进程级的、按名称保存的设置，核心逻辑只通过 ViewStore 接口访问。
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .exceptions import ViewNotFoundError, ViewStoreError
from .models import ViewSnapshot

logger = logging.getLogger(__name__)


class ViewStore(ABC):
    """视图存储接口."""

    @abstractmethod
    def load(self, name: str) -> ViewSnapshot:
        """
        读取视图.

        Raises:
            ViewNotFoundError: 视图不存在
        """

    @abstractmethod
    def save(self, name: str, snapshot: ViewSnapshot) -> None:
        """保存视图，同名视图会被覆盖."""

    @abstractmethod
    def names(self) -> list[str]:
        """所有视图名称（排序后）."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        删除视图.

        Raises:
            ViewNotFoundError: 视图不存在
        """

    def __contains__(self, name: object) -> bool:
        return name in self.names()


class InMemoryViewStore(ViewStore):
    """内存视图存储，主要用于测试."""

    def __init__(self) -> None:
        self._views: dict[str, dict] = {}

    def load(self, name: str) -> ViewSnapshot:
        if name not in self._views:
            raise ViewNotFoundError(f"视图不存在: {name}")
        return ViewSnapshot.from_dict(self._views[name])

    def save(self, name: str, snapshot: ViewSnapshot) -> None:
        _check_name(name)
        self._views[name] = snapshot.to_dict()

    def names(self) -> list[str]:
        return sorted(self._views)

    def delete(self, name: str) -> None:
        if name not in self._views:
            raise ViewNotFoundError(f"视图不存在: {name}")
        del self._views[name]


class JsonFileViewStore(ViewStore):
    """
    JSON 文件视图存储.

    文件格式: {"views": {name: {"columns": [...], "query": ..., "start": [...], "end": [...]}}}

    使用示例:
        store = JsonFileViewStore(Path("~/.config/logsift/views.json").expanduser())
        store.save("errors", ViewSnapshot(columns=["hostname", "msg"], query="level:error"))
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, name: str) -> ViewSnapshot:
        views = self._read()
        if name not in views:
            raise ViewNotFoundError(f"视图不存在: {name}")
        return ViewSnapshot.from_dict(views[name])

    def save(self, name: str, snapshot: ViewSnapshot) -> None:
        _check_name(name)
        views = self._read()
        views[name] = snapshot.to_dict()
        self._write(views)
        logger.info(f"保存视图: {name} -> {self._path}")

    def names(self) -> list[str]:
        return sorted(self._read())

    def delete(self, name: str) -> None:
        views = self._read()
        if name not in views:
            raise ViewNotFoundError(f"视图不存在: {name}")
        del views[name]
        self._write(views)
        logger.info(f"删除视图: {name}")

    def _read(self) -> dict[str, dict]:
        """读取所有视图，文件不存在时返回空字典."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ViewStoreError(f"读取视图文件失败: {self._path}, 错误: {e}") from e

        views = data.get("views", {}) if isinstance(data, dict) else None
        if not isinstance(views, dict):
            raise ViewStoreError(f"视图文件格式错误: {self._path}")
        return views

    def _write(self, views: dict[str, dict]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps({"views": views}, ensure_ascii=False, indent=2, sort_keys=True),
                encoding="utf-8",
            )
        except OSError as e:
            raise ViewStoreError(f"写入视图文件失败: {self._path}, 错误: {e}") from e


def _check_name(name: str) -> None:
    if not name or not name.strip():
        raise ViewStoreError("视图名称不能为空")
