"""结构变更通知模块.

集合发生结构性修改（整体替换、追加、删除）后，统一以一个
StructuralChange 事件通知监听器，监听器只需是普通的可调用对象。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from logsift.typing import ChangeListener

# 模块级别日志记录器
logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    """结构变更类型."""

    FULL_RESET = "full_reset"  # 整体替换
    COLUMNS_APPENDED = "columns_appended"
    COLUMNS_REMOVED = "columns_removed"
    ROWS_APPENDED = "rows_appended"


class ChangeAxis(str, Enum):
    """结构变更所在的维度."""

    ROWS = "rows"
    COLUMNS = "columns"


@dataclass(frozen=True)
class StructuralChange:
    """结构变更事件.

    Attributes:
        kind: 变更类型
        axis: 变更维度
        first: 受影响的第一个索引（FULL_RESET 时为 0）
        last: 受影响的最后一个索引（FULL_RESET 时为新的长度 - 1，空集合为 -1）
    """

    kind: ChangeKind
    axis: ChangeAxis
    first: int = 0
    last: int = -1

    @property
    def is_reset(self) -> bool:
        """是否为整体替换."""
        return self.kind == ChangeKind.FULL_RESET


class ChangeNotifier:
    """结构变更通知器.

    以组合方式嵌入到各集合模型中，维护监听器列表。

    示例:
        notifier = ChangeNotifier()
        notifier.add_listener(lambda change: print(change.kind))
        notifier.notify(StructuralChange(ChangeKind.FULL_RESET, ChangeAxis.ROWS))
    """

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def add_listener(self, listener: ChangeListener) -> None:
        """注册监听器，重复注册会被忽略."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """移除监听器，未注册时忽略."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, change: StructuralChange) -> None:
        """按注册顺序通知所有监听器.

        Raises:
            Exception: 监听器抛出的异常在记录日志后原样抛出
        """
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"结构变更监听器执行失败: {change}")
                raise

    def __len__(self) -> int:
        return len(self._listeners)
