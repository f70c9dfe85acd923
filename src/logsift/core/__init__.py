"""核心组件模块.

提供集合结构变更通知相关的公共组件.
"""

from logsift.core.changes import (
    ChangeAxis,
    ChangeKind,
    ChangeNotifier,
    StructuralChange,
)

__all__ = [
    "ChangeAxis",
    "ChangeKind",
    "ChangeNotifier",
    "StructuralChange",
]
