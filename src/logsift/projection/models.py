"""日志事件数据模型定义模块."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from logsift.time_spec import format_instant, to_utc
from logsift.typing import FieldMap


def stringify_value(value: Any) -> str:
    """将任意字段值转换为显示字符串.

    - None -> ""
    - 布尔值 -> "true" / "false"
    - 列表、字典 -> JSON 字符串
    - 其他 -> str(value)
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, sort_keys=True, default=str)
    return str(value)


@dataclass(frozen=True)
class LogEvent:
    """一条日志事件.

    字段值在构造时一次性转换为字符串，之后不再变化。

    Attributes:
        timestamp: 事件时间（UTC）
        fields: 字段映射（只读）
        event_id: 事件 ID（可选）
    """

    timestamp: datetime
    fields: FieldMap = field(default_factory=dict)
    event_id: str | None = None

    def __post_init__(self) -> None:
        """规范化时间并冻结字段映射."""
        object.__setattr__(self, "timestamp", to_utc(self.timestamp))
        frozen = {str(k): stringify_value(v) for k, v in self.fields.items()}
        object.__setattr__(self, "fields", MappingProxyType(frozen))

    def get(self, name: str, default: str = "") -> str:
        """获取字段值，字段不存在时返回默认值."""
        return self.fields.get(name, default)

    def detail_items(self) -> list[tuple[str, str]]:
        """详情视图行：首行为时间，其余按字段名排序."""
        items = [("timestamp", format_instant(self.timestamp))]
        items.extend((key, self.fields[key]) for key in sorted(self.fields))
        return items
