"""logsift 类型定义模块."""

from collections.abc import Callable, Mapping
from typing import Any, Dict, List

# 序列化后的 TimeSpec，如 ["relative", "15", "60"]
SerializedTimeSpec = List[str]

# 日志事件字段映射
FieldMap = Mapping[str, str]

# 原始响应字典类型
PayloadDict = Dict[str, Any]

# 结构变更监听器类型，参数为 StructuralChange
ChangeListener = Callable[[Any], None]
