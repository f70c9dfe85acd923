"""时间范围选项模块.

提供按值去重、按插入顺序显示的时间范围选项列表.
"""

from logsift.choices.models import DEFAULT_CHOICES, TimeRangeChoice
from logsift.choices.tool import TimeRangeChoiceList

__all__ = [
    "TimeRangeChoice",
    "TimeRangeChoiceList",
    "DEFAULT_CHOICES",
]
