"""结构变更通知单元测试."""

from unittest.mock import MagicMock

import pytest

from logsift.core import ChangeAxis, ChangeKind, ChangeNotifier, StructuralChange

RESET = StructuralChange(ChangeKind.FULL_RESET, ChangeAxis.ROWS, 0, 2)


class TestStructuralChange:
    """StructuralChange 测试."""

    def test_defaults(self):
        """测试默认索引."""
        change = StructuralChange(ChangeKind.FULL_RESET, ChangeAxis.COLUMNS)
        assert change.first == 0
        assert change.last == -1

    def test_is_reset(self):
        """测试是否为整体替换."""
        assert RESET.is_reset
        assert not StructuralChange(
            ChangeKind.ROWS_APPENDED, ChangeAxis.ROWS, 3, 3
        ).is_reset


class TestChangeNotifier:
    """ChangeNotifier 测试."""

    def test_notify_in_order(self):
        """测试按注册顺序通知."""
        calls = []
        notifier = ChangeNotifier()
        notifier.add_listener(lambda change: calls.append(("a", change)))
        notifier.add_listener(lambda change: calls.append(("b", change)))

        notifier.notify(RESET)

        assert calls == [("a", RESET), ("b", RESET)]

    def test_duplicate_listener_ignored(self):
        """测试重复注册被忽略."""
        listener = MagicMock()
        notifier = ChangeNotifier()
        notifier.add_listener(listener)
        notifier.add_listener(listener)

        notifier.notify(RESET)

        assert len(notifier) == 1
        listener.assert_called_once_with(RESET)

    def test_remove_listener(self):
        """测试移除监听器."""
        listener = MagicMock()
        notifier = ChangeNotifier()
        notifier.add_listener(listener)
        notifier.remove_listener(listener)
        notifier.remove_listener(listener)

        notifier.notify(RESET)

        listener.assert_not_called()
        assert len(notifier) == 0

    def test_listener_error_propagates(self):
        """测试监听器异常向上抛出."""
        notifier = ChangeNotifier()
        notifier.add_listener(MagicMock(side_effect=ValueError("boom")))

        with pytest.raises(ValueError, match="boom"):
            notifier.notify(RESET)
