# test_scroller.py

import pytest
from unittest.mock import Mock

from typemorph.animations import ScrollFollower
from typemorph.display import MemorySurface


class TestScrollFollower:
    """Auto-scroll with user pause."""

    def setup_method(self):
        self.surface = MemorySurface()
        self.box = self.surface.create_container()
        self.surface.set_extents(self.box, 300, 100)
        self.scroller = ScrollFollower(self.surface, logger=Mock())

    def test_follow_scrolls_to_bottom(self):
        self.scroller.begin(self.box)
        assert self.scroller.follow() is True
        assert self.surface.get_scroll_top(self.box) == 200

    def test_disabled_never_scrolls_or_listens(self):
        self.scroller.begin(self.box, enabled=False)
        assert self.scroller.follow() is False
        assert self.surface.listener_count() == 0

    def test_interval_counts_flushes(self):
        self.scroller.begin(self.box, interval=3)
        assert [self.scroller.tick() for _ in range(3)] == [False, False, True]

    def test_user_scroll_pauses_and_resumes(self):
        self.scroller.begin(self.box)
        self.surface.user_scroll(self.box, 50)
        assert self.scroller.paused
        assert self.scroller.follow() is False
        assert self.surface.get_scroll_top(self.box) == 50

        self.surface.user_scroll(self.box, 197)
        assert not self.scroller.paused
        assert self.scroller.follow() is True

    def test_no_overflow_means_no_scroll(self):
        self.surface.set_extents(self.box, 50, 100)
        self.scroller.begin(self.box)
        assert self.scroller.follow() is False

    def test_surface_errors_are_logged(self):
        self.scroller.begin(self.box)
        self.surface.scroll_height = Mock(side_effect=RuntimeError("gone"))
        assert self.scroller.follow() is False
        self.scroller.logger.warning.assert_called_once()

    def test_end_removes_listener(self):
        self.scroller.begin(self.box)
        assert self.surface.listener_count(self.box) == 1
        self.scroller.end()
        assert self.surface.listener_count() == 0
