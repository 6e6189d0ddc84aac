# test_typer.py

import pytest
import asyncio
from unittest.mock import Mock

from typemorph.animations import SessionAnimations, CURSOR_ATTRIBUTE
from typemorph.config import TypeMorphConfig
from typemorph.content import Element, TextRun, parse_html
from typemorph.display import MemorySurface
from typemorph.scheduling import TimerRegistry


class MockLogger:
    def __init__(self):
        self.debug = Mock()
        self.info = Mock()
        self.warning = Mock()
        self.error = Mock()


class TestContentTyper:
    """Chunked reveal of content trees."""

    def setup_method(self):
        self.surface = MemorySurface()
        self.root = self.surface.create_container(element_id="out")
        self.timers = TimerRegistry()
        self.logger = MockLogger()
        self.animations = SessionAnimations(self.surface, self.timers, logger=self.logger)
        self.typer = self.animations.typer
        self.cursor = self.animations.cursor
        self.cursor.ensure(True, "|")

    def _skip_cursor(self, node):
        return not self.surface.is_text(node) and self.surface.get_attribute(node, CURSOR_ATTRIBUTE) is not None

    def visible(self):
        return self.surface.text_content(self.root, skip=self._skip_cursor)

    def markup(self):
        return self.surface.to_markup(self.root, skip=self._skip_cursor)

    @pytest.mark.asyncio
    async def test_flush_count_is_chunked_length(self):
        token = self.timers.token()
        config = TypeMorphConfig(speed=0, chunk_size=3)
        flushes = await self.typer.type_nodes(self.root, [TextRun("Hello")], config, token)
        assert flushes == 2
        assert self.visible() == "Hello"
        assert len(self.timers) == 0

    @pytest.mark.asyncio
    async def test_text_merges_into_one_node_before_caret(self):
        token = self.timers.token()
        await self.typer.type_nodes(self.root, [TextRun("abc")], TypeMorphConfig(speed=0), token)
        children = self.surface.children(self.root)
        assert len(children) == 2
        assert self.surface.get_text(children[0]) == "abc"
        assert children[-1] == self.cursor.node

    @pytest.mark.asyncio
    async def test_elements_are_rebuilt_with_attributes(self):
        token = self.timers.token()
        nodes = parse_html('a<b title="t">bold</b>c')
        await self.typer.type_nodes(self.root, nodes, TypeMorphConfig(speed=0), token)
        assert self.markup() == 'a<b title="t">bold</b>c'
        assert self.surface.children(self.root)[-1] == self.cursor.node

    @pytest.mark.asyncio
    async def test_bad_attribute_is_logged_and_skipped(self):
        token = self.timers.token()
        nodes = [Element("b", (("bad name", "x"), ("title", "t")), (TextRun("x"),))]
        await self.typer.type_nodes(self.root, nodes, TypeMorphConfig(speed=0), token)
        assert self.markup() == '<b title="t">x</b>'
        self.logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancellation_stops_between_chunks(self):
        token = self.timers.token()
        task = asyncio.create_task(
            self.typer.type_nodes(self.root, [TextRun("abcdefgh")], TypeMorphConfig(speed=0.05), token))
        await asyncio.sleep(0.12)
        token.cancel()
        flushes = await task
        assert 0 < flushes < 8
        assert len(self.visible()) == flushes
        assert len(self.timers) == 0

    @pytest.mark.asyncio
    async def test_detached_target_halts_quietly(self):
        token = self.timers.token()
        task = asyncio.create_task(
            self.typer.type_nodes(self.root, [TextRun("abcdefgh")], TypeMorphConfig(speed=0.05), token))
        await asyncio.sleep(0.07)
        self.surface.detach(self.root)
        flushes = await task
        assert flushes < 8
        self.logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_scroll_follows_every_interval(self):
        token = self.timers.token()
        self.surface.set_extents(self.root, 100, 10)
        self.animations.scroller.begin(self.root, True, 2)
        await self.typer.type_nodes(self.root, [TextRun("abcd")], TypeMorphConfig(speed=0), token)
        self.animations.scroller.end()
        assert self.surface.get_scroll_top(self.root) == 90
