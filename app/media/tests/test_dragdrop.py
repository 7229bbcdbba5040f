"""Tests for the drag-and-drop carrier."""

from media.dragdrop import DragCarrier


class TestDragCarrier:
    def test_starts_empty(self):
        carrier = DragCarrier()

        assert carrier.is_dragging is False
        assert carrier.drop("col_1") is None

    def test_drop_yields_source_and_target(self):
        carrier = DragCarrier()
        carrier.start("m1")

        assert carrier.drop("col_1") == ("m1", "col_1")

    def test_drop_on_uncategorized_target(self):
        carrier = DragCarrier()
        carrier.start("m1")

        assert carrier.drop(None) == ("m1", None)

    def test_drop_does_not_clear(self):
        carrier = DragCarrier()
        carrier.start("m1")
        carrier.drop("col_1")

        assert carrier.is_dragging

    def test_end_clears(self):
        carrier = DragCarrier()
        carrier.start("m1")
        carrier.end()

        assert carrier.source_id is None
        assert carrier.drop("col_1") is None

    def test_restart_replaces_source(self):
        carrier = DragCarrier()
        carrier.start("m1")
        carrier.start("m2")

        assert carrier.drop("col_1") == ("m2", "col_1")
