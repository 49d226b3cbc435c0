# tests/test_gesture.py
from __future__ import annotations

import unittest

import pygame

from marquee.core.camera import Camera3D
from marquee.core.errors import ConfigurationError
from marquee.core.gesture import GestureState, GestureTracker, local_bounds
from marquee.core.projection import OverlaySurface, RenderMode
from marquee.ui.selection_box import SelectionBoxOverlay
from tests.fakes import RecordingIndicator, RecordingOverlay
from tests.util_asserts import assert_vec2_almost_equal

VIEW = pygame.Rect(0, 0, 800, 600)


def _down(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)


def _up(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, button=button, pos=pos)


def _move(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


class TestLocalBounds(unittest.TestCase):
    def test_y_up_top_is_larger_y(self):
        b = local_bounds((300, -100), (100, -300), y_up=True)
        self.assertEqual((b.left, b.right, b.top, b.bottom), (100, 300, -100, -300))
        self.assertEqual(b.size, pygame.Vector2(200, 200))

    def test_y_down_top_is_smaller_y(self):
        b = local_bounds((300, 100), (100, 300), y_up=False)
        self.assertEqual(b.anchor, pygame.Vector2(100, 100))
        self.assertEqual(b.size, pygame.Vector2(200, 200))


class TestGestureTracker(unittest.TestCase):
    def setUp(self) -> None:
        self.overlay = RecordingOverlay()
        self.indicator = RecordingIndicator()
        self.released = []
        # local space == screen space, so expectations read directly
        self.surface = OverlaySurface(VIEW, pivot=(0, 0), y_up=False)
        self.tracker = GestureTracker(
            self.surface,
            overlay=self.overlay,
            pointer_indicator=self.indicator,
            on_release=lambda lo, hi: self.released.append((tuple(lo), tuple(hi))) or "delta",
        )

    def test_overlay_hidden_initially(self):
        self.assertIs(self.overlay.visible, False)
        self.assertIs(self.tracker.state, GestureState.IDLE)

    def test_press_shows_zero_size_box_at_press_point(self):
        self.tracker.pointer_down((120, 80))
        self.assertTrue(self.tracker.dragging)
        self.assertTrue(self.overlay.visible)
        assert_vec2_almost_equal(self, self.overlay.anchor, (120, 80))
        self.assertEqual(self.overlay.size, pygame.Vector2(0, 0))

    def test_dragging_up_and_left_keeps_anchor_top_left(self):
        self.tracker.pointer_down((300, 100))
        self.tracker.pointer_move((100, 300))
        assert_vec2_almost_equal(self, self.overlay.anchor, (100, 100))
        assert_vec2_almost_equal(self, self.overlay.size, (200, 200))

        self.tracker.pointer_move((350, 50))
        assert_vec2_almost_equal(self, self.overlay.anchor, (300, 50))
        assert_vec2_almost_equal(self, self.overlay.size, (50, 50))

    def test_y_up_surface_anchor_is_visual_top_left(self):
        surface = OverlaySurface(VIEW, pivot=(0, 0), y_up=True)
        overlay = RecordingOverlay()
        tracker = GestureTracker(surface, overlay=overlay)
        tracker.pointer_down((300, 100))
        tracker.pointer_move((100, 300))
        # local y = -screen y: the top edge is the larger local y
        assert_vec2_almost_equal(self, overlay.anchor, (100, -100))
        assert_vec2_almost_equal(self, overlay.size, (200, 200))

    def test_release_hands_normalized_rectangle_to_callback(self):
        self.tracker.pointer_down((300, 100))
        self.tracker.pointer_move((200, 200))
        result = self.tracker.pointer_up((100, 300))
        self.assertEqual(result, "delta")
        self.assertEqual(self.released, [((100, 100), (300, 300))])
        self.assertFalse(self.tracker.dragging)
        self.assertIs(self.overlay.visible, False)
        self.assertIsNone(self.tracker.screen_rect())

    def test_click_without_movement_releases_degenerate_rectangle(self):
        self.tracker.pointer_down((150, 150))
        self.tracker.pointer_up((150, 150))
        self.assertEqual(self.released, [((150, 150), (150, 150))])

    def test_release_while_idle_does_nothing(self):
        self.assertIsNone(self.tracker.pointer_up((10, 10)))
        self.assertEqual(self.released, [])

    def test_cancel_hides_box_without_selecting(self):
        self.tracker.pointer_down((10, 10))
        self.assertTrue(self.tracker.cancel_gesture())
        self.assertFalse(self.tracker.dragging)
        self.assertIs(self.overlay.visible, False)
        self.assertIsNone(self.tracker.pointer_up((50, 50)))
        self.assertEqual(self.released, [])
        self.assertFalse(self.tracker.cancel_gesture())

    def test_second_press_restarts_gesture(self):
        self.tracker.pointer_down((10, 10))
        self.tracker.pointer_down((400, 400))
        self.tracker.pointer_up((450, 420))
        self.assertEqual(self.released, [((400, 400), (450, 420))])

    def test_pointer_indicator_follows_pointer_when_idle(self):
        self.tracker.update((42, 24))
        self.tracker.update((43, 25))
        self.assertEqual(self.indicator.anchors, [(42, 24), (43, 25)])
        self.assertFalse(self.tracker.dragging)
        self.assertIsNone(self.overlay.size)

    def test_update_resizes_box_while_dragging(self):
        self.tracker.pointer_down((0, 0))
        self.tracker.update((30, 40))
        assert_vec2_almost_equal(self, self.overlay.size, (30, 40))
        self.assertEqual(self.indicator.anchors[-1], (30, 40))

    def test_event_sequence(self):
        t = self.tracker
        self.assertFalse(t.handle_event(_move((5, 5))))
        self.assertFalse(t.handle_event(_down((5, 5), button=3)))
        self.assertTrue(t.handle_event(_down((5, 5))))
        self.assertTrue(t.handle_event(_move((25, 45))))
        self.assertFalse(t.handle_event(_up((25, 45), button=3)))
        self.assertTrue(t.handle_event(_up((25, 45))))
        self.assertEqual(self.released, [((5, 5), (25, 45))])
        self.assertFalse(t.handle_event(_up((25, 45))))

    def test_focus_loss_and_escape_cancel(self):
        t = self.tracker
        t.handle_event(_down((5, 5)))
        self.assertTrue(t.handle_event(pygame.event.Event(pygame.WINDOWFOCUSLOST)))
        self.assertFalse(t.dragging)

        t.handle_event(_down((5, 5)))
        self.assertTrue(t.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0)))
        self.assertFalse(t.dragging)
        self.assertFalse(t.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0)))
        self.assertEqual(self.released, [])


class TestGestureConfiguration(unittest.TestCase):
    def test_missing_surface(self):
        with self.assertRaises(ConfigurationError):
            GestureTracker(None)

    def test_camera_space_surface_without_camera(self):
        with self.assertRaises(ConfigurationError):
            GestureTracker(OverlaySurface(VIEW, RenderMode.CAMERA_SPACE))

    def test_overlay_must_use_top_left_pivot(self):
        class CentredOverlay(RecordingOverlay):
            pivot = "centre"

        with self.assertRaises(ConfigurationError):
            GestureTracker(OverlaySurface(VIEW), overlay=CentredOverlay())

    def test_camera_space_drag_matches_screen_rectangle(self):
        cam = Camera3D(800, 600, position=(0, 0, -10), target=(0, 0, 0))
        surface = OverlaySurface(VIEW, RenderMode.CAMERA_SPACE, camera=cam, plane_distance=10.0)
        box = SelectionBoxOverlay(surface)
        tracker = GestureTracker(surface, overlay=box)
        tracker.pointer_down((300, 100))
        tracker.pointer_move((100, 300))
        self.assertEqual(box.screen_rect(), pygame.Rect(100, 100, 200, 200))


if __name__ == "__main__":
    unittest.main(verbosity=2)
