# tests/test_selector.py
"""
End-to-end marquee selection driven by pygame events.
"""
from __future__ import annotations

import unittest

import pygame

from marquee.core.camera import Camera3D
from marquee.core.errors import ConfigurationError
from marquee.core.projection import OverlaySurface, RenderMode
from marquee.core.selection_engine import SelectionMode
from marquee.core.selector import MarqueeSelector
from marquee.entities.scene_object import SceneObject
from marquee.utils.event_bus import GESTURE_CANCELLED, SELECTION_CHANGED, EventBus
from marquee.utils.settings import HIGHLIGHT_COLOR
from marquee.world.visibility import VisibilityTracker
from tests.fakes import FakeObject, ListProvider, ScreenSpaceCamera

VIEW = pygame.Rect(0, 0, 800, 600)
RED = (200, 0, 0, 255)


def _drag(selector, start, end, *, mods=0):
    selector.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=start))
    selector.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=end, rel=(0, 0), buttons=(1, 0, 0)))
    selector.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=end), mods=mods)
    return selector.last_delta


class TestMarqueeSelector(unittest.TestCase):
    def setUp(self) -> None:
        self.bus = EventBus()
        self.events = []
        self.bus.on(SELECTION_CHANGED, lambda p: self.events.append((SELECTION_CHANGED, p)))
        self.bus.on(GESTURE_CANCELLED, lambda p: self.events.append((GESTURE_CANCELLED, p)))

        self.a = FakeObject((150, 150, 5), RED, name="A")
        self.b = FakeObject((150, 150, -1), RED, name="B")
        self.c = FakeObject((500, 500, 2), RED, name="C")
        self.provider = ListProvider([self.a, self.b, self.c])
        self.selector = MarqueeSelector(
            OverlaySurface(VIEW), self.provider, camera=ScreenSpaceCamera(), bus=self.bus
        )

    def test_drag_selects_objects_in_front_inside_rectangle(self):
        delta = _drag(self.selector, (300, 300), (100, 100))
        self.assertEqual(delta.entered, frozenset({self.a.handle}))
        self.assertEqual(self.selector.selected_objects(), [self.a])
        self.assertEqual(self.a.color, HIGHLIGHT_COLOR)
        self.assertEqual(self.b.set_calls, [])
        self.assertFalse(self.selector.dragging)
        self.assertFalse(self.selector.overlay.visible)
        self.assertEqual([name for name, _ in self.events], [SELECTION_CHANGED])

    def test_next_drag_replaces_selection(self):
        _drag(self.selector, (100, 100), (300, 300))
        delta = _drag(self.selector, (450, 450), (550, 550))
        self.assertEqual(delta.entered, frozenset({self.c.handle}))
        self.assertEqual(delta.exited, frozenset({self.a.handle}))
        self.assertEqual(self.a.color, RED)

    def test_modifiers_pick_mode(self):
        _drag(self.selector, (100, 100), (300, 300))
        delta = _drag(self.selector, (450, 450), (550, 550), mods=pygame.KMOD_SHIFT)
        self.assertIs(self.selector.mode, SelectionMode.ADD)
        self.assertEqual(delta.selected, frozenset({self.a.handle, self.c.handle}))

        delta = _drag(self.selector, (100, 100), (300, 300), mods=pygame.KMOD_CTRL)
        self.assertIs(self.selector.mode, SelectionMode.TOGGLE)
        self.assertEqual(delta.selected, frozenset({self.c.handle}))
        self.assertEqual(self.a.color, RED)

    def test_box_visible_only_while_dragging(self):
        sel = self.selector
        self.assertFalse(sel.overlay.visible)
        sel.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(300, 100)))
        sel.update((100, 300))
        self.assertTrue(sel.overlay.visible)
        self.assertEqual(sel.overlay.screen_rect(), pygame.Rect(100, 100, 200, 200))

        screen = pygame.Surface((800, 600))
        sel.draw(screen)
        self.assertEqual(screen.get_at((100, 100))[:3], tuple(sel.overlay.color[:3]))

    def test_focus_loss_cancels_without_selecting(self):
        sel = self.selector
        sel.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 100)))
        sel.update((300, 300))
        sel.handle_event(pygame.event.Event(pygame.WINDOWFOCUSLOST))
        self.assertFalse(sel.dragging)
        self.assertFalse(sel.overlay.visible)

        # the release that follows has nothing to finish
        sel.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(300, 300)), mods=0)
        self.assertEqual(len(self.selector.engine), 0)
        self.assertEqual([name for name, _ in self.events], [GESTURE_CANCELLED])

    def test_cancel_command(self):
        self.assertFalse(self.selector.cancel_gesture())
        self.selector.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(1, 1)))
        self.assertTrue(self.selector.cancel_gesture())
        self.assertEqual([name for name, _ in self.events], [GESTURE_CANCELLED])

    def test_pointer_indicator_tracks_pointer(self):
        self.selector.update((250, 125))
        self.assertEqual(self.selector.pointer_indicator.screen_pos(), pygame.Vector2(250, 125))

    def test_clear_and_select_all(self):
        delta = self.selector.select_all_visible()
        self.assertEqual(delta.selected, frozenset({self.a.handle, self.c.handle}))
        delta = self.selector.clear_selection()
        self.assertEqual(delta.exited, frozenset({self.a.handle, self.c.handle}))
        self.assertEqual(self.a.color, RED)
        self.assertEqual(self.c.color, RED)

    def test_vanished_object_exits_on_next_release(self):
        _drag(self.selector, (100, 100), (300, 300))
        self.provider.objects.remove(self.a)
        delta = _drag(self.selector, (100, 100), (300, 300))
        self.assertEqual(delta.exited, frozenset({self.a.handle}))
        self.assertEqual(self.a.color, RED)


class TestSelectorWithScene(unittest.TestCase):
    def test_camera_space_surface_and_real_scene(self):
        cam = Camera3D(800, 600, position=(0, 0, -10), target=(0, 0, 0))
        surface = OverlaySurface(VIEW, RenderMode.CAMERA_SPACE, camera=cam, plane_distance=10.0)
        centre = SceneObject((0, 0, 0), color=(10, 10, 10))
        corner = SceneObject((3, 3, 0), color=(10, 10, 10))
        tracker = VisibilityTracker()
        tracker.register(centre)
        tracker.register(corner)
        tracker.refresh_from_camera(cam)

        sel = MarqueeSelector(surface, tracker, bus=EventBus(), show_pointer=False)
        self.assertIs(sel.camera, cam)
        self.assertIsNone(sel.pointer_indicator)

        delta = _drag(sel, (380, 280), (420, 320))
        self.assertEqual(delta.selected, frozenset({centre.handle}))
        self.assertEqual(centre.color, pygame.Color(*HIGHLIGHT_COLOR))
        self.assertEqual(corner.color, pygame.Color(10, 10, 10))


class TestSelectorConfiguration(unittest.TestCase):
    def test_missing_collaborators_fail_fast(self):
        cam = ScreenSpaceCamera()
        with self.assertRaises(ConfigurationError):
            MarqueeSelector(None, ListProvider(), camera=cam)
        with self.assertRaises(ConfigurationError):
            MarqueeSelector(OverlaySurface(VIEW), None, camera=cam)
        with self.assertRaises(ConfigurationError):
            MarqueeSelector(OverlaySurface(VIEW), ListProvider())
        with self.assertRaises(ConfigurationError):
            MarqueeSelector(OverlaySurface(VIEW, RenderMode.CAMERA_SPACE), ListProvider(), camera=cam)


if __name__ == "__main__":
    unittest.main(verbosity=2)
