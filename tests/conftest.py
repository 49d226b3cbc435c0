# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
import pytest

# Ensure repo root is importable as a package root (so `import marquee...` works on CI)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup (safe if pygame isn't used in a given test)
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(scope="session", autouse=True)
def _init_pygame():
    try:
        import pygame
        pygame.init()
        # tiny hidden display so key/mouse state queries and event polling work
        pygame.display.set_mode((1, 1))
        yield
    finally:
        try:
            import pygame
            pygame.quit()
        except Exception:
            pass


@pytest.fixture
def stub_camera():
    from tests.fakes import ScreenSpaceCamera
    return ScreenSpaceCamera()


@pytest.fixture
def private_bus():
    from marquee.utils.event_bus import EventBus
    return EventBus()
