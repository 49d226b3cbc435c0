# marquee/core/safe_main.py
from __future__ import annotations

import os
import time
import traceback
from importlib import import_module
from pathlib import Path
from typing import Optional, Tuple

from marquee.utils.logging_setup import configure_logging, get_logger

log = get_logger("safe_main")


def configure_environment(headless: Optional[bool] = None) -> None:
    """Robust SDL/Pygame defaults for Linux/CI/headless."""
    ci = os.getenv("CI", "").lower() == "true"
    no_display = not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY")) and os.name != "nt"
    if headless is None:
        headless = ci or no_display
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    os.environ.setdefault("SDL_HINT_RENDER_DRIVER", "software")
    if headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


def init_pygame_display(size: Tuple[int, int] = (1280, 720), *, caption: str = "Marquee Select"):
    """Initialize pygame and return a display surface (or None if headless)."""
    import pygame
    pygame.init()
    pygame.font.init()
    try:
        surf = pygame.display.set_mode(size)
        pygame.display.set_caption(caption)
        return surf
    except Exception:
        return None  # headless/CI


def write_crash_report(text: str, *, crash_dir: str = "logs") -> Path:
    d = Path(crash_dir)
    d.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    path = d / f"crash_{stamp}.txt"
    path.write_text("Unexpected crash.\n\n" + text, encoding="utf-8")
    return path


def run_app(entry_ctor: str = "marquee.core.app:App", *, max_frames: Optional[int] = None) -> int:
    """
    Safe entrypoint runner:
      - Configures env for Linux/headless.
      - Initializes logging.
      - Catches exceptions and writes a crash log.
      - Instantiates and runs the app (constructor path 'module:Class').
    """
    configure_environment()
    configure_logging()

    try:
        mod_name, cls_name = entry_ctor.split(":")
        AppClass = getattr(import_module(mod_name), cls_name)
    except Exception as e:
        log.exception("Failed to import app entry %s: %s", entry_ctor, e)
        return 2

    try:
        app = AppClass()
        return int(app.run(max_frames=max_frames) or 0)
    except SystemExit as e:
        return int(e.code or 0)
    except Exception as e:
        log.exception("Unhandled exception in app loop: %s", e)
        path = write_crash_report(traceback.format_exc())
        log.error("Crash report written to %s", path)
        return 1
    finally:
        try:
            import pygame
            pygame.quit()
        except Exception:
            pass


if __name__ == "__main__":
    raise SystemExit(run_app())
