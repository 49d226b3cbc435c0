# main.py
"""
Main entry point for the Marquee Select demo.
"""
from marquee.core.safe_main import run_app

if __name__ == '__main__':
    raise SystemExit(run_app())
