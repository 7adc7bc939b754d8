"""
Convenience entry point for running weekplanner directly.

Usage: python -m weekplanner [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
