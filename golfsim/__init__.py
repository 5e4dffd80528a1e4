"""golfsim: ball-on-terrain physics for the golf game, its bots and trainers."""

__version__ = "0.1.0"
