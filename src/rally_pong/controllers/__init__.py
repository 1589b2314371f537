"""
Controllers package for Rally Pong.
"""

from __future__ import annotations

from .cpu import CpuConfig, CpuPaddleController

__all__ = [
    "CpuConfig",
    "CpuPaddleController",
]
