"""
Allow ``python -m rally_pong``.
"""

from __future__ import annotations

import sys

from rally_pong.app import main

sys.exit(main())
