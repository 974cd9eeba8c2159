"""
toolchain.py

Responsibility: Decide how a bundle gets compiled on this machine.

Only environment lookups happen here (PATH probing, platform check); nothing is
written to disk and no tool is executed.
"""

from __future__ import annotations

import enum
import logging
import shutil
import sys
from typing import Callable

from saverkit.errors import NoToolchainAvailable

logger = logging.getLogger(__name__)

Which = Callable[[str], str | None]

INSTALL_HINT = "Neither swiftc nor xcodebuild found. Install Xcode command line tools: xcode-select --install"


class BuildStrategy(enum.Enum):
    """The two mutually exclusive ways a bundle binary is produced."""

    SWIFTC = "swiftc"
    XCODEBUILD = "xcodebuild"

    @property
    def executable(self) -> str:
        return self.value


# Probe order matters: the direct compiler wins when both are installed.
PROBE_ORDER = (BuildStrategy.SWIFTC, BuildStrategy.XCODEBUILD)


def select_strategy(which: Which = shutil.which) -> BuildStrategy:
    for strategy in PROBE_ORDER:
        if which(strategy.executable):
            return strategy
    raise NoToolchainAvailable(INSTALL_HINT)


def warn_if_not_macos(platform: str | None = None) -> bool:
    """
    Log a warning when not running on macOS. Returns True when a warning was emitted.
    """
    current = platform if platform is not None else sys.platform
    if current != "darwin":
        logger.warning("Building a macOS .saver requires macOS (running on %s).", current)
        return True
    return False
