"""Host capability probing — decides between serial and parallel capture."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Protocol

from shotdiff.models.results import HostCapability

logger = logging.getLogger(__name__)

Mode = Literal["serial", "parallel"]

MIN_CPU_CORES = 4
MIN_CPU_SPEED_MHZ = 2500  # exclusive
MIN_FREE_RAM_MB = 8096

_CPUINFO = Path("/proc/cpuinfo")


class CapabilityProbe(Protocol):
    def probe(self) -> HostCapability: ...


class ModeStrategy(Protocol):
    def choose(self) -> Mode: ...


def _cpu_speed_mhz(cpuinfo: Path = _CPUINFO) -> float:
    """Clock speed of the first CPU listed in /proc/cpuinfo, 0 when unknown."""
    try:
        for line in cpuinfo.read_text().splitlines():
            if line.lower().startswith("cpu mhz"):
                return float(line.split(":", 1)[1])
    except (OSError, ValueError, IndexError) as e:
        logger.debug("Could not read CPU speed: %s", e)
    return 0.0


def _free_ram_mb() -> int:
    try:
        free = os.sysconf("SC_AVPHYS_PAGES") * os.sysconf("SC_PAGE_SIZE")
    except (AttributeError, ValueError, OSError) as e:
        logger.debug("Could not read free memory: %s", e)
        return 0
    return round(free / 1024 ** 2)


class HostCapabilityProbe:
    """Reads core count, clock speed and free memory of the current machine."""

    def probe(self) -> HostCapability:
        return HostCapability(
            cpu_cores=os.cpu_count() or 0,
            cpu_speed_mhz=_cpu_speed_mhz(),
            free_ram_mb=_free_ram_mb(),
        )


def is_capable(capability: HostCapability) -> bool:
    return (
        capability.cpu_cores >= MIN_CPU_CORES
        and capability.cpu_speed_mhz > MIN_CPU_SPEED_MHZ
        and capability.free_ram_mb >= MIN_FREE_RAM_MB
    )


class CapabilityStrategy:
    """Runs in parallel only on machines that pass every threshold."""

    def __init__(self, probe: CapabilityProbe | None = None):
        self.probe = probe or HostCapabilityProbe()

    def choose(self) -> Mode:
        capability = self.probe.probe()
        logger.debug(
            "PC specs: %d CPU cores / %.0f MHz / %d MB RAM free",
            capability.cpu_cores, capability.cpu_speed_mhz, capability.free_ram_mb,
        )
        return "parallel" if is_capable(capability) else "serial"
