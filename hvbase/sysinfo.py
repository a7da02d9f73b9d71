"""Processor count and physical memory figures of the host."""

import errno
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class MemInfo:
    """Physical memory in kilobytes."""

    total: int
    free: int


def get_ncpu():
    """Number of processors configured on the host."""
    return os.cpu_count() or 1


def get_meminfo():
    """Total and free physical memory in kilobytes.

    Raises ``OSError`` where the system does not report these figures.
    """
    names = getattr(os, "sysconf_names", {})
    needed = ("SC_PHYS_PAGES", "SC_AVPHYS_PAGES", "SC_PAGE_SIZE")
    if not all(name in names for name in needed):
        raise OSError(errno.ENOSYS, "memory information is not available on this platform")
    page_size = os.sysconf("SC_PAGE_SIZE")
    total = os.sysconf("SC_PHYS_PAGES") * page_size >> 10
    free = os.sysconf("SC_AVPHYS_PAGES") * page_size >> 10
    return MemInfo(total=total, free=free)