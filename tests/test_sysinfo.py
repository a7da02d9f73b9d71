import os
from unittest import mock

import pytest

from hvbase.sysinfo import MemInfo, get_meminfo, get_ncpu

_NAMES = {"SC_PHYS_PAGES": 1, "SC_AVPHYS_PAGES": 2, "SC_PAGE_SIZE": 3}


def _fake_sysconf(values):
    return lambda name: values[name]


def test_get_ncpu_positive():
    assert get_ncpu() >= 1


def test_get_meminfo_from_pages():
    values = {"SC_PHYS_PAGES": 1000, "SC_AVPHYS_PAGES": 250, "SC_PAGE_SIZE": 4096}
    with mock.patch.object(os, "sysconf_names", _NAMES, create=True), \
            mock.patch.object(os, "sysconf", _fake_sysconf(values), create=True):
        info = get_meminfo()
    assert info == MemInfo(total=4000, free=1000)


def test_get_meminfo_free_not_above_total():
    values = {"SC_PHYS_PAGES": 512, "SC_AVPHYS_PAGES": 100, "SC_PAGE_SIZE": 8192}
    with mock.patch.object(os, "sysconf_names", _NAMES, create=True), \
            mock.patch.object(os, "sysconf", _fake_sysconf(values), create=True):
        info = get_meminfo()
    assert 0 <= info.free <= info.total


def test_get_meminfo_unavailable():
    with mock.patch.object(os, "sysconf_names", {}, create=True):
        with pytest.raises(OSError):
            get_meminfo()