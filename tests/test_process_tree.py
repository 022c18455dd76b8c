import os
import subprocess
import sys
import time

import psutil
import pytest

from irishub.errors import OSQueryFailed
from irishub.process_tree import (
    ProcessTreeTerminator,
    children_first,
    enumerate_descendants,
    is_alive,
    process_create_time,
    snapshot_process_table,
)

TABLE = {1: 0, 10: 1, 11: 10, 12: 10, 13: 12, 20: 1, 30: 99}


def test_enumerate_descendants_is_transitive():
    assert enumerate_descendants(10, TABLE) == {11, 12, 13}
    assert enumerate_descendants(1, TABLE) == {10, 11, 12, 13, 20}


def test_enumerate_descendants_of_leaf_or_unknown_pid_is_empty():
    assert enumerate_descendants(13, TABLE) == set()
    assert enumerate_descendants(4242, TABLE) == set()


def test_enumerate_descendants_survives_cycles():
    assert enumerate_descendants(5, {5: 6, 6: 5, 7: 7}) == {6}
    assert enumerate_descendants(7, {7: 7}) == set()


def test_snapshot_contains_this_process():
    table = snapshot_process_table()
    assert table[os.getpid()] == os.getppid()


def test_snapshot_wraps_psutil_errors(monkeypatch):
    def boom(*args, **kwargs):
        raise psutil.AccessDenied()

    monkeypatch.setattr(psutil, "process_iter", boom)
    with pytest.raises(OSQueryFailed):
        snapshot_process_table()


def test_is_alive():
    assert is_alive(os.getpid()) is True

    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    proc.wait()
    assert is_alive(proc.pid) is False


def test_is_alive_reports_unreadable_process(monkeypatch):
    class Broken:
        def __init__(self, pid):
            raise psutil.Error("table unavailable")

    monkeypatch.setattr(psutil, "Process", Broken)
    with pytest.raises(OSQueryFailed) as info:
        is_alive(123)
    assert info.value.pid == 123


def test_terminate_root_already_gone_is_a_no_op(monkeypatch):
    def must_not_run(pid):
        raise AssertionError("no process should be touched")

    monkeypatch.setattr(psutil, "Process", must_not_run)
    result = ProcessTreeTerminator(timeout=0.1, table_provider=lambda: {}).terminate(4242)

    assert result.terminated == 0
    assert result.survivors == []
    assert not result.partial


@pytest.mark.skipif(os.name == "nt", reason="uses a POSIX shell")
def test_terminate_kills_the_whole_tree():
    root = subprocess.Popen(["/bin/sh", "-c", "sleep 60 & sleep 60 & wait"])
    try:
        deadline = time.monotonic() + 5
        descendants = set()
        while time.monotonic() < deadline:
            descendants = enumerate_descendants(root.pid, snapshot_process_table())
            if len(descendants) >= 2:
                break
            time.sleep(0.05)
        assert len(descendants) >= 2

        result = ProcessTreeTerminator(timeout=2).terminate(root.pid)

        assert not result.partial
        assert result.terminated == len(descendants) + 1
        for pid in descendants | {root.pid}:
            assert not is_alive(pid)
    finally:
        if root.poll() is None:
            root.kill()
        root.wait()


def test_children_first_lists_every_process_after_its_descendants():
    order = children_first(1, TABLE)

    assert order[-1] == 1
    assert sorted(order) == [1, 10, 11, 12, 13, 20]
    for child, parent in TABLE.items():
        if child in order and parent in order:
            assert order.index(child) < order.index(parent)


def _exited_child():
    """A child that has exited but was not waited for yet."""
    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    deadline = time.monotonic() + 10
    while time.monotonic() < deadline and is_alive(proc.pid):
        time.sleep(0.05)
    return proc


def test_terminate_of_an_exited_unreaped_child_is_zero():
    proc = _exited_child()
    try:
        assert is_alive(proc.pid) is False

        result = ProcessTreeTerminator(timeout=0.5).terminate(proc.pid)

        assert result.terminated == 0
        assert result.survivors == []
    finally:
        proc.wait()


def test_terminate_leaves_a_process_that_reused_the_pid_alone():
    stranger = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    try:
        recorded = process_create_time(stranger.pid) - 100

        assert is_alive(stranger.pid) is True
        assert is_alive(stranger.pid, recorded) is False
        result = ProcessTreeTerminator(timeout=0.5).terminate(stranger.pid, recorded)

        assert result.terminated == 0
        assert stranger.poll() is None
    finally:
        stranger.kill()
        stranger.wait()


def test_process_create_time_of_missing_process(monkeypatch):
    def gone(pid):
        raise psutil.NoSuchProcess(pid)

    monkeypatch.setattr(psutil, "Process", gone)
    assert process_create_time(4242) is None


class _FakeProcess:
    """psutil.Process stand-in; pids in STUBBORN ignore both signals."""

    STUBBORN = {102}
    instances = {}

    def __init__(self, pid):
        self.pid = pid
        self.signals = []
        _FakeProcess.instances[pid] = self

    def status(self):
        return psutil.STATUS_RUNNING

    def create_time(self):
        return 1000.0

    def is_running(self):
        return True

    def terminate(self):
        self.signals.append("terminate")

    def kill(self):
        self.signals.append("kill")


def test_terminate_reports_processes_that_resist(monkeypatch):
    _FakeProcess.instances = {}
    waits = []

    def wait_procs(procs, timeout=None):
        waits.append([p.pid for p in procs])
        alive = [p for p in procs if p.pid in _FakeProcess.STUBBORN]
        gone = [p for p in procs if p.pid not in _FakeProcess.STUBBORN]
        return gone, alive

    monkeypatch.setattr(psutil, "Process", _FakeProcess)
    monkeypatch.setattr(psutil, "wait_procs", wait_procs)
    table = {100: 1, 101: 100, 102: 100}

    result = ProcessTreeTerminator(timeout=0.1, table_provider=lambda: table).terminate(100, 1000.0)

    assert result.partial
    assert result.survivors == [102]
    assert result.terminated == 2
    assert _FakeProcess.instances[102].signals == ["terminate", "kill"]
    assert _FakeProcess.instances[101].signals == ["terminate"]
    # second wait only covers what survived the first round
    assert waits[1] == [102]
    assert waits[0][-1] == 100
