import threading

from irishub.models import RunningProcess
from irishub.registry import ProcessRegistry


def test_insert_get_remove():
    reg = ProcessRegistry()
    entry = RunningProcess("a", 100)
    reg.insert("a", entry)

    assert "a" in reg
    assert reg.get("a") is entry
    assert len(reg) == 1
    assert reg.remove("a") is entry
    assert reg.remove("a") is None
    assert "a" not in reg


def test_snapshot_keeps_insertion_order_and_reinsert_moves_to_end():
    reg = ProcessRegistry()
    for app_id, pid in (("a", 1), ("b", 2), ("c", 3)):
        reg.insert(app_id, RunningProcess(app_id, pid))
    reg.insert("a", RunningProcess("a", 4))

    assert [(k, v.pid) for k, v in reg.snapshot()] == [("b", 2), ("c", 3), ("a", 4)]


def test_remove_if_only_removes_the_same_entry():
    reg = ProcessRegistry()
    old = RunningProcess("a", 1)
    new = RunningProcess("a", 2)
    reg.insert("a", old)
    reg.insert("a", new)

    assert reg.remove_if("a", old) is False
    assert reg.get("a") is new
    assert reg.remove_if("a", new) is True
    assert "a" not in reg


def test_snapshot_is_a_copy():
    reg = ProcessRegistry()
    reg.insert("a", RunningProcess("a", 1))
    snap = reg.snapshot()
    reg.remove("a")
    assert len(snap) == 1


def test_concurrent_inserts_keep_one_entry_per_app():
    reg = ProcessRegistry()

    def worker(n):
        for i in range(200):
            reg.insert(f"app{i % 10}", RunningProcess(f"app{i % 10}", n * 1000 + i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(reg) == 10
    assert sorted(k for k, _ in reg.snapshot()) == sorted(f"app{i}" for i in range(10))


def test_replace_if_only_swaps_the_expected_entry():
    reg = ProcessRegistry()
    loading = RunningProcess("a", 1)
    settled = RunningProcess("a", 2)
    other = RunningProcess("a", 3)
    reg.insert("a", loading)

    assert reg.replace_if("a", other, settled) is False
    assert reg.get("a") is loading
    assert reg.replace_if("a", loading, settled) is True
    assert reg.get("a") is settled
    assert reg.replace_if("b", loading, settled) is False
    assert "b" not in reg
