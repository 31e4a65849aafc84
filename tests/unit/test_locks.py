"""Unit tests for the per-key lock registries."""

import threading

from coopdues.services.locks import LockRegistry, due_locks, schedule_locks


def try_acquire_elsewhere(registry: LockRegistry, key, timeout: float = 0.1) -> bool:
    """Try to take ``key`` from another thread; release it again on success."""
    result = []

    def attempt():
        lock = registry.get(key)
        acquired = lock.acquire(timeout=timeout)
        if acquired:
            lock.release()
        result.append(acquired)

    thread = threading.Thread(target=attempt)
    thread.start()
    thread.join(5)
    return result[0]


class TestLockRegistry:
    def test_same_key_returns_same_lock(self) -> None:
        registry = LockRegistry()

        assert registry.get((1, 2025)) is registry.get((1, 2025))
        assert registry.get((1, 2025)) is not registry.get((2, 2025))

    def test_hold_blocks_same_key_in_other_thread(self) -> None:
        registry = LockRegistry()

        with registry.hold((1, 2025)):
            assert try_acquire_elsewhere(registry, (1, 2025)) is False
        assert try_acquire_elsewhere(registry, (1, 2025)) is True

    def test_unrelated_keys_do_not_block(self) -> None:
        registry = LockRegistry()

        with registry.hold((1, 2025), (1, 2026)):
            assert try_acquire_elsewhere(registry, (2, 2025)) is True
            assert try_acquire_elsewhere(registry, (1, 2024)) is True

    def test_hold_is_reentrant(self) -> None:
        registry = LockRegistry()

        with registry.hold(7):
            with registry.hold(7, 8):
                assert try_acquire_elsewhere(registry, 8) is False
            assert try_acquire_elsewhere(registry, 8) is True
            assert try_acquire_elsewhere(registry, 7) is False

    def test_hold_acquires_in_sorted_order(self) -> None:
        registry = LockRegistry()
        order = []
        get = registry.get

        def recording_get(key):
            order.append(key)
            return get(key)

        registry.get = recording_get
        with registry.hold(3, 1, 2, 1):
            pass

        assert order == [1, 2, 3]

    def test_overlapping_holds_do_not_deadlock(self) -> None:
        registry = LockRegistry()
        done = []

        def worker(keys):
            for _ in range(200):
                with registry.hold(*keys):
                    pass
            done.append(keys)

        threads = [
            threading.Thread(target=worker, args=((1, 2, 3),)),
            threading.Thread(target=worker, args=((3, 2, 1),)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(10)

        assert len(done) == 2

    def test_hold_without_keys(self) -> None:
        with LockRegistry().hold():
            pass


class TestModuleRegistries:
    def test_due_and_schedule_locks_are_separate(self) -> None:
        with schedule_locks.hold(5):
            assert try_acquire_elsewhere(due_locks, 5) is True

    def test_due_lock_serializes_same_due(self) -> None:
        with due_locks.hold(41):
            assert try_acquire_elsewhere(due_locks, 41) is False
            assert try_acquire_elsewhere(due_locks, 42) is True
