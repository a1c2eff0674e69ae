# tests/test_trigger.py

import threading

from portfolio_updater.trigger import BootTrigger, OneShotLatch

WAIT_SECONDS = 5

def make_counter():
    calls = []
    lock = threading.Lock()

    def action():
        with lock:
            calls.append(threading.current_thread().name)

    return calls, action

def test_latch_lets_first_caller_through_only():
    """Scenario: Only the first fire() succeeds"""
    latch = OneShotLatch()
    assert latch.fired is False
    assert latch.fire() is True
    assert latch.fire() is False
    assert latch.fired is True

def test_latch_under_contention():
    """Scenario: Many threads racing on one latch produce one winner"""
    latch = OneShotLatch()
    results = []
    barrier = threading.Barrier(16)

    def worker():
        barrier.wait()
        results.append(latch.fire())

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1

def test_boot_timer_runs_action_once():
    """Scenario: Boot timer expiry runs the pipeline"""
    calls, action = make_counter()
    trigger = BootTrigger(action, boot_delay=0.01, skip_delay=0.01)
    trigger.start()

    assert trigger.wait(WAIT_SECONDS) is True
    assert len(calls) == 1
    assert trigger.done is True

def test_skip_runs_before_boot_delay():
    """Scenario: Skip fires the pipeline without waiting for the boot timer"""
    calls, action = make_counter()
    trigger = BootTrigger(action, boot_delay=60, skip_delay=0.01)
    trigger.start()

    assert trigger.skip() is True
    assert trigger.wait(WAIT_SECONDS) is True
    trigger.cancel()
    assert len(calls) == 1

def test_repeated_skip_is_ignored():
    """Scenario: Only the first skip signal counts"""
    calls, action = make_counter()
    trigger = BootTrigger(action, boot_delay=60, skip_delay=0.01)
    trigger.start()

    assert trigger.skip() is True
    assert trigger.skip() is False
    trigger.wait(WAIT_SECONDS)
    trigger.cancel()
    assert len(calls) == 1

def test_timer_and_skip_racing_fire_once():
    """Scenario: Boot timer and skip both expire but the pipeline runs once"""
    calls, action = make_counter()
    trigger = BootTrigger(action, boot_delay=0.0, skip_delay=0.0)
    trigger.start()
    trigger.skip()

    assert trigger.wait(WAIT_SECONDS) is True
    # Let any late timer thread reach the latch.
    threading.Event().wait(0.1)
    assert len(calls) == 1

def test_cancel_before_expiry_prevents_run():
    """Scenario: Cancelled trigger never runs the pipeline"""
    calls, action = make_counter()
    trigger = BootTrigger(action, boot_delay=0.2, skip_delay=0.2)
    trigger.start()
    trigger.cancel()

    assert trigger.wait(0.5) is False
    assert calls == []
