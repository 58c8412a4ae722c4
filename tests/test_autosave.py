from balloonquote.autosave import Debouncer


def test_trigger_reschedules(scheduler):
    calls = []
    debouncer = Debouncer(scheduler, 1.0, lambda: calls.append(1))

    debouncer.trigger()
    debouncer.trigger()
    debouncer.trigger()

    assert len(scheduler.timers) == 3
    assert len(scheduler.live) == 1
    assert scheduler.live[0].delay == 1.0
    assert calls == []

    scheduler.fire_pending()
    assert calls == [1]
    assert not debouncer.pending


def test_cancel_drops_pending_write(scheduler):
    calls = []
    debouncer = Debouncer(scheduler, 1.0, lambda: calls.append(1))
    debouncer.trigger()
    debouncer.cancel()
    scheduler.fire_pending()
    assert calls == []


def test_flush_runs_pending_write_once(scheduler):
    calls = []
    debouncer = Debouncer(scheduler, 1.0, lambda: calls.append(1))
    debouncer.flush()
    assert calls == []

    debouncer.trigger()
    debouncer.flush()
    scheduler.fire_pending()
    assert calls == [1]
