from kiki_chaos.chaos_engines.uncordon_scheduler import UncordonScheduler


class Recorder:
    def __init__(self, fail=False):
        self.nodes = []
        self.fail = fail

    def __call__(self, node):
        self.nodes.append(node)
        if self.fail:
            raise RuntimeError("uncordon refused")


def test_uncordon_only_when_timer_fires(fake_timer):
    uncordon = Recorder()
    scheduler = UncordonScheduler(uncordon, delay_seconds=30, timer_factory=fake_timer)

    handle = scheduler.schedule("node-1")

    assert handle.node == "node-1"
    assert uncordon.nodes == []
    assert scheduler.pending() == ["node-1"]
    [timer] = fake_timer.created
    assert timer.daemon is True

    timer.fire()
    timer.fire()

    assert uncordon.nodes == ["node-1"]
    assert scheduler.pending() == []


def test_reschedule_replaces_pending(fake_timer):
    uncordon = Recorder()
    scheduler = UncordonScheduler(uncordon, timer_factory=fake_timer)

    scheduler.schedule("node-1")
    scheduler.schedule("node-1")
    first, second = fake_timer.created

    assert first.cancelled is True
    first.function(*first.args)
    assert uncordon.nodes == []

    second.fire()
    assert uncordon.nodes == ["node-1"]


def test_cancel(fake_timer):
    uncordon = Recorder()
    scheduler = UncordonScheduler(uncordon, timer_factory=fake_timer)
    scheduler.schedule("node-1")

    assert scheduler.cancel("node-1") is True
    assert scheduler.cancel("node-1") is False
    fake_timer.created[0].fire()

    assert uncordon.nodes == []


def test_flush_uncordons_everything_once(fake_timer):
    uncordon = Recorder()
    scheduler = UncordonScheduler(uncordon, timer_factory=fake_timer)
    scheduler.schedule("node-1")
    scheduler.schedule("node-2")

    assert scheduler.flush() == ["node-1", "node-2"]
    for timer in fake_timer.created:
        timer.function(*timer.args)

    assert uncordon.nodes == ["node-1", "node-2"]
    assert scheduler.pending() == []


def test_uncordon_failure_is_logged_not_raised(fake_timer):
    uncordon = Recorder(fail=True)
    scheduler = UncordonScheduler(uncordon, timer_factory=fake_timer)
    scheduler.schedule("node-1")

    fake_timer.created[0].fire()

    assert uncordon.nodes == ["node-1"]
    assert scheduler.pending() == []
