import pytest

from falling_blocks.visualization.timers import KeyRepeater, RepeatTimer


class _FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


def test_repeat_timer_fires_once_per_interval():
    clock = _FakeClock()
    calls = []
    timer = RepeatTimer(100, lambda: calls.append(clock.value), clock=clock)
    timer.start()

    clock.advance(99)
    assert timer.poll() == 0
    clock.advance(1)
    assert timer.poll() == 1
    clock.advance(100)
    assert timer.poll() == 1
    assert calls == [100, 200]


def test_stall_fires_once_and_reschedules_from_now():
    clock = _FakeClock()
    calls = []
    timer = RepeatTimer(50, lambda: calls.append(clock.value), clock=clock)
    timer.start()

    clock.advance(3000)
    assert timer.poll() == 1
    assert timer.poll() == 0
    clock.advance(49)
    assert timer.poll() == 0
    clock.advance(1)
    assert timer.poll() == 1
    assert calls == [3000, 3050]


def test_cancelled_timer_never_fires():
    clock = _FakeClock()
    calls = []
    timer = RepeatTimer(50, lambda: calls.append(1), clock=clock)
    timer.start()
    timer.cancel()
    clock.advance(500)
    assert timer.poll() == 0
    assert not calls
    assert not timer.active


def test_rearm_restarts_with_new_interval():
    clock = _FakeClock()
    calls = []
    timer = RepeatTimer(1000, lambda: calls.append(1), clock=clock)
    timer.start()
    clock.advance(900)
    timer.rearm(50)
    clock.advance(49)
    assert timer.poll() == 0
    clock.advance(1)
    assert timer.poll() == 1
    assert timer.interval_ms == 50


def test_rearm_of_idle_timer_does_not_start_it():
    clock = _FakeClock()
    timer = RepeatTimer(100, lambda: None, clock=clock)
    timer.rearm(20)
    clock.advance(100)
    assert timer.poll() == 0


def test_callback_can_cancel_its_timer():
    clock = _FakeClock()
    calls = []

    def once():
        calls.append(1)
        timer.cancel()

    timer = RepeatTimer(10, once, clock=clock)
    timer.start()
    clock.advance(100)
    assert timer.poll() == 1
    clock.advance(100)
    assert timer.poll() == 0
    assert calls == [1]


def test_timer_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        RepeatTimer(0, lambda: None)


def test_key_repeater_fires_on_press_and_while_held():
    clock = _FakeClock()
    moves = []
    repeater = KeyRepeater(100, clock=clock)

    repeater.press("left", lambda: moves.append(-1))
    assert moves == [-1]
    clock.advance(100)
    repeater.poll()
    clock.advance(100)
    repeater.poll()
    assert moves == [-1, -1, -1]

    repeater.release("left")
    clock.advance(1000)
    assert repeater.poll() == 0
    assert moves == [-1, -1, -1]
    assert repeater.held_key is None


def test_new_key_takes_over_and_stale_release_is_ignored():
    clock = _FakeClock()
    moves = []
    repeater = KeyRepeater(100, clock=clock)

    repeater.press("left", lambda: moves.append(-1))
    repeater.press("right", lambda: moves.append(1))
    repeater.release("left")
    clock.advance(100)
    repeater.poll()
    assert moves == [-1, 1, 1]
    assert repeater.held_key == "right"

    repeater.stop()
    clock.advance(300)
    repeater.poll()
    assert moves == [-1, 1, 1]
