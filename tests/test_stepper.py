"""Tests for the playback state machine, cursor and timer ownership."""
import pytest

from engine import Stepper, StepperState, interval_for
from engine.stepper import clamp_speed

from conftest import make_steps


class TestSpeed:
    @pytest.mark.parametrize("level,ms", [(1, 2000.0), (2, 1000.0), (3, 2000.0 / 3), (4, 500.0), (5, 400.0)])
    def test_interval(self, level, ms):
        assert interval_for(level) == pytest.approx(ms)

    def test_clamped(self):
        assert clamp_speed(0) == 1
        assert clamp_speed(9) == 5

    def test_default(self, stepper):
        assert stepper.speed == 3


class TestStates:
    def test_starts_idle(self, stepper):
        assert stepper.state == StepperState.IDLE
        assert stepper.current_step is None
        assert not stepper.timer_active

    def test_load_autoplays(self, stepper, steps):
        stepper.load(steps)
        assert stepper.state == StepperState.PLAYING
        assert stepper.cursor == 0
        assert stepper.timer_active

    def test_load_without_autoplay(self, stepper, steps):
        stepper.load(steps, autoplay=False)
        assert stepper.state == StepperState.READY
        assert not stepper.timer_active

    def test_pause_and_resume(self, stepper, steps):
        stepper.load(steps)
        stepper.pause()
        assert stepper.state == StepperState.PAUSED
        assert not stepper.timer_active
        stepper.play()
        assert stepper.state == StepperState.PLAYING
        assert stepper.timer_active

    def test_toggle_without_sequence_is_noop(self, stepper):
        stepper.toggle_play()
        assert stepper.state == StepperState.IDLE
        assert not stepper.is_playing
        assert not stepper.timer_active

    def test_clear(self, stepper, steps):
        stepper.load(steps)
        stepper.clear()
        assert stepper.state == StepperState.IDLE
        assert stepper.total_steps == 0
        assert not stepper.timer_active

    def test_reset_keeps_sequence(self, stepper, steps):
        stepper.load(steps)
        stepper.step_forward()
        stepper.reset()
        assert stepper.cursor == 0
        assert stepper.total_steps == len(steps)
        assert stepper.state == StepperState.READY
        assert not stepper.timer_active

    def test_empty_load_is_idle(self, stepper):
        stepper.load([])
        assert stepper.state == StepperState.IDLE
        assert not stepper.timer_active


class TestNavigation:
    def test_forward_and_back(self, stepper, steps):
        stepper.load(steps, autoplay=False)
        assert stepper.step_forward()
        assert stepper.cursor == 1
        assert stepper.current_step is steps[1]
        assert stepper.step_backward()
        assert stepper.cursor == 0

    def test_boundaries_are_noops(self, stepper, steps):
        stepper.load(steps, autoplay=False)
        assert not stepper.can_step_backward
        assert not stepper.step_backward()
        assert stepper.cursor == 0

        stepper.goto(len(steps) - 1)
        assert not stepper.can_step_forward
        assert not stepper.step_forward()
        assert stepper.cursor == len(steps) - 1

    def test_goto_out_of_range(self, stepper, steps):
        stepper.load(steps, autoplay=False)
        assert not stepper.goto(len(steps))
        assert not stepper.goto(-1)
        assert stepper.cursor == 0

    def test_manual_step_while_playing_keeps_playing(self, stepper, steps):
        stepper.load(steps)
        stepper.step_forward()
        assert stepper.is_playing
        assert stepper.cursor == 1

    def test_single_step_sequence(self, stepper):
        stepper.load(make_steps(1))
        assert not stepper.can_step_forward
        assert not stepper.can_step_backward


class TestPlayback:
    def test_ticks_advance_cursor(self, stepper, steps, clock):
        stepper.load(steps)
        clock.advance(stepper.interval_ms / 1000.0)
        assert stepper.tick() == 1
        assert stepper.cursor == 1

    def test_stops_at_end(self, stepper, steps, clock):
        stepper.load(steps)
        clock.advance(100)
        stepper.tick()
        assert stepper.cursor == len(steps) - 1
        assert not stepper.is_playing
        assert stepper.state == StepperState.READY
        assert not stepper.timer_active

    def test_play_at_end_stops_on_next_tick(self, stepper, steps, clock):
        stepper.load(steps, autoplay=False)
        stepper.goto(len(steps) - 1)
        stepper.play()
        clock.advance(10)
        stepper.tick()
        assert stepper.cursor == len(steps) - 1
        assert not stepper.is_playing

    def test_pause_prevents_ticks(self, stepper, steps, clock):
        stepper.load(steps)
        stepper.pause()
        clock.advance(100)
        assert stepper.tick() == 0
        assert stepper.cursor == 0

    def test_speed_change_while_playing_rearms(self, stepper, steps, clock):
        stepper.load(steps)
        clock.advance(0.3)
        stepper.set_speed(5)
        assert stepper.interval_ms == 400.0
        # the old 666ms schedule is gone; the new one counts from now
        clock.advance(0.399)
        assert stepper.tick() == 0
        clock.advance(0.002)
        assert stepper.tick() == 1
        assert stepper.cursor == 1

    def test_speed_change_while_paused_keeps_timer_off(self, stepper, steps):
        stepper.load(steps)
        stepper.pause()
        stepper.set_speed(1)
        assert not stepper.timer_active
        assert stepper.speed == 1

    def test_reload_while_playing_restarts(self, stepper, steps, clock):
        stepper.load(steps)
        clock.advance(stepper.interval_ms / 1000.0)
        stepper.tick()
        fresh = make_steps(3)
        stepper.load(fresh)
        assert stepper.cursor == 0
        assert stepper.current_step is fresh[0]
        assert stepper.is_playing


class TestChangeCallback:
    def test_notifies_on_every_cursor_move(self, timer, steps):
        seen = []
        stepper = Stepper(timer=timer, on_change=seen.append)
        stepper.load(steps, autoplay=False)
        stepper.step_forward()
        stepper.step_backward()
        stepper.clear()
        assert seen == [steps[0], steps[1], steps[0], None]

    def test_noop_moves_do_not_notify(self, timer, steps):
        seen = []
        stepper = Stepper(timer=timer, on_change=seen.append)
        stepper.load(steps, autoplay=False)
        stepper.step_backward()
        stepper.goto(0)
        stepper.reset()
        assert seen == [steps[0]]


class TestSnapshot:
    def test_keys(self, stepper, steps):
        stepper.load(steps, autoplay=False)
        snap = stepper.snapshot()
        assert snap == {
            "state": "ready",
            "isPlaying": False,
            "speed": 3,
            "intervalMs": pytest.approx(2000.0 / 3),
            "cursor": 0,
            "totalSteps": len(steps),
            "canStepForward": True,
            "canStepBackward": False,
        }
