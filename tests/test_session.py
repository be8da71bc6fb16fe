"""
Tests for the Session coordinator: run lifecycle, transport controls,
speed / algorithm changes and fault handling.

Threaded tests use millisecond pacing so a full run takes well under a
second; the synchronous run() is used wherever timing is irrelevant.
"""

import threading
import time
import unittest
from unittest import mock

from algorithms import Algorithm, REGISTRY
from engine import Session, RunState, SPEED_PRESETS, DEFAULT_DELAY_MS
from support import FakeClock


def fast_session(**kwargs):
    kwargs.setdefault("delay", 1)
    kwargs.setdefault("slice_ms", 1)
    kwargs.setdefault("pause_poll_ms", 1)
    return Session(**kwargs)


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestGenerate(unittest.TestCase):

    def test_generate_shape(self):
        sess = Session()
        sess.generate()
        array = sess.state()["array"]
        self.assertEqual(len(array), 12)
        for bar in array:
            self.assertGreaterEqual(bar["value"], 60)
            self.assertLess(bar["value"], 1000)
            self.assertEqual(bar["state"], "idle")

    def test_generate_resets_flags(self):
        sess = fast_session()
        sess.load([3, 2, 1])
        sess.run()
        self.assertTrue(sess.sorted)
        sess.signals.request_stop()
        sess.generate()
        self.assertFalse(sess.sorted)
        self.assertFalse(sess.sorting)
        self.assertFalse(sess.signals.stopped)
        self.assertFalse(sess.signals.paused)
        self.assertEqual(sess.run_state, RunState.IDLE)

    def test_seeded_sessions_generate_alike(self):
        a, b = Session(seed=3), Session(seed=3)
        a.generate()
        b.generate()
        self.assertEqual(a.bars.values(), b.bars.values())

    def test_load_rejects_negative_values(self):
        sess = Session(algorithm=Algorithm.RADIX_SORT)
        sess.load([5, 3])
        with self.assertRaises(ValueError):
            sess.load([5, -3, 2, -10])
        self.assertEqual(sess.bars.values(), [5, 3])
        self.assertFalse(sess.sorted)

    def test_generate_and_start(self):
        sess = fast_session()
        sess.generate(start_sorting=True)
        self.assertTrue(sess.join(timeout=5))
        self.assertTrue(sess.sorted)
        self.assertTrue(sess.bars.is_sorted())

    def test_generate_halts_an_in_flight_run(self):
        sess = fast_session(delay=50)
        sess.load(list(range(12, 0, -1)))
        steps = []
        sess.subscribe(steps.append)
        sess.start()
        self.assertTrue(wait_for(lambda: len(steps) > 0))
        sess.generate()
        self.assertTrue(sess.join(timeout=0))
        self.assertFalse(sess.sorting)
        self.assertEqual(sess.run_state, RunState.IDLE)


class TestRunToCompletion(unittest.TestCase):

    def test_every_algorithm_finishes_sorted(self):
        values = [999, 60, 512, 60, 731, 100, 88, 999, 245, 61, 640, 320]
        for algorithm in Algorithm:
            with self.subTest(algorithm=algorithm.value):
                sess = fast_session(algorithm=algorithm, sleep=lambda s: None)
                sess.load(values)
                self.assertIs(sess.run(), RunState.FINISHED)
                self.assertEqual(sess.bars.values(), sorted(values))
                self.assertTrue(sess.sorted)
                self.assertFalse(sess.sorting)

    def test_threaded_start_returns_immediately(self):
        sess = fast_session(delay=20)
        sess.load([4, 3, 2, 1])
        self.assertTrue(sess.start())
        self.assertTrue(sess.sorting)
        self.assertFalse(sess.sorted)
        self.assertTrue(sess.join(timeout=5))
        self.assertTrue(sess.sorted)
        self.assertFalse(sess.sorting)
        self.assertEqual(sess.bars.values(), [1, 2, 3, 4])

    def test_start_refused_while_running(self):
        sess = fast_session(delay=50)
        sess.load([4, 3, 2, 1])
        self.assertTrue(sess.start())
        self.assertFalse(sess.start())
        sess.stop()
        self.assertTrue(sess.join(timeout=2))

    def test_sorted_cleared_when_a_new_run_starts(self):
        sess = fast_session(sleep=lambda s: None)
        sess.load([2, 1])
        sess.run()
        self.assertTrue(sess.sorted)

        seen = []
        sess.subscribe(lambda step: seen.append((sess.sorted, sess.sorting)))
        sess.run()
        self.assertTrue(seen)
        self.assertTrue(all(not s for s, _ in seen))

    def test_metrics_recorded(self):
        sess = fast_session(sleep=lambda s: None)
        sess.load([5, 3, 8, 1])
        sess.run()
        metrics = sess.state()["metrics"]
        self.assertEqual(metrics["algo_key"], "bubble_sort")
        self.assertEqual(metrics["outcome"], "finished")
        self.assertEqual(metrics["array_size"], 4)
        self.assertGreater(metrics["writes"], 0)
        self.assertEqual(metrics["total_steps"], metrics["writes"] + metrics["highlights"])


class TestStop(unittest.TestCase):

    def test_stop_is_prompt_and_final(self):
        sess = fast_session(delay=40)
        sess.load(list(range(12, 0, -1)))
        steps = []
        sess.subscribe(steps.append)
        sess.start()
        self.assertTrue(wait_for(lambda: len(steps) >= 4))

        sess.stop()
        self.assertFalse(sess.sorting)
        count_at_stop = len(steps)
        self.assertTrue(sess.join(timeout=0.5))

        self.assertEqual(len(steps), count_at_stop)
        self.assertEqual(sess.run_state, RunState.STOPPED)
        self.assertFalse(sess.sorted)

    def test_stop_while_paused(self):
        sess = fast_session(delay=20, pause_poll_ms=10)
        sess.load([4, 3, 2, 1])
        sess.start()
        sess.pause()
        sess.stop()
        self.assertFalse(sess.paused)
        self.assertTrue(sess.join(timeout=0.5))
        self.assertEqual(sess.run_state, RunState.STOPPED)

    def test_no_rollback_on_stop(self):
        sess = fast_session(delay=20)
        values = list(range(12, 0, -1))
        sess.load(values)
        steps = []
        sess.subscribe(steps.append)
        sess.start()
        self.assertTrue(wait_for(lambda: any(s.is_write for s in steps)))
        sess.stop()
        sess.join(timeout=1)
        self.assertNotEqual(sess.bars.values(), values)

    def test_restart_after_stop_finishes(self):
        sess = fast_session(delay=20)
        sess.load([6, 5, 4, 3, 2, 1])
        sess.start()
        sess.stop()
        sess.set_delay(1)
        self.assertTrue(sess.start())
        self.assertTrue(sess.join(timeout=5))
        self.assertEqual(sess.run_state, RunState.FINISHED)
        self.assertEqual(sess.bars.values(), [1, 2, 3, 4, 5, 6])


class TestPause(unittest.TestCase):

    def test_pause_halts_progress_until_resume(self):
        sess = fast_session(delay=10, pause_poll_ms=5)
        sess.load(list(range(12, 0, -1)))
        steps = []
        sess.subscribe(steps.append)
        sess.start()
        self.assertTrue(wait_for(lambda: len(steps) >= 2))

        sess.pause()
        time.sleep(0.1)
        frozen = len(steps)
        time.sleep(0.2)
        self.assertEqual(len(steps), frozen)
        self.assertTrue(sess.sorting)

        sess.resume()
        self.assertTrue(sess.join(timeout=10))
        self.assertTrue(sess.sorted)

    def test_pause_is_idempotent(self):
        sess = fast_session(delay=50)
        sess.load([3, 2, 1])
        sess.start()
        sess.pause()
        sess.pause()
        self.assertTrue(sess.paused)
        sess.resume()
        sess.resume()
        self.assertFalse(sess.paused)
        sess.stop()
        sess.join(timeout=1)

    def test_pause_when_idle_is_a_no_op(self):
        sess = Session()
        sess.pause()
        self.assertFalse(sess.paused)
        sess.resume()
        self.assertFalse(sess.paused)


class TestConfiguration(unittest.TestCase):

    def test_speed_presets(self):
        sess = Session()
        self.assertEqual(sess.delay, SPEED_PRESETS["slow"])
        for level, ms in {"slow": 1000, "normal": 500, "fast": 250}.items():
            self.assertEqual(sess.set_speed(level), ms)
            self.assertEqual(sess.delay, ms)

    def test_unknown_speed_defaults(self):
        sess = Session()
        sess.set_speed("ludicrous")
        self.assertEqual(sess.delay, DEFAULT_DELAY_MS)

    def test_non_string_speed_defaults(self):
        sess = Session()
        self.assertEqual(sess.set_speed(["x"]), DEFAULT_DELAY_MS)
        self.assertEqual(sess.delay, DEFAULT_DELAY_MS)

    def test_unsubscribe_applies_to_next_run(self):
        sess = fast_session(sleep=lambda s: None)
        sess.load([2, 1])
        kept, dropped = [], []
        sess.subscribe(kept.append)
        sess.subscribe(dropped.append)
        sess.unsubscribe(dropped.append)
        sess.unsubscribe(dropped.append)
        sess.run()
        self.assertTrue(kept)
        self.assertEqual(dropped, [])

    def test_non_positive_delay_rejected(self):
        sess = Session()
        with self.assertRaises(ValueError):
            sess.set_delay(0)

    def test_speed_change_applies_to_next_wait(self):
        clock = FakeClock()
        sess  = Session(delay=10, slice_ms=5, sleep=clock.sleep)
        sess.load([2, 1])

        def speed_up(step):
            if step.step_number == 2:
                sess.set_delay(20)

        sess.subscribe(speed_up)
        sess.run()
        # first wait (compare) at 10ms, second wait (swap) at the new 20ms
        self.assertEqual([round(s * 1000) for s in clock.sleeps], [5, 5, 5, 5, 5, 5])
        self.assertEqual(clock.total_ms, 30)

    def test_algorithm_applies_on_next_start(self):
        sess = fast_session(sleep=lambda s: None)
        sess.load([2, 1])
        sess.set_algorithm("radix_sort")
        self.assertIs(sess.algorithm, Algorithm.RADIX_SORT)
        sess.run()
        self.assertEqual(sess.state()["metrics"]["algo_key"], "radix_sort")

    def test_unknown_algorithm_rejected(self):
        sess = Session()
        with self.assertRaises(ValueError):
            sess.set_algorithm("sleep_sort")
        self.assertIs(sess.algorithm, Algorithm.BUBBLE_SORT)

    def test_state_surface(self):
        sess = Session()
        sess.generate()
        state = sess.state()
        self.assertEqual(
            set(state),
            {"array", "delay", "algorithm", "sorted", "sorting", "paused",
             "run_state", "metrics", "error"},
        )
        self.assertEqual(state["algorithm"], "bubble_sort")


class TestLaunchSerialisation(unittest.TestCase):
    """stop()/start()/generate() racing a start() that is still launching."""

    def _launch_with(self, sess, during_launch):
        real_thread = threading.Thread
        created = []

        def thread_factory(*args, **kwargs):
            if not created:
                during_launch(real_thread)
            thread = real_thread(*args, **kwargs)
            created.append(thread)
            return thread

        with mock.patch("engine.session.threading.Thread", side_effect=thread_factory):
            launched = sess.start()
        return launched, created

    def test_nested_stop_and_start_keep_one_run(self):
        sess = fast_session(delay=50)
        sess.load(list(range(12, 0, -1)))
        nested = []

        def stop_then_start(real_thread):
            sess.stop()
            nested.append(sess.start())

        launched, created = self._launch_with(sess, stop_then_start)
        self.assertTrue(launched)
        self.assertEqual(nested, [False])
        self.assertEqual(len(created), 1)
        self.assertTrue(sess.join(timeout=2))
        created[0].join(timeout=2)
        self.assertFalse(created[0].is_alive())
        self.assertEqual(sess.run_state, RunState.STOPPED)

    def test_start_from_another_thread_is_refused_while_launching(self):
        sess = fast_session(delay=50)
        sess.load(list(range(12, 0, -1)))
        other = []

        def race(real_thread):
            def stop_then_start():
                sess.stop()
                other.append(sess.start())
            helper = real_thread(target=stop_then_start)
            helper.start()
            helper.join(timeout=2)

        launched, created = self._launch_with(sess, race)
        self.assertTrue(launched)
        self.assertEqual(other, [False])
        self.assertEqual(len(created), 1)
        self.assertTrue(sess.join(timeout=2))
        self.assertEqual(sess.run_state, RunState.STOPPED)

    def test_generate_waits_for_launch_then_halts_the_run(self):
        sess = fast_session(delay=50)
        sess.load(list(range(12, 0, -1)))
        helpers = []

        def regenerate(real_thread):
            helper = real_thread(target=sess.generate)
            helper.start()
            helper.join(timeout=0.1)
            # blocked on the launch in progress
            self.assertTrue(helper.is_alive())
            helpers.append(helper)

        launched, _ = self._launch_with(sess, regenerate)
        self.assertTrue(launched)
        helpers[0].join(timeout=2)
        self.assertFalse(helpers[0].is_alive())
        self.assertTrue(sess.join(timeout=0))
        self.assertEqual(sess.run_state, RunState.IDLE)
        self.assertFalse(sess.sorting)
        self.assertFalse(sess.signals.stopped)


class TestFaults(unittest.TestCase):

    def test_runner_fault_is_logged_not_raised(self):
        def boom(values, emitter):
            raise RuntimeError("kaboom")

        sess = fast_session()
        sess.load([2, 1])
        with mock.patch.object(REGISTRY[Algorithm.BUBBLE_SORT], "fn", boom):
            with self.assertLogs("engine.session", level="ERROR") as logs:
                outcome = sess.run()

        self.assertIs(outcome, RunState.FAILED)
        self.assertFalse(sess.sorting)
        self.assertFalse(sess.sorted)
        self.assertIn("RuntimeError", sess.last_error)
        self.assertTrue(any("bubble_sort" in line for line in logs.output))

    def test_threaded_fault_does_not_crash_host(self):
        def boom(values, emitter):
            raise KeyError("missing")

        sess = fast_session()
        sess.load([2, 1])
        with mock.patch.object(REGISTRY[Algorithm.BUBBLE_SORT], "fn", boom):
            with self.assertLogs("engine.session", level="ERROR"):
                sess.start()
                self.assertTrue(sess.join(timeout=2))
        self.assertEqual(sess.run_state, RunState.FAILED)
        self.assertFalse(sess.sorting)


if __name__ == "__main__":
    unittest.main()
