import unittest

from craftycook.loading import LoadingSignal
from tests.fakes import FakeClock, ManualScheduler


class TestLoadingSignal(unittest.TestCase):
    """Delayed show and minimum dwell of the global loading indicator."""

    def setUp(self):
        self.clock = FakeClock()
        self.scheduler = ManualScheduler(self.clock)
        self.signal = LoadingSignal(delay_ms=150, min_visible_ms=500, scheduler=self.scheduler, clock=self.clock)
        self.changes = []
        self.signal.subscribe(self.changes.append)

    def test_fast_request_never_shows(self):
        self.signal.start()
        self.scheduler.advance(0.1)
        self.signal.stop()
        self.scheduler.advance(1.0)
        self.assertFalse(self.signal.is_visible)
        self.assertEqual(self.changes, [])

    def test_slow_request_shows_after_delay(self):
        self.signal.start()
        self.scheduler.advance(0.14)
        self.assertFalse(self.signal.is_visible)
        self.scheduler.advance(0.02)
        self.assertTrue(self.signal.is_visible)
        self.assertEqual(self.changes, [True])

    def test_stays_visible_for_minimum_time(self):
        self.signal.start()
        self.scheduler.advance(0.2)  # shown at 0.15
        self.signal.stop()
        self.assertTrue(self.signal.is_visible)
        self.scheduler.advance(0.44)  # t=0.64
        self.assertTrue(self.signal.is_visible)
        self.scheduler.advance(0.02)  # t=0.66
        self.assertFalse(self.signal.is_visible)
        self.assertEqual(self.changes, [True, False])

    def test_hides_immediately_after_minimum_time(self):
        self.signal.start()
        self.scheduler.advance(1.0)
        self.signal.stop()
        self.assertFalse(self.signal.is_visible)

    def test_show_rechecks_counter_when_timer_fires(self):
        self.signal.start()
        self.scheduler.advance(0.05)
        self.signal.stop()
        self.scheduler.advance(0.05)
        self.signal.start()  # t=0.1, the first timer is still pending
        self.scheduler.advance(0.06)  # first timer fires at 0.15 with a positive counter
        self.assertTrue(self.signal.is_visible)

    def test_pending_show_is_dropped_when_counter_drained(self):
        self.signal.start()
        self.signal.start()
        self.signal.stop()
        self.signal.stop()
        self.scheduler.advance(0.5)
        self.assertFalse(self.signal.is_visible)
        self.assertEqual(self.signal.active, 0)

    def test_new_request_during_dwell_keeps_indicator(self):
        self.signal.start()
        self.scheduler.advance(0.2)
        self.signal.stop()  # hide due at 0.65
        self.scheduler.advance(0.1)
        self.signal.start()
        self.scheduler.advance(1.0)
        self.assertTrue(self.signal.is_visible)
        self.signal.stop()
        self.assertFalse(self.signal.is_visible)

    def test_overlapping_requests(self):
        self.signal.start()
        self.signal.start()
        self.scheduler.advance(1.0)
        self.signal.stop()
        self.assertTrue(self.signal.is_visible)
        self.assertEqual(self.signal.active, 1)
        self.signal.stop()
        self.assertFalse(self.signal.is_visible)

    def test_stop_never_goes_negative(self):
        self.signal.stop()
        self.signal.stop()
        self.assertEqual(self.signal.active, 0)
        self.signal.start()
        self.assertEqual(self.signal.active, 1)

    def test_track_context_manager(self):
        with self.signal.track():
            self.assertEqual(self.signal.active, 1)
            self.scheduler.advance(0.2)
            self.assertTrue(self.signal.is_visible)
        self.assertEqual(self.signal.active, 0)

    def test_timer_handles_stay_bounded(self):
        for _ in range(1000):
            self.signal.start()
            self.scheduler.advance(0.01)
            self.signal.stop()
            self.scheduler.advance(1.0)
            self.assertLessEqual(self.signal.pending_timers, 1)
        self.assertEqual(self.signal.pending_timers, 0)
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(self.changes, [])

    def test_one_show_timer_for_burst_of_requests(self):
        for _ in range(50):
            self.signal.start()
        self.assertEqual(self.scheduler.pending, 1)
        self.scheduler.advance(0.15)
        self.assertTrue(self.signal.is_visible)
        for _ in range(50):
            self.signal.stop()
        self.assertEqual(self.signal.pending_timers, 1)
        self.scheduler.advance(0.5)
        self.assertFalse(self.signal.is_visible)
        self.assertEqual(self.signal.pending_timers, 0)

    def test_close_cancels_timers(self):
        self.signal.start()
        self.signal.close()
        self.assertEqual(self.scheduler.pending, 0)
        self.scheduler.advance(1.0)
        self.assertFalse(self.signal.is_visible)


if __name__ == "__main__":
    unittest.main()
