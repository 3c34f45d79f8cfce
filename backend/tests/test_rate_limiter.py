import unittest

import helpers  # noqa: F401

from app.rate_limiter import InMemoryRateLimiter


class RateLimiterTests(unittest.TestCase):
    def test_blocks_after_max_within_window(self):
        limiter = InMemoryRateLimiter(max_requests=2, window_seconds=60)
        self.assertTrue(limiter.allow("1.2.3.4", now=0))
        self.assertTrue(limiter.allow("1.2.3.4", now=1))
        self.assertFalse(limiter.allow("1.2.3.4", now=2))
        self.assertTrue(limiter.allow("5.6.7.8", now=2))

    def test_window_expiry_frees_capacity(self):
        limiter = InMemoryRateLimiter(max_requests=1, window_seconds=10)
        self.assertTrue(limiter.allow("c", now=0))
        self.assertFalse(limiter.allow("c", now=5))
        self.assertTrue(limiter.allow("c", now=11))

    def test_idle_clients_are_forgotten(self):
        limiter = InMemoryRateLimiter(max_requests=5, window_seconds=10)
        for i in range(50):
            limiter.allow(f"10.0.0.{i}", now=1)
        self.assertEqual(len(limiter), 50)

        self.assertTrue(limiter.allow("10.0.1.1", now=12))
        self.assertEqual(len(limiter), 1)

    def test_active_client_survives_sweep(self):
        limiter = InMemoryRateLimiter(max_requests=2, window_seconds=10)
        self.assertTrue(limiter.allow("busy", now=1))
        self.assertTrue(limiter.allow("busy", now=9))
        self.assertTrue(limiter.allow("idle", now=2))
        # Sweep at t=12 drops "idle" but keeps the hit from t=9.
        self.assertTrue(limiter.allow("other", now=12))
        self.assertEqual(len(limiter), 2)
        self.assertTrue(limiter.allow("busy", now=13))
        self.assertFalse(limiter.allow("busy", now=14))


if __name__ == "__main__":
    unittest.main()
