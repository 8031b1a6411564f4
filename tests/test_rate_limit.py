"""Unit tests for the in-memory login rate limiter."""

import unittest

from app.core.rate_limit import LoginRateLimiter


class FakeMonotonic:
    def __init__(self) -> None:
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


class TestLoginRateLimiter(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeMonotonic()
        self.limiter = LoginRateLimiter(limit=3, clock=self.clock)

    def test_blocks_after_limit_within_window(self) -> None:
        self.assertEqual([self.limiter.hit("1.2.3.4") for _ in range(4)], [True, True, True, False])

    def test_keys_are_independent(self) -> None:
        for _ in range(3):
            self.limiter.hit("a")
        self.assertFalse(self.limiter.hit("a"))
        self.assertTrue(self.limiter.hit("b"))

    def test_window_slides(self) -> None:
        for _ in range(3):
            self.limiter.hit("a")
        self.clock.value += 59
        self.assertFalse(self.limiter.hit("a"))
        self.clock.value += 1
        self.assertTrue(self.limiter.hit("a"))

    def test_prune_drops_idle_keys(self) -> None:
        self.limiter.hit("a")
        self.clock.value += 61
        self.limiter.hit("b")
        self.assertEqual(self.limiter.prune(), 1)

    def test_reset(self) -> None:
        for _ in range(3):
            self.limiter.hit("a")
        self.limiter.reset()
        self.assertTrue(self.limiter.hit("a"))


if __name__ == "__main__":
    unittest.main()
