"""Bounded-concurrency, same-host site crawler."""
