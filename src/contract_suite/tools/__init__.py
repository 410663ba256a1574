"""Request-level building blocks used by the test suite."""
