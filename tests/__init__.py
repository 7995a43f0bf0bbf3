"""Tests for async_avtransport."""
