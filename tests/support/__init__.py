"""Shared fakes for tests."""
