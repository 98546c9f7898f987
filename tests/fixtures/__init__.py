"""Shared fixtures for requisite tests."""
