"""Pytest configuration for selenium helper tests."""

pytest_plugins = ["pytester"]
