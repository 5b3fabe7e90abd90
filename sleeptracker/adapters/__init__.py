"""Adapter package for sleep store implementations.

Purpose:
    Collect concrete implementations of ``SleepStorePort`` (in-memory and
    JSON file) plus the adapter-level error types they raise.

Call context:
    Imported by the app composition root for runtime wiring and by tests.
"""
