"""Use-case layer for sleep tracking workflows.

Each module coordinates domain records and the store port without touching
UI state, preserving MVVM + Hexagonal boundaries.
"""
