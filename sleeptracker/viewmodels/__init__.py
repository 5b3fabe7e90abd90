"""ViewModel package for sleep tracker UI state and command surfaces.

Call context:
    ``sleeptracker/app/main.py`` builds the concrete viewmodel from this
    package and binds view callbacks to its commands and observable values.

Dependencies:
    Modules here depend on domain types, use cases and formatting helpers.
    Store adapters and widgets stay outside.

Responsibilities:
    - Expose observable UI state and command entry points.
    - Format domain records into view-facing text.
    - Own background work so it ends with the screen.
"""
