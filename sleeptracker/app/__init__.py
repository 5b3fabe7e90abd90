"""Application composition layer for the Tkinter GUI.

Modules in this package wire configuration, the sleep store, the viewmodel
and the view into a runnable desktop window without placing logic in views.
"""
