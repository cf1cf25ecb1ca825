"""Searches and array paths built on the compensation engine.

Modules here stay free of I/O: :mod:`inverse` finds raw ADC values for target
readings and :mod:`batch` runs the forward path over NumPy arrays.
"""
