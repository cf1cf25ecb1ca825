"""Sensor-specific stream parsers.

:mod:`bmp390` turns raw JSON lines or CSV log lines into the
:class:`~barocomp.core.models.RawSample` objects consumed by the
compensation engine.
"""
