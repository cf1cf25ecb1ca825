"""Data input/output helpers (calibration dumps and CSV logs).

Utility modules here keep disk-level concerns isolated from the rest of the
library:
- :mod:`calibration_file` reads and writes 21-byte calibration dumps.
- :mod:`log_loader` loads raw-sample CSV logs into NumPy arrays.
- :mod:`csv_writer` emits compensated readings.
"""
