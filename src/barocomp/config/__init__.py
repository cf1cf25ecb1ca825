"""Configuration objects and helpers for barocomp.

Settings live in a YAML file (optionally under a top-level ``barocomp:``
key) and load into the typed :class:`~barocomp.config.runtime.BaroConfig`
dataclass: sea-level reference pressure, inverse-search tolerances and
bounds, and optionally the device's calibration block.
"""

from .runtime import BaroConfig, config_from_mapping, load_config

__all__ = ["BaroConfig", "config_from_mapping", "load_config"]
