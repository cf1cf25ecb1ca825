import pathlib
import sys
import tempfile
import unittest

import yaml

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from barocomp.calibration import decode_calibration  # noqa: E402
from barocomp.config import BaroConfig, config_from_mapping, load_config  # noqa: E402
from barocomp.tools.vectors import EXAMPLE_CALIBRATION_BLOCK  # noqa: E402

EXAMPLE_HEX = " ".join(f"{b:02X}" for b in EXAMPLE_CALIBRATION_BLOCK)


class BaroConfigTest(unittest.TestCase):
    def test_defaults(self):
        cfg = BaroConfig()
        self.assertEqual(cfg.sea_level_pa, 101325.0)
        self.assertEqual(cfg.temperature_tolerance_c, 0.01)
        self.assertEqual(cfg.pressure_tolerance_pa, 10.0)
        self.assertEqual((cfg.search_low, cfg.search_high), (0, 16_777_215))
        self.assertIsNone(cfg.calibration)

    def test_sanitized_replaces_invalid_values(self):
        cfg = BaroConfig(
            sea_level_pa=-1.0,
            temperature_tolerance_c=0.0,
            pressure_tolerance_pa="abc",
            search_low=-5,
            search_high=-10,
            max_iterations=0,
        ).sanitized()
        self.assertEqual(cfg.sea_level_pa, 101325.0)
        self.assertEqual(cfg.temperature_tolerance_c, 0.01)
        self.assertEqual(cfg.pressure_tolerance_pa, 10.0)
        self.assertEqual(cfg.search_low, 0)
        self.assertEqual(cfg.search_high, 1)
        self.assertEqual(cfg.max_iterations, 1)

    def test_sanitized_replaces_unparsable_integers(self):
        cfg = BaroConfig(
            search_low="low", search_high=None, max_iterations="many"
        ).sanitized()
        self.assertEqual(cfg.search_low, 0)
        self.assertEqual(cfg.search_high, 16_777_215)
        self.assertEqual(cfg.max_iterations, 64)

    def test_section_overrides_root_settings(self):
        cfg = config_from_mapping(
            {"sea_level_pa": 99000, "barocomp": {"sea_level_pa": 100850}}
        )
        self.assertEqual(cfg.sea_level_pa, 100850.0)

    def test_mapping_with_top_level_block_and_unknown_keys(self):
        cfg = config_from_mapping(
            {
                "barocomp": {"sea_level_pa": 100500, "pressure_tolerance_pa": 2.5},
                "display": {"lcd": True},
            }
        )
        self.assertEqual(cfg.sea_level_pa, 100500.0)
        self.assertEqual(cfg.pressure_tolerance_pa, 2.5)

    def test_calibration_from_hex_string(self):
        cfg = config_from_mapping({"calibration": EXAMPLE_HEX})
        self.assertEqual(cfg.calibration, tuple(EXAMPLE_CALIBRATION_BLOCK))
        self.assertEqual(cfg.coefficients(), decode_calibration(EXAMPLE_CALIBRATION_BLOCK))

    def test_calibration_from_int_list(self):
        cfg = config_from_mapping({"calibration": list(EXAMPLE_CALIBRATION_BLOCK)})
        self.assertEqual(cfg.coefficients().par_t1, 6867712.0)

    def test_missing_calibration_raises(self):
        with self.assertRaises(ValueError):
            BaroConfig().coefficients()


class LoadConfigTest(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config("/nonexistent/barocomp.yaml"), BaroConfig())
        self.assertEqual(load_config(None), BaroConfig())

    def test_round_trip_through_yaml(self):
        original = BaroConfig(
            sea_level_pa=99000.0, calibration=tuple(EXAMPLE_CALIBRATION_BLOCK)
        ).sanitized()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "barocomp.yaml"
            path.write_text(yaml.safe_dump(original.to_mapping()), encoding="utf-8")

            loaded = load_config(path)

        self.assertEqual(loaded, original)

    def test_non_mapping_yaml_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "list.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
