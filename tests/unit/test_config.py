"""
Unit tests for configuration loading.
"""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"


class TestConfigLoading(unittest.TestCase):
    """Tests for config loading functions."""

    def test_config_dir_exists(self):
        """Config directory exists."""
        self.assertTrue(CONFIG_DIR.exists())

    def test_load_chains(self):
        """Can load chains.yaml."""
        from config import load_chains
        chains = load_chains()

        self.assertIsInstance(chains, dict)
        self.assertEqual(list(chains)[0], "neutron")
        self.assertEqual(chains["osmosis"]["address_prefix"], "osmo")

    def test_load_channels(self):
        """Can load channels.yaml."""
        from config import load_channels
        channels = load_channels()

        self.assertEqual(channels["osmosis-1"]["neutron-1"], "channel-874")
        self.assertEqual(channels["neutron-1"]["osmosis-1"], "channel-10")

    def test_load_tracking(self):
        """Can load tracking.yaml."""
        from config import load_tracking
        tracking = load_tracking()

        self.assertEqual(tracking["origin"], "neutron")
        self.assertEqual(len(tracking["denoms"]), 2)
        self.assertIn(tracking["account"], tracking["address_overrides"])

    def test_load_yaml_custom_dir(self):
        """load_yaml reads from an explicit directory."""
        from config import load_yaml

        with TemporaryDirectory() as tmp:
            (Path(tmp) / "empty.yaml").write_text("")
            self.assertEqual(load_yaml("empty.yaml", Path(tmp)), {})

    def test_missing_file(self):
        """Missing file raises ConfigurationError."""
        from config import load_yaml
        from core.exceptions import ConfigurationError

        with self.assertRaises(ConfigurationError) as ctx:
            load_yaml("does_not_exist.yaml")
        self.assertEqual(ctx.exception.code.value, "CONFIG_INVALID")

    def test_invalid_yaml(self):
        """Unparseable YAML raises ConfigurationError."""
        from config import load_yaml
        from core.exceptions import ConfigurationError

        with TemporaryDirectory() as tmp:
            (Path(tmp) / "broken.yaml").write_text("chains: [neutron\n")
            with self.assertRaises(ConfigurationError):
                load_yaml("broken.yaml", Path(tmp))

    def test_non_mapping_yaml(self):
        """A top-level list is rejected."""
        from config import load_yaml
        from core.exceptions import ConfigurationError

        with TemporaryDirectory() as tmp:
            (Path(tmp) / "list.yaml").write_text("- neutron\n- osmosis\n")
            with self.assertRaises(ConfigurationError):
                load_yaml("list.yaml", Path(tmp))


if __name__ == "__main__":
    unittest.main()
