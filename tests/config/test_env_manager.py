"""
Tests for the process-wide configuration.

This module tests the startup sequence (runtime check then loader) and
the published singleton.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import motown.config.env as env_module
from motown.config import ConfigError, RuntimeVersionError, current, load_configuration, reset
from tests.helpers.config_root import write_config_root

REPO_ROOT = Path(__file__).resolve().parents[2]


class TestConfigurationSingleton(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures."""
        # Clear any existing singleton
        reset()
        self.temp_dir = tempfile.mkdtemp()
        write_config_root(self.temp_dir)

    def tearDown(self):
        """Clean up after tests."""
        reset()
        shutil.rmtree(self.temp_dir)

    def test_current_before_load(self):
        with self.assertRaises(ConfigError):
            current()

    @patch.dict(os.environ, {}, clear=True)
    def test_load_publishes_config(self):
        config = load_configuration(root=self.temp_dir, required_python=">=3")
        self.assertIs(current(), config)
        self.assertIs(env_module._CONFIG, config)

    @patch.dict(os.environ, {}, clear=True)
    def test_reset(self):
        load_configuration(root=self.temp_dir, check_runtime=False)
        reset()
        with self.assertRaises(ConfigError):
            current()

    @patch.dict(os.environ, {}, clear=True)
    def test_runtime_mismatch_stops_before_loading(self):
        with patch("motown.config.env.ConfigLoader.load") as mock_load:
            with self.assertRaises(RuntimeVersionError):
                load_configuration(root=self.temp_dir, required_python="<3")
        mock_load.assert_not_called()
        self.assertEqual(os.environ["APP_ROOT"], os.path.realpath(self.temp_dir))
        with self.assertRaises(ConfigError):
            current()

    @patch.dict(os.environ, {}, clear=True)
    def test_runtime_check_skipped(self):
        with patch("motown.config.env.check_runtime_version") as mock_check:
            load_configuration(root=self.temp_dir, check_runtime=False)
        mock_check.assert_not_called()

    @patch.dict(os.environ, {}, clear=True)
    def test_failed_load_keeps_previous_config(self):
        first = load_configuration(root=self.temp_dir, check_runtime=False)
        write_config_root(self.temp_dir, base={"mysql": {}})
        with self.assertRaises(ConfigError):
            load_configuration(root=self.temp_dir, check_runtime=False)
        self.assertIs(current(), first)


class TestShippedConfiguration(unittest.TestCase):
    """The config/ directory in the repository validates for every environment."""

    def tearDown(self):
        reset()

    def test_each_environment(self):
        for env_name in ("production", "test", "development"):
            with self.subTest(env=env_name):
                with patch.dict(os.environ, {"APP_ENV": env_name}, clear=True):
                    config = load_configuration(root=REPO_ROOT, check_runtime=False)
                self.assertEqual(config.env, env_name)
                self.assertEqual(config.mysql.database, "motown_test" if env_name == "test" else "motown")


if __name__ == "__main__":
    unittest.main()
