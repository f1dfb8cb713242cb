"""Tests loading settings."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from reti import config


class ConfigTest(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / 'reti.toml'

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_without_file(self):
        self.assertEqual(config.load_config(self.path), config.DEFAULT_CONFIG)

    def test_file_overrides_defaults(self):
        self.path.write_text('storage-file = "~/work/times.json"\nsave-pretty = true\n')
        loaded = config.load_config(self.path)
        self.assertEqual(loaded['storage-file'],
                         os.path.expanduser('~/work/times.json'))
        self.assertTrue(loaded['save-pretty'])
        self.assertEqual(loaded['log-level'], 'WARNING')

    def test_unknown_key(self):
        self.path.write_text('storage_file = "x.json"\n')
        with self.assertRaises(config.ConfigError):
            config.load_config(self.path)

    def test_invalid_toml(self):
        self.path.write_text('storage-file = \n')
        with self.assertRaises(config.ConfigError):
            config.load_config(self.path)

    def test_config_path(self):
        with mock.patch.dict(os.environ, {'RETI_CONFIG': str(self.path)}):
            self.assertEqual(config.config_path(), self.path)
        env = {'XDG_CONFIG_HOME': self.tmp.name}
        with mock.patch.dict(os.environ, env):
            os.environ.pop('RETI_CONFIG', None)
            self.assertEqual(config.config_path(),
                             Path(self.tmp.name) / 'reti' / 'reti.toml')


if __name__ == '__main__':
    unittest.main()
