#!/usr/bin/env python3
"""
Tests for the command line entry points and settings.
"""

import io
import os
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from p2ptestbed.models import HUB_NAME
from p2ptestbed.config import Settings, load_settings
from p2ptestbed.cli import generate_main, analyze_main, parse_peer_count, parse_flag


class ArgumentParsingTests(unittest.TestCase):
    def test_peer_count(self):
        self.assertEqual(parse_peer_count('12', 75), 12)
        self.assertEqual(parse_peer_count('0', 75), 0)
        self.assertEqual(parse_peer_count(None, 75), 75)

    def test_peer_count_fallback_warns(self):
        with self.assertLogs('p2ptestbed.cli', level='WARNING') as logs:
            self.assertEqual(parse_peer_count('ten', 75), 75)
            self.assertEqual(parse_peer_count('-4', 75), 75)
        self.assertEqual(len(logs.records), 2)

    def test_flag(self):
        self.assertTrue(parse_flag('true', False))
        self.assertTrue(parse_flag('TRUE', False))
        self.assertFalse(parse_flag('yes', True))
        self.assertFalse(parse_flag('false', True))
        self.assertTrue(parse_flag(None, True))


class SettingsTests(unittest.TestCase):
    def test_paths(self):
        settings = Settings(data_dir='/data')
        self.assertEqual(settings.topology_path(76), '/data/inputs-new/input-data-76.json')
        self.assertEqual(settings.config_path(35, True),
                         '/data/outputs-with-superpeer/output-data-35.json')
        self.assertEqual(settings.config_path(35, False),
                         '/data/outputs-without-superpeer/output-data-35.json')

    def test_environment_overrides(self):
        env = {
            'P2PTESTBED_DATA_DIR': '/srv/testbed',
            'P2PTESTBED_DEFAULT_PEERS': '10',
            'P2PTESTBED_SEED': '99',
            'P2PTESTBED_LOG_LEVEL': 'debug',
        }
        with patch.dict(os.environ, env):
            settings = load_settings()
        self.assertEqual(settings.data_dir, '/srv/testbed')
        self.assertEqual(settings.default_peers, 10)
        self.assertEqual(settings.seed, 99)
        self.assertEqual(settings.log_level, 'DEBUG')

    def test_invalid_integer_falls_back(self):
        with patch.dict(os.environ, {'P2PTESTBED_DEFAULT_PEERS': 'many'}):
            with self.assertLogs('p2ptestbed.config', level='WARNING'):
                settings = load_settings()
        self.assertEqual(settings.default_peers, 75)

    def test_dotenv_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            dotenv_path = os.path.join(tmp, '.env')
            with open(dotenv_path, 'w') as f:
                f.write('P2PTESTBED_DEFAULT_ANALYZE_PEERS=20\n')
            with patch.dict(os.environ, {}):
                os.environ.pop('P2PTESTBED_DEFAULT_ANALYZE_PEERS', None)
                settings = load_settings(dotenv_path)
        self.assertEqual(settings.default_analyze_peers, 20)

    def test_dotenv_in_working_directory(self):
        cwd = os.getcwd()
        self.addCleanup(os.chdir, cwd)
        with tempfile.TemporaryDirectory() as tmp:
            with open(os.path.join(tmp, '.env'), 'w') as f:
                f.write('P2PTESTBED_DEFAULT_PEERS=7\n')
            os.chdir(tmp)
            with patch.dict(os.environ, {}):
                os.environ.pop('P2PTESTBED_DEFAULT_PEERS', None)
                settings = load_settings()
            os.chdir(cwd)
        self.assertEqual(settings.default_peers, 7)


class GenerateCommandTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_writes_topology(self):
        path = os.path.join(self.tmp.name, 'topology.json')
        self.assertEqual(generate_main(['2', '--seed', '5', '-o', path]), 0)

        with open(path) as f:
            data = json.load(f)
        self.assertEqual(len(data['peers']), 3)
        self.assertEqual(len(data['connections']), 6)
        self.assertEqual(data['peers'][0]['name'], HUB_NAME)

    def test_seed_makes_output_reproducible(self):
        first = os.path.join(self.tmp.name, 'first.json')
        second = os.path.join(self.tmp.name, 'second.json')
        generate_main(['3', '--seed', '11', '-o', first])
        generate_main(['3', '--seed', '11', '-o', second])
        with open(first) as a, open(second) as b:
            self.assertEqual(a.read(), b.read())

    def test_default_path_from_settings(self):
        with patch.dict(os.environ, {'P2PTESTBED_DATA_DIR': self.tmp.name}):
            self.assertEqual(generate_main(['4']), 0)
        self.assertTrue(os.path.exists(
            os.path.join(self.tmp.name, 'inputs-new', 'input-data-5.json')))

    def test_non_integer_uses_default(self):
        env = {'P2PTESTBED_DATA_DIR': self.tmp.name, 'P2PTESTBED_DEFAULT_PEERS': '1'}
        with patch.dict(os.environ, env):
            with self.assertLogs('p2ptestbed.cli', level='WARNING'):
                self.assertEqual(generate_main(['abc']), 0)
        self.assertTrue(os.path.exists(
            os.path.join(self.tmp.name, 'inputs-new', 'input-data-2.json')))

    def test_non_integer_seed_is_ignored(self):
        path = os.path.join(self.tmp.name, 'topology.json')
        with self.assertLogs('p2ptestbed.cli', level='WARNING') as logs:
            self.assertEqual(generate_main(['2', '--seed', 'abc', '-o', path]), 0)
        self.assertIn("abc", logs.output[0])
        self.assertTrue(os.path.exists(path))

    def test_extra_arguments_are_ignored(self):
        path = os.path.join(self.tmp.name, 'topology.json')
        with self.assertLogs('p2ptestbed.cli', level='WARNING'):
            self.assertEqual(generate_main(['2', 'extra', '-o', path]), 0)

        with open(path) as f:
            data = json.load(f)
        self.assertEqual(len(data['peers']), 3)

    def test_write_failure_still_exits_zero(self):
        blocker = os.path.join(self.tmp.name, 'blocker')
        with open(blocker, 'w') as f:
            f.write('not a directory')
        path = os.path.join(blocker, 'topology.json')

        with self.assertLogs('p2ptestbed.cli', level='ERROR'):
            self.assertEqual(generate_main(['1', '-o', path]), 0)


class AnalyzeCommandTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write_output(self, folder, peer_count, data):
        directory = os.path.join(self.tmp.name, folder)
        os.makedirs(directory)
        path = os.path.join(directory, f'output-data-{peer_count}.json')
        with open(path, 'w') as f:
            json.dump(data, f)
        return path

    def test_prints_report(self):
        path = self.write_output('outputs-with-superpeer', 3, {
            'superpeers': [{'name': '1'}],
            'peer2peer': [
                {'sourceName': HUB_NAME, 'targetName': '1'},
                {'sourceName': '1', 'targetName': '2'},
                {'sourceName': '1', 'targetName': '3'},
            ]
        })
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(analyze_main(['-i', path]), 0)
        self.assertIn(f"{HUB_NAME} -> 1", out.getvalue())
        self.assertIn("1 -> ['2', '3']", out.getvalue())

    def test_selects_folder_from_flag(self):
        self.write_output('outputs-without-superpeer', 8, {
            'peer2peer': [{'sourceName': HUB_NAME, 'targetName': '4'}]
        })
        out = io.StringIO()
        with patch.dict(os.environ, {'P2PTESTBED_DATA_DIR': self.tmp.name}):
            with redirect_stdout(out):
                self.assertEqual(analyze_main(['8', 'false']), 0)
        self.assertIn(f"{HUB_NAME} -> 4", out.getvalue())

    def test_extra_arguments_are_ignored(self):
        path = self.write_output('outputs-with-superpeer', 2, {
            'peer2peer': [{'sourceName': HUB_NAME, 'targetName': '1'}]
        })
        out = io.StringIO()
        with self.assertLogs('p2ptestbed.cli', level='WARNING'):
            with redirect_stdout(out):
                self.assertEqual(analyze_main(['2', 'true', 'surplus', '-i', path]), 0)
        self.assertIn(f"{HUB_NAME} -> 1", out.getvalue())

    def test_unreadable_encoding_exits_non_zero(self):
        path = os.path.join(self.tmp.name, 'latin1.json')
        with open(path, 'wb') as f:
            f.write(b'{"superpeers": [{"name": "\xff"}]}')
        with self.assertLogs('p2ptestbed.cli', level='ERROR'):
            self.assertEqual(analyze_main(['-i', path]), 1)

    def test_missing_file_exits_non_zero(self):
        with patch.dict(os.environ, {'P2PTESTBED_DATA_DIR': self.tmp.name}):
            with self.assertLogs('p2ptestbed.cli', level='ERROR'):
                self.assertEqual(analyze_main(['35', 'true']), 1)


if __name__ == '__main__':
    unittest.main()
