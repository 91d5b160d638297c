import os
import unittest
from unittest import mock

from pensum_tracker.database import DEFAULT_DATABASE_URL, Database, resolve_database_url


class ResolveDatabaseUrlTests(unittest.TestCase):
    def test_explicit_url_wins(self):
        with mock.patch.dict(os.environ, {'DATABASE_URL': 'sqlite:///other.db'}, clear=True):
            self.assertEqual(resolve_database_url('sqlite://'), 'sqlite://')

    def test_database_url_env(self):
        with mock.patch.dict(os.environ, {'DATABASE_URL': 'sqlite:///other.db'}, clear=True):
            self.assertEqual(resolve_database_url(), 'sqlite:///other.db')

    def test_default_sqlite(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(resolve_database_url(), DEFAULT_DATABASE_URL)

    def test_mysql_from_parts(self):
        env = {'DB_HOST': 'db', 'DB_NAME': 'pensum', 'DB_USER': 'ana', 'DB_PASSWORD': 'pw'}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(resolve_database_url(), 'mysql+pymysql://ana:pw@db:3306/pensum')
        env['DB_PORT'] = '3307'
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(resolve_database_url(), 'mysql+pymysql://ana:pw@db:3307/pensum')

    def test_incomplete_mysql_config(self):
        with mock.patch.dict(os.environ, {'DB_HOST': 'db', 'DB_USER': 'ana'}, clear=True):
            with self.assertRaises(ValueError) as ctx:
                resolve_database_url()
        self.assertIn('DB_NAME', str(ctx.exception))
        self.assertIn('DB_PASSWORD', str(ctx.exception))


class DatabaseTests(unittest.TestCase):
    def test_create_tables_in_memory(self):
        db = Database('sqlite://')
        self.assertTrue(db.test_connection())
        self.assertTrue(db.create_tables())
        self.assertTrue(db.reset_tables())
        db.engine.dispose()
