import unittest

from pensum_tracker.database import Database


class DatabaseTestCase(unittest.TestCase):
    """每个测试使用独立的内存 SQLite 数据库"""

    def setUp(self):
        self.db = Database('sqlite://')
        self.db.create_tables()
        self.session = self.db.get_session()

    def tearDown(self):
        self.session.close()
        self.db.engine.dispose()
