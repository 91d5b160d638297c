"""
数据库连接管理
"""
import os
from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv
from pensum_tracker.models import Base

# 加载 .env 文件中的环境变量
load_dotenv()

DEFAULT_DATABASE_URL = 'sqlite:///pensum.db'

_MYSQL_VARS = ('DB_HOST', 'DB_NAME', 'DB_USER', 'DB_PASSWORD')


def resolve_database_url(database_url=None):
    """
    确定数据库连接 URL

    优先级：
      1. 显式传入的 database_url
      2. 环境变量 DATABASE_URL
      3. DB_HOST / DB_PORT / DB_NAME / DB_USER / DB_PASSWORD → MySQL
      4. 默认本地 SQLite 文件

    Raises:
        ValueError: 只配置了部分 DB_* 变量
    """
    if database_url:
        return database_url

    env_url = os.getenv('DATABASE_URL')
    if env_url:
        return env_url

    values = {name: os.getenv(name) for name in _MYSQL_VARS}
    configured = [name for name, value in values.items() if value]
    if not configured:
        return DEFAULT_DATABASE_URL

    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(
            "数据库配置不完整！请检查 .env 文件是否包含所有必需的配置：\n"
            f"缺少 {', '.join(missing)}"
        )

    db_port = os.getenv('DB_PORT', '3306')
    return (
        f"mysql+pymysql://{values['DB_USER']}:{values['DB_PASSWORD']}"
        f"@{values['DB_HOST']}:{db_port}/{values['DB_NAME']}"
    )


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite 默认不执行外键约束
    if type(dbapi_connection).__module__.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """数据库连接管理类"""

    def __init__(self, database_url=None):
        self.url = resolve_database_url(database_url)
        self.engine = None
        self.Session = None
        self._init_engine()

    def _init_engine(self):
        """初始化数据库引擎"""
        options = {'echo': False}  # 设置为 True 可以看到所有 SQL 语句（调试用）
        if self.url.startswith('mysql'):
            options['pool_pre_ping'] = True   # 连接前先 ping，确保连接有效
            options['pool_recycle'] = 3600    # 1小时后回收连接

        self.engine = create_engine(self.url, **options)

        # 创建 Session 类
        self.Session = sessionmaker(bind=self.engine)

    def test_connection(self):
        """测试数据库连接"""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                print(f"✓ 数据库连接成功！({self.engine.dialect.name})")
                return True
        except Exception as e:
            print(f"✗ 数据库连接失败: {e}")
            return False

    def create_tables(self):
        """创建所有数据表（仅创建不存在的表）"""
        try:
            Base.metadata.create_all(self.engine)
            # 验证关键表是否存在
            existing_tables = inspect(self.engine).get_table_names()
            expected_tables = [t.name for t in Base.metadata.sorted_tables]
            missing = [t for t in expected_tables if t not in existing_tables]
            if missing:
                print(f"⚠️ 以下表未创建成功: {missing}")
                return False
            print(f"✓ 数据表创建/确认成功！共 {len(expected_tables)} 张表")
            return True
        except Exception as e:
            print(f"✗ 创建数据表失败: {e}")
            return False

    def reset_tables(self):
        """删除并重建所有数据表（危险操作！会清空所有数据）"""
        try:
            print("正在删除所有表...")
            Base.metadata.drop_all(self.engine)
            print("正在重建所有表...")
            Base.metadata.create_all(self.engine)
            print("✓ 数据表重建成功！")
            return True
        except Exception as e:
            print(f"✗ 重建数据表失败: {e}")
            return False

    def get_session(self):
        """获取数据库会话"""
        return self.Session()
