#!/usr/bin/env python3
"""
Pensum 数据导入脚本
从 YAML 文件读取课程（可带学期名称）并导入到指定学生

使用方法：
  python scripts/import_pensum.py --student 1 data/pensum/ana.yml
  python scripts/import_pensum.py --student 1 --all
  python scripts/import_pensum.py --validate
  python scripts/import_pensum.py --validate data/pensum/ana.yml
"""
import sys
import os
import argparse
import glob

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pensum_tracker.database import Database
from pensum_tracker.main import run_validate
from pensum_tracker.services import PensumService, StudentService, NotFoundError

DATA_DIR = os.path.join(os.path.dirname(__file__), '..', 'data', 'pensum')


def find_yaml_files(paths=None):
    """
    查找 YAML 文件

    Args:
        paths: 指定的文件路径列表；None 表示 data/pensum/ 下的所有 .yml

    Returns:
        list: 存在的 YAML 文件路径
    """
    if paths:
        files = []
        for path in paths:
            if os.path.exists(path):
                files.append(path)
            else:
                print(f"⚠️ 未找到 YAML 文件: {path}")
        return files
    return sorted(glob.glob(os.path.join(DATA_DIR, '*.yml')))


def parse_args():
    parser = argparse.ArgumentParser(
        description='导入 pensum 数据（从 YAML 文件）',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python scripts/import_pensum.py --student 1 data/pensum/ana.yml   # 导入指定文件
  python scripts/import_pensum.py --student 1 --all                 # 导入 data/pensum/ 下所有文件
  python scripts/import_pensum.py --validate                        # 校验所有 YAML 文件（不需要数据库）
        """
    )
    parser.add_argument('--student', type=int, help='目标学生 ID')
    parser.add_argument('--database-url', help='数据库连接 URL')

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        '--all',
        action='store_true',
        help='导入 data/pensum/ 目录下的所有 YAML 文件'
    )
    group.add_argument(
        '--validate',
        action='store_true',
        help='仅校验 YAML 文件格式，不写入数据库'
    )
    parser.add_argument('files', nargs='*', help='YAML 文件路径')

    args = parser.parse_args()
    if not args.validate and args.student is None:
        parser.error('导入时必须指定 --student')
    if not args.validate and not args.all and not args.files:
        parser.error('请指定 YAML 文件或使用 --all')
    return args


def main():
    args = parse_args()

    if args.validate:
        yaml_files = find_yaml_files(args.files)
        if not yaml_files:
            print("没有找到任何 YAML 文件")
            return
        if not run_validate(yaml_files):
            sys.exit(1)
        return

    print("=" * 60)
    print("Pensum 数据导入")
    print("=" * 60)

    yaml_files = find_yaml_files(None if args.all else args.files)
    if not yaml_files:
        print("\n没有找到任何 YAML 文件")
        return

    print(f"找到 {len(yaml_files)} 个 YAML 文件:")
    for path in yaml_files:
        print(f"  • {path}")
    print()

    print("初始化数据库连接...")
    db = Database(args.database_url)
    if not db.test_connection():
        print("\n数据库连接失败，请检查 .env 配置")
        return

    if not db.create_tables():
        print("\n数据表创建失败，程序终止")
        return
    print()

    session = db.get_session()
    try:
        student = StudentService(session).get_student(args.student)
    except NotFoundError as e:
        print(f"✗ {e}")
        session.close()
        sys.exit(1)
    print(f"目标学生: [{student.id}] {student.name}")

    service = PensumService(session)
    success_count = 0
    fail_count = 0

    for idx, yaml_path in enumerate(yaml_files, 1):
        print(f"\n[{idx}/{len(yaml_files)}] 导入 {os.path.basename(yaml_path)}")
        print("-" * 60)
        try:
            service.import_from_yaml(student.id, yaml_path)
            success_count += 1
        except Exception as e:
            print(f"✗ 导入 {yaml_path} 失败: {e}")
            import traceback
            traceback.print_exc()
            fail_count += 1

    session.close()

    print("\n" + "=" * 60)
    print(f"导入完成！成功: {success_count}, 失败: {fail_count}")
    print("=" * 60)


if __name__ == "__main__":
    main()
