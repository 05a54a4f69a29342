"""
创建数据库表
"""
from thumbnail_studio.core.database import init_db

if __name__ == "__main__":
    init_db()

    print("✅ 数据库表创建完成")
