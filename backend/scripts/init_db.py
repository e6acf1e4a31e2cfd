"""HR 출입 관리 DB 스키마를 생성합니다.

출입 기록의 부분 유니크 인덱스도 함께 만들어지므로, 기존 DB에 처음 적용할 때는
같은 날 열린 상근 기록이 둘 이상 남아 있지 않은지 먼저 확인해야 합니다.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hr_admin.config import settings
from hr_admin.database import engine, Base
import hr_admin.models  # noqa: F401 - registers all models


def init_db():
    print(f"Creating tables on {engine.dialect.name} (timezone {settings.TIMEZONE})...")
    Base.metadata.create_all(bind=engine)
    for table in Base.metadata.sorted_tables:
        print(f"  - {table.name}")
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
