"""Seed the database with default accounts and sample commuting members."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hr_admin.database import SessionLocal, engine, Base
import hr_admin.models  # noqa: F401

from hr_admin.models.user import AppUser
from hr_admin.models.personnel import Personnel, CommutingMember
from hr_admin.utils.permissions import ADMIN, GUARD, HR


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(AppUser).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            AppUser(username="admin", password="admin", full_name="관리자", role=ADMIN),
            AppUser(username="hr", password="hr", full_name="인사 담당자", role=HR),
            AppUser(username="guard", password="guard", full_name="정문 경비원", role=GUARD),
        ]
        db.add_all(users)

        personnel = [
            Personnel(personnel_code="1001", first_name="Ali", last_name="Rezaei",
                      department="Production", position="Operator"),
            Personnel(personnel_code="1002", first_name="Sara", last_name="Karimi",
                      department="Finance", position="Accountant"),
        ]
        db.add_all(personnel)

        members = [
            CommutingMember(personnel_code="1001", full_name="Ali Rezaei",
                            department="Production", position="Operator"),
            CommutingMember(personnel_code="1002", full_name="Sara Karimi",
                            department="Finance", position="Accountant"),
        ]
        db.add_all(members)
        db.commit()
        print("Seed data created.")
        print("  Accounts: admin/admin, hr/hr, guard/guard")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
