import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.database import Base, SessionLocal, engine
from api.attendees.attendees_service import AttendeeService


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        added = AttendeeService(db).seed_sample_registry()
    finally:
        db.close()

    if added:
        print(f"✅ Seeded {added} registry records")
    else:
        print("ℹ️ Registry already has records; nothing seeded")


if __name__ == "__main__":
    main()
