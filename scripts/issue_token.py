import os
import sys
import argparse
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.database import SessionLocal
from api.attendees.attendees_service import AttendeeService
from helpers.token_helper import create_user_token


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print a bearer token for a registered email")
    parser.add_argument("email")
    parser.add_argument("--hours", type=int, default=None, help="Token lifetime in hours")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = AttendeeService(db).find_by_email(args.email)
        if not user:
            print(f"❌ No record for {args.email}", file=sys.stderr)
            return 1
        print(create_user_token(user, args.hours))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
