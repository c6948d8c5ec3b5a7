"""
Create a staff account (e.g. the first super-admin). Run from project root:
  python -m conference.scripts.create_staff EMAIL PASSWORD [role] [--first-name NAME] [--last-name NAME]
Example:
  python -m conference.scripts.create_staff admin@cisrai.com your-secure-password super-admin
"""
import argparse
import logging
import sys

from conference.core.database import session_scope
from conference.core.errors import AppError
from conference.schemas.auth import STAFF_ROLES
from conference.services.credentials import create_staff

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a back-office staff account.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="super-admin", choices=sorted(STAFF_ROLES))
    parser.add_argument("--first-name", default="System")
    parser.add_argument("--last-name", default="Administrator")
    args = parser.parse_args(argv)

    try:
        with session_scope() as db:
            staff = create_staff(
                db,
                email=args.email,
                password=args.password,
                first_name=args.first_name,
                last_name=args.last_name,
                role=args.role,
            )
            logger.info("Created staff account '%s' with role '%s'.", staff.email, staff.role)
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
