"""Bootstrap the first super admin from the command line.

Usage: python scripts/init_super_admin.py user@example.com

The user must already be registered. Refuses to run once a super admin exists.
"""

import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from marketplace.infrastructure.database import Base, SessionLocal, engine
from marketplace.core.exceptions import AppError

# Import all models so SQLAlchemy knows about them
from marketplace.domain.models.admin_role import AdminRole
from marketplace.domain.models.category import Category
from marketplace.domain.models.listing import Listing
from marketplace.domain.models.message import Message
from marketplace.domain.models.saved_listing import SavedListing
from marketplace.domain.models.stored_file import StoredFile
from marketplace.domain.models.user import User

from marketplace.application.services.admin_service import initialize_super_admin
from marketplace.infrastructure.repositories.admin_role_repository import SQLAlchemyAdminRoleRepository
from marketplace.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def main(email: str) -> int:
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        result = initialize_super_admin(
            SQLAlchemyAdminRoleRepository(db, AdminRole),
            SQLAlchemyUserRepository(db, User),
            email,
        )
    except AppError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(result.message)
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__, file=sys.stderr)
        raise SystemExit(2)
    raise SystemExit(main(sys.argv[1].strip()))
