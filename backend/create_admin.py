"""
Create a platform administrator account (application reviewer).

Usage: python create_admin.py admin@example.com
"""

import getpass
import sys

from storefront.database import init_db, get_db_context
from storefront.models.user import UserRole
from storefront.services.auth_service import auth_service

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    email = sys.argv[1]
    password = getpass.getpass("Password: ")

    init_db()
    with get_db_context() as db:
        user = auth_service.create_user(db, email=email, password=password, role=UserRole.ADMIN)
        print(f"Admin created: id={user.id} email={user.email}")
