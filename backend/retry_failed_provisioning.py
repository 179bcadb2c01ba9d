"""
Operator tool: retry store provisioning for approved applications whose
store setup failed.

Usage: python retry_failed_provisioning.py [--dry-run]
"""

import argparse
import logging

from storefront.database import init_db, get_db_context
from storefront.services.application_service import application_service

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="only list failed applications")
    args = parser.parse_args()

    init_db()
    with get_db_context() as db:
        failed = application_service.list_failed_provisioning(db)
        if not failed:
            print("No failed provisioning found.")
            return

        for application in failed:
            print(f"{application.id} merchant={application.merchant_id} error={application.provisioning_error}")
            if not args.dry_run:
                result = application_service.retry_provisioning(db, application.id)
                print(f"  -> {result}")


if __name__ == "__main__":
    main()
