"""

Bootstrap script for the first officer account.

- meant to be run once when the server is first set up
- reads the OFFICER_* environment variables defined in .env and creates
  an officer account with a freshly issued officer membership ID
- exits without changes when an officer account already exists

Why it exists:
- officer accounts can only be created by another officer through the
  API, so the very first one has to be created here

Usage
- activate the virtualenv
- (.venv) ~\backend~$ python -m scripts.create_officer

"""

import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from msc_api.db.session import SessionLocal
from msc_api.models.account import Account, Role
from msc_api.services.accounts import create_account



def main():
    db = SessionLocal()
    try:
        exists = db.scalar(
            select(Account).where(Account.role == Role.OFFICER)
        )
        if exists:
            print(f"Officer account already exists ({exists.membership_id}). Skip creation.")
            return

        account = create_account(
            db,
            username=os.environ["OFFICER_USERNAME"],
            email=os.environ["OFFICER_EMAIL"],
            password=os.environ["OFFICER_PASSWORD"],
            role=Role.OFFICER,
            first_name=os.environ.get("OFFICER_FIRST_NAME", "Org"),
            last_name=os.environ.get("OFFICER_LAST_NAME", "Officer"),
        )
        db.commit()

        print(f"Officer created: {account.username} ({account.membership_id})")

    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
