"""
Create a Creator account. Signup only ever produces Consumers, so uploaders are provisioned here.

    python create_creator.py --name "Studio" --email studio@example.com --password s3cret!
"""
import argparse
import logging

from echovid.config import get_settings
from echovid.database import Database
from echovid.errors import Conflict
from echovid.models.user import UserRole
from echovid.repositories.user_repository import create_user
from echovid.schemas.user import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)


def create_creator(database: Database, name: str, email: str, password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    db = database.SessionLocal()
    try:
        user = create_user(db, name, email, password, UserRole.CREATOR)
        return user.id
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an EchoVid Creator account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    database = Database(get_settings().database_url)
    try:
        user_id = create_creator(database, args.name, args.email, args.password)
    except (Conflict, ValueError) as e:
        logger.error("Could not create creator: %s", e)
        return 1
    finally:
        database.dispose()
    logger.info("Creator %s created with id %s", args.email, user_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
