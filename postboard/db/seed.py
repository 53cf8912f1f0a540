"""Demo data: ``python -m postboard.db.seed``."""

import logging

from sqlalchemy.orm import Session

from postboard.core.config import get_settings
from postboard.core.logging import setup_logging
from postboard.core.security import hash_password
from postboard.crud import comment as comment_crud
from postboard.crud import like as like_crud
from postboard.crud import post as post_crud
from postboard.crud import user as user_crud
from postboard.db.session import Database

logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"

SEED_USERS = [
    {
        "username": "john.doe",
        "fullname": "John Doe",
        "posts": [
            ("First post content", ["sample1.jpg", "sample2.jpg"]),
            ("Second post content", ["sample3.jpg"]),
        ],
    },
    {
        "username": "jane.doe",
        "fullname": "Jane Doe",
        "posts": [
            ("Jane's first post", ["sample4.jpg"]),
        ],
    },
]


def seed(db: Session) -> bool:
    """Insert the demo users, posts, likes and comments. Returns False if already seeded."""
    if user_crud.get_by_username(db, SEED_USERS[0]["username"]):
        logger.info("Seed data already present, skipping")
        return False

    hashed_password = hash_password(SEED_PASSWORD)
    users, posts = [], []
    for entry in SEED_USERS:
        user = user_crud.create_user(db, entry["username"], hashed_password, entry["fullname"])
        users.append(user)
        for content, files in entry["posts"]:
            posts.append(post_crud.create_post(db, user_id=user.id, content=content, filenames=files))

    john, jane = users
    like_crud.create_like(db, user_id=john.id, post_id=posts[0].id)
    like_crud.create_like(db, user_id=jane.id, post_id=posts[0].id)
    like_crud.create_like(db, user_id=john.id, post_id=posts[1].id)

    comment_crud.create_comment(db, user_id=john.id, post_id=posts[0].id, content="Nice post!")
    comment_crud.create_comment(db, user_id=jane.id, post_id=posts[1].id, content="Great content!")

    logger.info("Seeded %d users and %d posts", len(users), len(posts))
    return True


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    database = Database(settings.database_url)
    database.create_all()
    db = database.session()
    try:
        seed(db)
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    main()
