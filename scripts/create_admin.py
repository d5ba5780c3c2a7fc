"""Create (or promote) an ADMIN user and print a bearer token for it (Postgres only).

Usage:
    uv run python -m scripts.create_admin <user_id> [email]
The user id is the identity-provider subject; the token is signed with
SECRET_KEY and expires after ACCESS_TOKEN_EXPIRE_MINUTES.
"""

import asyncio
import sys

from app.application.dtos.user import UserUpsert
from app.core.config import get_settings
from app.domain.enums import UserRole
from app.infrastructure.security.jwt import create_user_token
from app.infrastructure.store_factory import open_store


async def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.create_admin <user_id> [email]",
            file=sys.stderr,
        )
        sys.exit(1)
    user_id = sys.argv[1]
    email = sys.argv[2] if len(sys.argv) > 2 else None

    settings = get_settings()
    if settings.database_backend != "postgres":
        print("DATABASE_BACKEND must be postgres", file=sys.stderr)
        sys.exit(1)

    async with open_store(settings) as store:
        user = await store.users.upsert(UserUpsert(id=user_id, email=email))
        roles = list(dict.fromkeys([*user.roles, UserRole.ADMIN.value]))
        await store.users.update_roles(user_id, roles)

    print(f"Admin user: {user_id} roles={roles}")
    print(f"Token: {create_user_token(user_id, email=email)}")


if __name__ == "__main__":
    asyncio.run(main())
