"""
Create an admin user from the command line. Run from project root:
  python -m app.scripts.create_admin USERNAME EMAIL PASSWORD [--bootstrap]
Example:
  python -m app.scripts.create_admin alice alice@example.com your-secure-password
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.errors import EmailTakenError, StoreFailureError, UsernameTakenError
from app.core.logging_config import configure_logging
from app.repositories.blacklist import BlacklistRepository
from app.repositories.users import UserRepository
from app.schemas.auth import CreateAdminRequest
from app.services.auth_service import AuthService
from app.services.token_codec import TokenCodec


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a CMS admin user (no registration UI).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "--bootstrap",
        action="store_true",
        help="Also create the default super admin if it does not exist yet",
    )
    args = parser.parse_args(argv)

    try:
        request = CreateAdminRequest(
            username=args.username.strip(),
            email=args.email.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    settings = get_settings()
    configure_logging(settings)
    with session_scope() as db:
        service = AuthService(
            UserRepository(db),
            BlacklistRepository(db),
            TokenCodec.from_settings(settings),
            settings,
        )
        try:
            if args.bootstrap:
                service.create_default_superadmin()
            user = service.create_admin(request)
        except (UsernameTakenError, EmailTakenError) as e:
            print(e.message, file=sys.stderr)
            return 1
        except StoreFailureError:
            print("Database error while creating the admin; see logs.", file=sys.stderr)
            return 1
        print(f"Created admin '{user.username}' (id={user.id}).")
        return 0


if __name__ == "__main__":
    sys.exit(main())
