"""Registration, password login and OAuth identity sync."""

import hmac
import logging

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import (
    DuplicateEmailError,
    InternalError,
    InvalidCredentialsError,
    UnauthorizedError,
    ValidationError,
    persistence_errors,
)
from src.models.enums import AuthProvider, Role
from src.models.mixins import utcnow
from src.models.user import User, generate_id
from src.services.passwords import get_password_hash, verify_password
from src.services.tokens import create_access_token

logger = logging.getLogger(__name__)

settings = get_settings()


def normalize_email(email: str) -> str:
    """Emails are stored and looked up lowercase."""
    return email.strip().lower()


def issue_token_for(user: User) -> str:
    """Create an access token carrying the user's identity claims."""
    return create_access_token(user.id, user.email, user.role or Role.USER.value)


class IdentityService:
    """Service for account lookup, creation and sign-in."""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by (normalized) email."""
        with persistence_errors(self.db, "Unable to look up user"):
            return (
                self.db.query(User).filter(User.email == normalize_email(email)).first()
            )

    def register(
        self, name: str | None, email: str | None, password: str | None
    ) -> tuple[User, str]:
        """Create a credentials account and sign it in."""
        normalized = normalize_email(email or "")
        if not name or not normalized or not password:
            raise ValidationError("Name, email, and password are required")

        if self.get_user_by_email(normalized):
            raise DuplicateEmailError()

        now = utcnow()
        user = User(
            name=name,
            email=normalized,
            password_hash=get_password_hash(password),
            role=Role.USER.value,
            provider=AuthProvider.CREDENTIALS.value,
            created_at=now,
            updated_at=now,
        )
        with persistence_errors(self.db, "Unable to register user"):
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError as e:
                # Lost a race with a concurrent registration for the same email
                self.db.rollback()
                raise DuplicateEmailError() from e
            self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, issue_token_for(user)

    def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Authenticate a user by email and password."""
        if not email or not email.strip() or not password:
            raise ValidationError("Email and password are required")

        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user, issue_token_for(user)

    def oauth_sync(
        self,
        email: str | None,
        name: str | None,
        provider: str | None,
        internal_key: str | None,
    ) -> tuple[User, str]:
        """Find-or-create the account for an OAuth identity and sign it in.

        The upsert is a single INSERT ... ON CONFLICT statement keyed on the
        unique email index, so concurrent first sign-ins resolve to one row.
        ``created_at`` is written only on insert and the password hash is
        never touched.
        """
        if not internal_key or not hmac.compare_digest(
            internal_key.encode(), settings.internal_api_key.encode()
        ):
            raise UnauthorizedError("Unauthorized request")
        normalized = normalize_email(email or "")
        if not normalized or not name:
            raise ValidationError("Email and name are required")

        now = utcnow()
        insert = self._dialect_insert()
        stmt = insert(User).values(
            id=generate_id(),
            name=name,
            email=normalized,
            provider=provider or AuthProvider.GOOGLE.value,
            role=Role.USER.value,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.email],
            set_={
                "name": stmt.excluded.name,
                "provider": stmt.excluded.provider,
                "role": stmt.excluded.role,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(User.id)

        with persistence_errors(self.db, "Unable to sync OAuth user"):
            user_id = self.db.execute(stmt).scalar_one_or_none()
            self.db.commit()
            user = None
            if user_id is not None:
                user = self.db.execute(
                    select(User)
                    .where(User.id == user_id)
                    .execution_options(populate_existing=True)
                ).scalar_one_or_none()

        if user is None:
            logger.error(f"OAuth upsert returned no document for {normalized}")
            raise InternalError("Failed to retrieve user after sync")

        logger.info(f"Synced OAuth user {user.id} via {user.provider}")
        return user, issue_token_for(user)

    def _dialect_insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        logger.error(f"No upsert support for database dialect {dialect}")
        raise InternalError("Unable to sync OAuth user")
