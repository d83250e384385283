"""User provisioning and profile management."""

from logging import getLogger

from sqlalchemy.exc import SQLAlchemyError

from cms.clients.protocols import IdentityClaims, IdentityProvider
from cms.configs import file_logger
from cms.errors import AuthorizationError, BaseAppError, ConflictError, ValidationError
from cms.models.user import UserDB
from cms.rbac.permissions import Role, get_role_permissions
from cms.repositories.user import UserRepository
from cms.schemas.auth import CurrentUser
from cms.schemas.user import UserCreate, UserUpdate
from cms.utils.helpers import utcnow

logger = file_logger(getLogger(__name__))

EMAIL_IN_USE = "Email address is already in use"
EMAIL_MISSING = "Email not found in token"
SELF_DEACTIVATION = "Cannot deactivate your own account"


def display_name_from_email(email: str) -> str:
    """Derive a display name from the email local part (``jane.doe`` -> ``jane doe``)."""
    local = email.split("@", 1)[0]
    return local.replace(".", " ").replace("_", " ")


def can_manage_user(actor: CurrentUser, target_uid: str) -> bool:
    """Users may manage their own profile; admins may manage anyone."""
    return actor.uid == target_uid or actor.role is Role.ADMIN


class UserService:
    """
    User directory operations.

    Args:
        users: User repository
        identity: Identity provider used to provision sign-in accounts
        admin_emails: Emails promoted to admin on first sign-in
    """

    def __init__(
        self,
        users: UserRepository,
        identity: IdentityProvider,
        admin_emails: frozenset[str] = frozenset(),
    ) -> None:
        self.users = users
        self.identity = identity
        self.admin_emails = admin_emails

    async def get(self, uid: str, actor: CurrentUser) -> UserDB:
        if not can_manage_user(actor, uid):
            raise AuthorizationError
        return await self.users.get_or_raise(uid)

    async def ensure_user(self, claims: IdentityClaims) -> tuple[UserDB, bool]:
        """
        Make sure a user record exists for a verified identity.

        New users become admins when their email is a bootstrap admin email
        and authors otherwise. Existing users only get ``last_login`` stamped.

        Args:
            claims: Verified token claims

        Returns:
            tuple[UserDB, bool]: The user record and whether it was created

        Raises:
            ValidationError: If the token carries no email
        """
        if not claims.email:
            raise ValidationError(EMAIL_MISSING)

        existing = await self.users.get_by_id(claims.uid)
        if existing is not None:
            return await self.users.touch_login(existing), False

        email = claims.email.lower()
        role = Role.ADMIN if email in self.admin_emails else Role.AUTHOR
        now = utcnow()
        user = UserDB(
            uid=claims.uid,
            email=email,
            display_name=claims.name or display_name_from_email(email),
            role=role,
            permissions=get_role_permissions(role),
            active=True,
            created_at=now,
            join_date=now,
            last_login=now,
        )
        user = await self.users.add(user)

        logger.info(f"Created {role} user {user.uid} on first sign-in")
        return user, True

    async def create_user(self, data: UserCreate, actor: CurrentUser) -> UserDB:
        """
        Provision an identity account and its user record.

        If the record cannot be stored, the freshly created identity account
        is removed again.

        Raises:
            ConflictError: If the email is already in use
            ValidationError: If the provider rejects the email
            IdentityProviderError: If the provider is unavailable
        """
        email = str(data.email).lower()
        if await self.users.email_taken(email):
            raise ConflictError(EMAIL_IN_USE)

        uid = await self.identity.create_account(
            email,
            data.password.get_secret_value(),
            data.display_name,
        )

        now = utcnow()
        user = UserDB(
            uid=uid,
            email=email,
            display_name=data.display_name,
            role=data.role,
            permissions=get_role_permissions(data.role),
            active=True,
            bio=data.bio,
            avatar=data.avatar,
            expertise=list(data.expertise),
            social=dict(data.social),
            created_at=now,
            join_date=now,
        )
        try:
            user = await self.users.add(user)
        except (BaseAppError, SQLAlchemyError):
            logger.warning(f"Rolling back identity account {uid} after failed user insert")
            await self.identity.delete_account(uid)
            raise

        logger.info(f"User {uid} created with role {data.role} by {actor.uid}")
        return user

    async def update_user(self, uid: str, data: UserUpdate, actor: CurrentUser) -> UserDB:
        """
        Apply a partial profile update.

        Users may edit their own profile fields. Only admins may change
        ``role`` or ``active``; a role change re-stamps the permission list.

        Raises:
            AuthorizationError: If the actor may not edit the target or its
                admin-only fields
            NotFoundError: If the user does not exist
        """
        if not can_manage_user(actor, uid):
            raise AuthorizationError

        changes = data.model_dump(exclude_unset=True)
        if UserUpdate.ADMIN_FIELDS & changes.keys() and actor.role is not Role.ADMIN:
            raise AuthorizationError

        user = await self.users.get_or_raise(uid)

        for field in ("display_name", "bio", "expertise", "social"):
            if field in changes and changes[field] is not None:
                setattr(user, field, changes[field])
        if "avatar" in changes:
            user.avatar = data.avatar

        if data.role is not None and data.role != user.role:
            user.role = data.role
            user.permissions = get_role_permissions(data.role)
        if data.active is not None:
            if not data.active and uid == actor.uid:
                raise ValidationError(SELF_DEACTIVATION)
            user.active = data.active

        user.updated_at = utcnow()
        return await self.users.save(user)

    async def deactivate(self, uid: str, actor: CurrentUser) -> UserDB:
        """
        Deactivate a user; records are never hard-deleted.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If an admin targets their own account
        """
        user = await self.users.get_or_raise(uid)
        if uid == actor.uid:
            raise ValidationError(SELF_DEACTIVATION)

        user.active = False
        user.updated_at = utcnow()
        user = await self.users.save(user)

        logger.info(f"User {uid} deactivated by {actor.uid}")
        return user
