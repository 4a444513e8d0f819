# ==============================================================================
# ACCOUNT SERVICE - Registration, Authentication & Profiles
# ==============================================================================
# Business logic for accounts and token issuance
# ==============================================================================

from __future__ import annotations

import logging
from typing import List, Optional

from thinklock.core.constants import ErrorMessages, Projections, Role
from thinklock.core.exceptions import AlreadyExistsError, AuthenticationError, NotFoundError
from thinklock.core.security import create_access_token, hash_password, verify_password
from thinklock.core.settings import settings
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter
from thinklock.database.repositories.account_repository import AccountRepository
from thinklock.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    Credentials,
    InstructorProfile,
    TokenResponse,
)
from thinklock.services.base_service import BaseService
from thinklock.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """
    Account service for registration, token issuance and profile management.

    Accounts are keyed by an externally supplied identifier. The stored
    role is the one every authorization check consults.
    """

    def __init__(self, adapter: MongoDBAdapter) -> None:
        super().__init__(adapter)
        self._accounts = AccountRepository(adapter)

    # ==========================================================================
    # AUTHENTICATION
    # ==========================================================================

    async def register(self, schema: AccountCreate) -> AccountResponse:
        """
        Register a new student or instructor account.

        Args:
            schema: Registration data

        Returns:
            Created account

        Raises:
            AlreadyExistsError: If the identifier is taken
        """
        document = schema.model_dump(exclude={"id", "password"})
        document["_id"] = schema.id
        document["hashed_password"] = hash_password(schema.password)
        document["courses"] = []
        document["created_at"] = utc_now()

        try:
            created = await self._accounts.insert(document)
        except AlreadyExistsError:
            raise AlreadyExistsError(
                message=ErrorMessages.ACCOUNT_EXISTS,
                resource_type="account",
            )

        logger.info(f"Registered {schema.role} account {schema.id}")
        return self._to_response(AccountResponse, created)

    async def authenticate(self, credentials: Credentials) -> TokenResponse:
        """
        Verify credentials and issue an access token.

        Args:
            credentials: Account identifier and password

        Returns:
            Access token whose claims mirror the stored account

        Raises:
            AuthenticationError: If the identifier is unknown or the password is wrong
        """
        account = await self._accounts.get_credentials(credentials.id)
        if not account or not verify_password(
            credentials.password, account.get("hashed_password")
        ):
            logger.warning(f"Failed token request for {credentials.id}")
            raise AuthenticationError(message=ErrorMessages.INVALID_CREDENTIALS)

        token = create_access_token(subject=account["id"], role=account["role"])
        return TokenResponse(
            access_token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

    async def ensure_admin(
        self,
        account_id: str,
        password: str,
        email: Optional[str] = None,
    ) -> None:
        """
        Create the bootstrap admin account when it does not exist yet.

        An existing account under the same identifier is left untouched.
        """
        existing = await self._accounts.get_by_id(account_id)
        if existing:
            if existing.get("role") != Role.ADMIN.value:
                logger.warning(
                    f"Bootstrap admin id {account_id} belongs to a {existing.get('role')} account"
                )
            return

        await self._accounts.insert({
            "_id": account_id,
            "role": Role.ADMIN.value,
            "name": "Administrator",
            "email": email,
            "hashed_password": hash_password(password),
            "courses": [],
            "created_at": utc_now(),
        })
        logger.info(f"Created bootstrap admin account {account_id}")

    # ==========================================================================
    # ACCOUNT MANAGEMENT
    # ==========================================================================

    async def list_accounts(self) -> List[AccountResponse]:
        return self._to_responses(AccountResponse, await self._accounts.find())

    async def get_account(self, account_id: str) -> AccountResponse:
        """
        Raises:
            NotFoundError: If the account does not exist
        """
        account = self._require(
            await self._accounts.get_by_id(account_id),
            ErrorMessages.ACCOUNT_NOT_FOUND,
            "account",
            account_id,
        )
        return self._to_response(AccountResponse, account)

    async def admin_update(self, account_id: str, schema: AccountUpdate) -> AccountResponse:
        """
        Update role or profile fields of an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        fields = schema.model_dump(exclude_unset=True, exclude_none=True)
        if fields:
            matched = await self._accounts.update_by_id(account_id, {"$set": fields})
            if not matched:
                raise NotFoundError(
                    message=ErrorMessages.ACCOUNT_NOT_FOUND,
                    resource_type="account",
                    resource_id=account_id,
                )
            logger.info(f"Account {account_id} updated: {sorted(fields)}")
        return await self.get_account(account_id)

    # ==========================================================================
    # INSTRUCTORS
    # ==========================================================================

    async def list_instructors(self) -> List[InstructorProfile]:
        instructors = await self._accounts.list_by_role(
            Role.INSTRUCTOR, projection=Projections.PUBLIC_PROFILE
        )
        return self._to_responses(InstructorProfile, instructors)

    async def get_instructor(self, instructor_id: str) -> InstructorProfile:
        """Public profile of one instructor; NotFoundError when absent."""
        instructor = self._require(
            await self._accounts.get_with_role(
                instructor_id, Role.INSTRUCTOR, projection=Projections.PUBLIC_PROFILE
            ),
            ErrorMessages.INSTRUCTOR_NOT_FOUND,
            "instructor",
            instructor_id,
        )
        return self._to_response(InstructorProfile, instructor)

    async def admin_get_instructor(self, instructor_id: str) -> AccountResponse:
        instructor = self._require(
            await self._accounts.get_with_role(instructor_id, Role.INSTRUCTOR),
            ErrorMessages.INSTRUCTOR_NOT_FOUND,
            "instructor",
            instructor_id,
        )
        return self._to_response(AccountResponse, instructor)
