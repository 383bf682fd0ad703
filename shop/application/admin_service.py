"""Admin authentication service.

Checks a submitted administrator credential against either a single
configured secret or a stored account. Passwords are compared by plain
equality in both backends; nothing is hashed and no session is issued.
Each successful check gates exactly one request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import structlog

from shop.catalog.repository import AdminAccountRepository
from shop.domain.entities import AdminAccount
from shop.domain.exceptions import UnauthorizedError

logger = structlog.get_logger()


@dataclass(frozen=True)
class AdminCredential:
    """Credential submitted by a client.

    Attributes:
        password: Submitted password or secret.
        username: Submitted username (used by the account backend only).
    """

    password: str = field(repr=False)
    username: str | None = None


class AdminGate(ABC):
    """Credential check performed before mutating operations."""

    @abstractmethod
    async def authenticate(self, credential: AdminCredential) -> bool:
        """Check a credential.

        Args:
            credential: Submitted credential.

        Returns:
            True if the credential is accepted.
        """

    async def require(self, credential: AdminCredential | None) -> None:
        """Check a credential and raise if it is missing or rejected.

        Raises:
            UnauthorizedError: If the credential is not accepted.
        """
        if credential is None:
            raise UnauthorizedError("Missing admin credentials")
        if not await self.authenticate(credential):
            logger.warning("Admin credential rejected", username=credential.username)
            raise UnauthorizedError()


class SecretAdminGate(AdminGate):
    """Accepts any credential whose password equals the configured secret."""

    def __init__(self, secret: str) -> None:
        self._secret = secret

    async def authenticate(self, credential: AdminCredential) -> bool:
        return credential.password == self._secret


class AccountAdminGate(AdminGate):
    """Accepts a credential matching a stored account's password."""

    def __init__(self, accounts: AdminAccountRepository) -> None:
        """Initialize gate.

        Args:
            accounts: Store of admin accounts.
        """
        self._accounts = accounts

    async def authenticate(self, credential: AdminCredential) -> bool:
        if not credential.username:
            return False
        account = await self._accounts.find_by_username(credential.username)
        if account is None:
            return False
        return account.password == credential.password


async def ensure_admin_account(
    accounts: AdminAccountRepository,
    username: str,
    password: str,
) -> bool:
    """Create the configured admin account if it does not exist yet.

    Args:
        accounts: Store of admin accounts.
        username: Account username.
        password: Account password.

    Returns:
        True if an account was created.
    """
    if await accounts.find_by_username(username) is not None:
        return False
    await accounts.save(AdminAccount(username=username, password=password))
    logger.info("Admin account created", username=username)
    return True
