"""Identity & agreement registry service (Use Cases).

Orchestrates registration, login sessions, profile edits, agreements and
the role-specific profile extensions (vendor inventory, transporter
verification).  Persistence is delegated to the injected
``IUserRepository``.

Business rules enforced here:
- Email is unique (case-insensitive) at registration.
- Deactivated users cannot log in.
- An agreement is written to both users under one lock keyed by the
  unordered pair; repeating it is a failure that changes nothing.
- Inventory belongs to vendors, verification to transporters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog
from django.contrib.auth.hashers import check_password, make_password

from modules.accounts.constants import (
    UNIQUE_ID_MAX_RETRIES,
    UserRole,
    VerificationStatus,
)
from modules.accounts.exceptions import InvalidVerificationState, RoleNotAllowed
from modules.accounts.models import InventoryItem, User, VerificationDetails
from modules.core.models import Address, OperationResult

if TYPE_CHECKING:
    from modules.accounts.dtos import (
        RegisterUserDTO,
        SubmitVerificationDTO,
        UpdateInventoryDTO,
        UpdateProfileDTO,
    )
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.accounts.sessions import SessionRegistry
    from modules.core.store import KeyedLockRegistry

logger = structlog.get_logger(__name__)


class AccountService:
    """Application service for the identity & agreement registry."""

    def __init__(
        self,
        user_repository: IUserRepository,
        sessions: SessionRegistry,
        locks: KeyedLockRegistry,
    ) -> None:
        self._user_repo = user_repository
        self._sessions = sessions
        self._locks = locks

    # ------------------------------------------------------------------
    # Registration & sessions
    # ------------------------------------------------------------------

    def register(self, dto: RegisterUserDTO) -> OperationResult:
        log = logger.bind(email=dto.email, role=dto.role)

        with self._locks.lock("email", dto.email):
            if self._user_repo.get_by_email(dto.email):
                log.warning("user.duplicate_email")
                return OperationResult.fail("Email already registered")

            user = User(
                unique_id=self._new_unique_id(),
                email=dto.email,
                password=make_password(dto.password),
                name=dto.name,
                phone=dto.phone,
                role=dto.role,
                sub_role=dto.sub_role,
                business_name=dto.business_name,
                address=(dto.address or Address()).model_copy(deep=True),
                inventory=[] if dto.role == UserRole.VENDOR else None,
            )
            self._user_repo.save(user)

        log.info("user.registered", user_id=str(user.id))
        return OperationResult.ok(
            "Registration successful! Please login.", user_id=str(user.id)
        )

    def login(self, email: str, password: str) -> OperationResult:
        user = self._user_repo.get_by_email(email)
        if user is None or not check_password(password, user.password):
            logger.warning("user.login_failed")
            return OperationResult.fail("Invalid email or password")
        if not user.is_active:
            logger.warning("user.login_inactive", user_id=str(user.id))
            return OperationResult.fail("Account is deactivated. Contact admin.")

        token = self._sessions.open(user.id)
        logger.info("user.logged_in", user_id=str(user.id))
        return OperationResult.ok("Login successful!", token=token, user_id=str(user.id))

    def logout(self, token: str) -> bool:
        closed = self._sessions.close(token)
        logger.info("user.logged_out", closed=closed)
        return closed

    def current_user(self, token: str) -> Optional[User]:
        user_id = self._sessions.resolve(token)
        if user_id is None:
            return None
        return self._user_repo.get_by_id(user_id)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def update_profile(self, user_id: UUID | str, dto: UpdateProfileDTO) -> Optional[User]:
        """Apply a partial profile update.

        Existing orders keep the address snapshotted at their creation.
        """
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            logger.warning("user.not_found", user_id=str(user_id))
            return None

        with self._locks.lock("user", user.id):
            for field in ("name", "phone", "business_name", "address", "sub_role"):
                value = getattr(dto, field)
                if value is not None:
                    setattr(user, field, value)
            user.touch()
            self._user_repo.save(user)

        logger.info("user.profile_updated", user_id=str(user.id))
        return user

    def set_active(self, user_id: UUID | str, active: bool) -> Optional[User]:
        """Soft (de)activation; users are never removed."""
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            logger.warning("user.not_found", user_id=str(user_id))
            return None

        with self._locks.lock("user", user.id):
            user.is_active = active
            user.touch()
            self._user_repo.save(user)

        logger.info("user.activation_changed", user_id=str(user.id), active=active)
        return user

    # ------------------------------------------------------------------
    # Agreements
    # ------------------------------------------------------------------

    def establish_agreement(
        self, requester_id: UUID | str, target_identifier: str
    ) -> OperationResult:
        """Link two users symmetrically.

        *target_identifier* may be the target's public ``unique_id`` or its
        internal id.  Both agreement lists are updated inside one critical
        section keyed by the unordered pair.
        """
        requester = self._user_repo.get_by_id(requester_id)
        if requester is None:
            return OperationResult.fail("Not authenticated")

        target = self._user_repo.get_by_unique_id(
            target_identifier
        ) or self._user_repo.get_by_id(target_identifier)
        if target is None:
            return OperationResult.fail("User not found")
        if target.id == requester.id:
            return OperationResult.fail("Cannot establish an agreement with yourself")

        log = logger.bind(requester_id=str(requester.id), target_id=str(target.id))

        with self._locks.pair("agreement", requester.id, target.id):
            if target.id in requester.agreements:
                log.info("agreement.already_exists")
                return OperationResult.fail("Agreement already exists")

            requester.agreements.append(target.id)
            if requester.id not in target.agreements:
                target.agreements.append(requester.id)
            requester.touch()
            target.touch()
            self._user_repo.save(requester)
            self._user_repo.save(target)

        log.info("agreement.established")
        return OperationResult.ok(
            f"Agreement established with {target.name}", partner_id=str(target.id)
        )

    def has_agreement(self, first_id: UUID | str, second_id: UUID | str) -> bool:
        first = self._user_repo.get_by_id(first_id)
        second = self._user_repo.get_by_id(second_id)
        if first is None or second is None:
            return False
        return first.is_agreed_with(second)

    def get_agreed_users(self, user_id: UUID | str) -> List[User]:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            return []
        return self._user_repo.filter(
            lambda other: other.id != user.id and user.is_agreed_with(other)
        )

    # ------------------------------------------------------------------
    # Role-specific extensions
    # ------------------------------------------------------------------

    def update_vendor_inventory(
        self, user_id: UUID | str, dto: UpdateInventoryDTO
    ) -> Optional[User]:
        """Replace a vendor's inventory listing.

        Raises:
            RoleNotAllowed: the user is not a vendor.
        """
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            logger.warning("user.not_found", user_id=str(user_id))
            return None
        if user.role != UserRole.VENDOR:
            raise RoleNotAllowed(f"User {user.id} is not a vendor.")

        with self._locks.lock("user", user.id):
            user.inventory = [InventoryItem(**item.model_dump()) for item in dto.items]
            user.touch()
            self._user_repo.save(user)

        logger.info("vendor.inventory_updated", user_id=str(user.id), items=len(dto.items))
        return user

    def submit_verification(
        self, user_id: UUID | str, dto: SubmitVerificationDTO
    ) -> Optional[User]:
        """Store transporter documents for review (status ``pending``).

        Raises:
            RoleNotAllowed: the user is not a transporter.
        """
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            logger.warning("user.not_found", user_id=str(user_id))
            return None
        if user.role != UserRole.TRANSPORTER:
            raise RoleNotAllowed(f"User {user.id} is not a transporter.")

        with self._locks.lock("user", user.id):
            user.verification_details = VerificationDetails(
                license_number=dto.license_number,
                rc_number=dto.rc_number,
                license_image=dto.license_image,
            )
            user.touch()
            self._user_repo.save(user)

        logger.info("transporter.verification_submitted", user_id=str(user.id))
        return user

    def review_verification(
        self, user_id: UUID | str, approved: bool, reason: Optional[str] = None
    ) -> Optional[User]:
        """Approve or reject a pending verification.

        Raises:
            InvalidVerificationState: nothing is pending for this user.
        """
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            logger.warning("user.not_found", user_id=str(user_id))
            return None

        details = user.verification_details
        if details is None or details.status != VerificationStatus.PENDING:
            raise InvalidVerificationState(f"User {user.id} has no pending verification.")

        with self._locks.lock("user", user.id):
            if approved:
                details.status = VerificationStatus.VERIFIED
                details.rejection_reason = None
            else:
                details.status = VerificationStatus.REJECTED
                details.rejection_reason = reason or "Documents invalid"
            user.touch()
            self._user_repo.save(user)

        logger.info(
            "transporter.verification_reviewed",
            user_id=str(user.id),
            status=details.status,
        )
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, user_id: UUID | str) -> Optional[User]:
        return self._user_repo.get_by_id(user_id)

    def get_users_by_role(self, role: UserRole | str, active_only: bool = False) -> List[User]:
        return self._user_repo.list_by_role(UserRole(role), active_only=active_only)

    def list_users(self) -> List[User]:
        return self._user_repo.list()

    def get_pending_verifications(self) -> List[User]:
        return self._user_repo.filter(
            lambda user: user.verification_details is not None
            and user.verification_details.status == VerificationStatus.PENDING
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _new_unique_id(self) -> str:
        for _ in range(UNIQUE_ID_MAX_RETRIES):
            candidate = User.generate_unique_id()
            if self._user_repo.get_by_unique_id(candidate) is None:
                return candidate
        raise RuntimeError(
            f"Failed to generate unique public id after {UNIQUE_ID_MAX_RETRIES} attempts"
        )
