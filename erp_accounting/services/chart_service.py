"""
Chart of accounts service — account lifecycle and hierarchy.

Rules enforced here:
1. Account codes are trimmed, uppercased, and unique
2. A parent, when given, must be an existing account
3. The hierarchy stays a forest (no account under itself)
4. An account with children, or with posted lines, cannot be deleted

Like the other services, this one only flushes. The caller
commits or rolls back.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from erp_accounting.models.account import Account
from erp_accounting.models.enums import AccountType
from erp_accounting.models.transaction import TransactionLine
from erp_accounting.schemas.account import AccountCreate, AccountUpdate
from erp_accounting.services.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def normalize_code(code: str | None) -> str:
    """Trim and uppercase an account code. Returns "" for None."""
    return (code or "").strip().upper()


def check_reference(value, label: str) -> None:
    """Raise ValidationError unless value looks like an entity id."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"Invalid {label} id: {value!r}")


def check_length(value: str, attribute, label: str) -> None:
    """Raise ValidationError if value is longer than the mapped column allows."""
    limit = attribute.property.columns[0].type.length
    if limit is not None and len(value) > limit:
        raise ValidationError(f"{label} must be at most {limit} characters")


class ChartOfAccountsService:
    """
    Owns the chart of accounts: creation, edits, deletion and lookups.

    Other services resolve accounts through get_account so a
    missing account is reported the same way everywhere.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find_by_code(self, code: str) -> Account | None:
        return self.db.execute(
            select(Account).where(Account.code == code)
        ).scalar_one_or_none()

    def _flush(self, code: str) -> None:
        """
        Flush pending changes, reporting a unique-code violation
        as ConflictError.

        The database constraint catches a concurrent writer that
        slipped past the _find_by_code check. The session must be
        rolled back by the caller afterwards.
        """
        try:
            self.db.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"Account with code '{code}' already exists"
            ) from exc

    def _get_parent(self, parent_id) -> Account:
        check_reference(parent_id, "parent account")
        parent = self.db.get(Account, parent_id)
        if not parent:
            raise NotFoundError(f"Parent account {parent_id} not found")
        return parent

    def create_account(self, request: AccountCreate) -> Account:
        """
        Create a new account.

        Raises ValidationError if code, name or type is missing,
        ConflictError if the normalized code is taken, and
        NotFoundError if the parent does not exist.
        """
        code = normalize_code(request.code)
        name = (request.name or "").strip()
        if not code or not name or request.account_type is None:
            raise ValidationError("Code, name and account type are required")
        check_length(code, Account.code, "Account code")
        check_length(name, Account.name, "Account name")

        if request.parent_id is not None:
            check_reference(request.parent_id, "parent account")

        if self._find_by_code(code):
            raise ConflictError(f"Account with code '{code}' already exists")

        parent = None
        if request.parent_id is not None:
            parent = self._get_parent(request.parent_id)

        account = Account(
            code=code,
            name=name,
            account_type=request.account_type,
            parent=parent,
            is_group=request.is_group,
            description=request.description,
        )
        self.db.add(account)
        self._flush(code)
        logger.info(
            "Created account %s (%s)", account.code, account.account_type.value
        )
        return account

    def update_account(self, account_id: int, request: AccountUpdate) -> Account:
        """
        Apply the fields present in the request to an account.

        A new parent must exist and must not be the account itself
        or one of its descendants.
        """
        account = self.get_account(account_id)
        changes = request.model_dump(exclude_unset=True)

        if "code" in changes:
            code = normalize_code(changes["code"])
            if not code:
                raise ValidationError("Account code cannot be blank")
            check_length(code, Account.code, "Account code")
            if code != account.code and self._find_by_code(code):
                raise ConflictError(f"Account with code '{code}' already exists")
            account.code = code

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("Account name cannot be blank")
            check_length(name, Account.name, "Account name")
            account.name = name

        if "parent_id" in changes:
            parent = None
            if changes["parent_id"] is not None:
                parent = self._get_parent(changes["parent_id"])
                if self._is_within(parent, account):
                    raise ValidationError(
                        f"Account {account.code} cannot be placed under "
                        f"itself or one of its descendants"
                    )
            account.parent = parent

        if changes.get("is_group") is not None:
            account.is_group = changes["is_group"]

        if "description" in changes:
            account.description = changes["description"]

        self._flush(account.code)
        logger.info("Updated account %s: %s", account.code, sorted(changes))
        return account

    @staticmethod
    def _is_within(node: Account | None, account: Account) -> bool:
        """True if node is account or sits somewhere below it."""
        while node is not None:
            if node.id == account.id:
                return True
            node = node.parent
        return False

    def delete_account(self, account_id: int) -> None:
        """
        Delete an account.

        Children are never cascaded: an account that is the parent
        of another cannot be deleted. Neither can one that lines
        have been posted to.
        """
        has_children = self.db.execute(
            select(Account.id).where(Account.parent_id == account_id).limit(1)
        ).first()
        if has_children:
            raise ConflictError(
                f"Account {account_id} has child accounts and cannot be deleted"
            )

        account = self.get_account(account_id)

        has_lines = self.db.execute(
            select(TransactionLine.id)
            .where(TransactionLine.account_id == account_id)
            .limit(1)
        ).first()
        if has_lines:
            raise ConflictError(
                f"Account {account.code} has posted transaction lines "
                f"and cannot be deleted"
            )

        self.db.delete(account)
        try:
            self.db.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"Account {account.code} is still referenced"
            ) from exc
        logger.info("Deleted account %s", account.code)

    def get_account(self, account_id: int) -> Account:
        """Get an account by ID."""
        account = self.db.get(Account, account_id)
        if not account:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    def list_accounts(
        self, account_type: AccountType | None = None
    ) -> list[Account]:
        """Return all accounts ordered by code, optionally of one type."""
        query = select(Account).order_by(Account.code)
        if account_type is not None:
            query = query.where(Account.account_type == account_type)
        return list(self.db.execute(query).scalars().all())

    def list_children(self, account_id: int) -> list[Account]:
        """Return the direct children of an account."""
        self.get_account(account_id)
        children = self.db.execute(
            select(Account)
            .where(Account.parent_id == account_id)
            .order_by(Account.code)
        ).scalars().all()
        return list(children)
