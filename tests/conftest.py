import os
import sys

# Provide required auth secrets for tests if not already set
os.environ.setdefault("ENV_SECRET", "test-secret")
os.environ.setdefault("ENV_RESET_PASSWORD_TOKEN_SECRET", "test-reset-secret")
os.environ.setdefault("ENV_VERIFICATION_TOKEN_SECRET", "test-verify-secret")


def pytest_sessionstart(session):
    # Ensure project root is on sys.path so feature packages resolve
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


# --- Test utilities: in-memory stand-ins for the session and repositories ---
import uuid
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Optional

import pytest


class FakeSession:
    """Counts unit-of-work calls; optionally fails on commit."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0
        self.fail_on_commit: Optional[Exception] = None

    async def commit(self) -> None:
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class _FakeRepo:
    def __init__(self) -> None:
        self.rows: dict = {}
        self._next_id = 1

    def _assign_id(self, obj) -> None:
        if obj.id is None:
            obj.id = self._next_id
            self._next_id += 1

    async def add(self, obj):
        self._assign_id(obj)
        self.rows[obj.id] = obj
        return obj

    async def get_by_id(self, obj_id):
        return self.rows.get(obj_id)

    async def delete(self, obj) -> None:
        self.rows.pop(obj.id, None)

    def _for_user(self, user_id):
        return [r for r in self.rows.values() if r.user_id == user_id]


class FakeAccountRepo(_FakeRepo):
    def __init__(self) -> None:
        super().__init__()
        self.lock_order: list = []

    async def get_for_update(self, account_id):
        self.lock_order.append(account_id)
        return self.rows.get(account_id)

    async def list_for_user(self, user_id):
        return sorted(self._for_user(user_id), key=lambda a: a.id)


class FakeBudgetRepo(_FakeRepo):
    def __init__(self) -> None:
        super().__init__()
        self._next_category_id = 1

    def _assign_category_ids(self, budget) -> None:
        for bucket in ("needs", "wants", "savings"):
            for category in getattr(budget, bucket):
                if category.id is None:
                    category.id = self._next_category_id
                    self._next_category_id += 1

    async def add(self, budget):
        await super().add(budget)
        self._assign_category_ids(budget)
        return budget

    async def save(self, budget):
        self._assign_category_ids(budget)
        return budget

    async def list_for_user(self, user_id):
        return sorted(self._for_user(user_id), key=lambda b: b.id)

    async def current_for_user(self, user_id, at: datetime):
        budgets = self._for_user(user_id)
        active = [b for b in budgets if b.start_date <= at <= b.end_date]
        if active:
            return max(active, key=lambda b: (b.start_date, b.id))
        return max(budgets, key=lambda b: b.id) if budgets else None

    async def sum_bucket(self, user_id, bucket: str) -> Decimal:
        total = Decimal("0")
        for budget in self._for_user(user_id):
            for category in getattr(budget, bucket):
                total += category.value
        return total


class FakeIncomeRepo(_FakeRepo):
    async def list_for_user(self, user_id):
        return sorted(self._for_user(user_id), key=lambda i: i.date, reverse=True)

    async def total_for_user(self, user_id) -> Decimal:
        return sum((i.amount for i in self._for_user(user_id)), Decimal("0"))

    async def total_for_period(self, user_id, start_date, end_date) -> Decimal:
        rows = [i for i in self._for_user(user_id) if start_date <= i.date <= end_date]
        return sum((i.amount for i in rows), Decimal("0"))


class FakeExpenseRepo(_FakeRepo):
    async def list_for_user(self, user_id, start_date=None, end_date=None):
        rows = self._for_user(user_id)
        if start_date:
            rows = [e for e in rows if e.date >= start_date]
        if end_date:
            rows = [e for e in rows if e.date <= end_date]
        return sorted(rows, key=lambda e: e.date, reverse=True)

    async def total_for_user(self, user_id) -> Decimal:
        return sum((e.amount for e in self._for_user(user_id)), Decimal("0"))


class FakeTransactionRepo(_FakeRepo):
    async def get_by_id(self, transaction_id):
        row = self.rows.get(transaction_id)
        if row is None or row.is_deleted:
            return None
        return row

    async def add(self, transaction):
        if transaction.is_deleted is None:
            transaction.is_deleted = False
        return await super().add(transaction)

    async def list_for_user(self, user_id, skip=0, take=10):
        rows = [t for t in self._for_user(user_id) if not t.is_deleted]
        rows.sort(key=lambda t: (t.date, t.id), reverse=True)
        return rows[skip : skip + take]

    async def soft_delete(self, transaction) -> None:
        transaction.is_deleted = True


class FakeGoalRepo(_FakeRepo):
    async def list_for_user(self, user_id):
        return sorted(self._for_user(user_id), key=lambda g: g.target_date)


class FakeReminderRepo(_FakeRepo):
    def __init__(self) -> None:
        super().__init__()
        self.fail_for: set = set()

    async def list_for_user(self, user_id):
        return sorted(self._for_user(user_id), key=lambda r: r.due_date)

    async def upcoming_for_user(self, user_id, until):
        if user_id in self.fail_for:
            raise RuntimeError("reminder lookup failed")
        rows = [r for r in self._for_user(user_id) if not r.is_completed and r.due_date <= until]
        return sorted(rows, key=lambda r: r.due_date)


class FakeUserRepo(_FakeRepo):
    async def get_by_email(self, email: str):
        return next((u for u in self.rows.values() if u.email.lower() == email.lower()), None)

    async def get_by_username(self, username: str):
        return next((u for u in self.rows.values() if (u.username or "").lower() == username.lower()), None)

    async def list_all(self):
        return list(self.rows.values())


class FakeNotifier:
    def __init__(self) -> None:
        self.sent: list = []
        self.fail_for: set = set()

    async def notify(self, to_email: str, reminder) -> bool:
        if to_email in self.fail_for:
            raise ConnectionError(f"SMTP refused {to_email}")
        self.sent.append((to_email, reminder.id))
        return True


class FakeUserDatabase:
    """Stand-in for the fastapi-users SQLAlchemy user database."""

    def __init__(self) -> None:
        self.users: dict = {}

    async def get(self, user_id):
        return self.users.get(user_id)

    async def get_by_email(self, email: str):
        return next((u for u in self.users.values() if u.email.lower() == email.lower()), None)

    async def get_by_username(self, username: str):
        return next((u for u in self.users.values() if (u.username or "").lower() == username.lower()), None)

    async def create(self, create_dict: dict):
        fields = {"username": None, "is_active": True, "is_superuser": False, "is_verified": False}
        fields.update(create_dict)
        user = SimpleNamespace(id=uuid.uuid4(), **fields)
        self.users[user.id] = user
        return user

    async def update(self, user, update_dict: dict):
        for key, value in update_dict.items():
            setattr(user, key, value)
        return user

    async def delete(self, user) -> None:
        self.users.pop(user.id, None)


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_user_db() -> FakeUserDatabase:
    return FakeUserDatabase()


@pytest.fixture
def account_repo() -> FakeAccountRepo:
    return FakeAccountRepo()


@pytest.fixture
def budget_repo() -> FakeBudgetRepo:
    return FakeBudgetRepo()


@pytest.fixture
def income_repo() -> FakeIncomeRepo:
    return FakeIncomeRepo()


@pytest.fixture
def expense_repo() -> FakeExpenseRepo:
    return FakeExpenseRepo()


@pytest.fixture
def transaction_repo() -> FakeTransactionRepo:
    return FakeTransactionRepo()


@pytest.fixture
def goal_repo() -> FakeGoalRepo:
    return FakeGoalRepo()


@pytest.fixture
def reminder_repo() -> FakeReminderRepo:
    return FakeReminderRepo()


@pytest.fixture
def user_repo() -> FakeUserRepo:
    return FakeUserRepo()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()
