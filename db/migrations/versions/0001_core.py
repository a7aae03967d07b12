from __future__ import annotations

from alembic import op

revision = "0001_core"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            email VARCHAR(320) NOT NULL,
            hashed_password VARCHAR(1024) NOT NULL,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            is_superuser BOOLEAN NOT NULL DEFAULT FALSE,
            is_verified BOOLEAN NOT NULL DEFAULT FALSE,
            username VARCHAR(50) UNIQUE,
            role VARCHAR(32) NOT NULL DEFAULT 'user',
            balance NUMERIC(18, 2) NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        """
    )
    op.execute("CREATE UNIQUE INDEX IF NOT EXISTS ix_users_email ON users(email);")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name VARCHAR(100),
            balance NUMERIC(18, 2) NOT NULL DEFAULT 0 CHECK (balance >= 0),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_accounts_user_id ON accounts(user_id);")

    # Budgets and their Needs/Wants/Savings categories
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS budgets (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name VARCHAR(100) NOT NULL,
            amount NUMERIC(18, 2) NOT NULL,
            start_date TIMESTAMPTZ NOT NULL,
            end_date TIMESTAMPTZ NOT NULL
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_budgets_user_id ON budgets(user_id);")
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS budget_categories (
            id SERIAL PRIMARY KEY,
            category VARCHAR(100) NOT NULL,
            value NUMERIC(18, 2) NOT NULL CHECK (value >= 0),
            needs_budget_id INTEGER REFERENCES budgets(id) ON DELETE CASCADE,
            wants_budget_id INTEGER REFERENCES budgets(id) ON DELETE CASCADE,
            savings_budget_id INTEGER REFERENCES budgets(id) ON DELETE CASCADE
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_budget_categories_needs ON budget_categories(needs_budget_id);")
    op.execute("CREATE INDEX IF NOT EXISTS ix_budget_categories_wants ON budget_categories(wants_budget_id);")
    op.execute("CREATE INDEX IF NOT EXISTS ix_budget_categories_savings ON budget_categories(savings_budget_id);")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS transactions (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            amount NUMERIC(18, 2) NOT NULL,
            description VARCHAR(200),
            date TIMESTAMPTZ NOT NULL,
            category VARCHAR(50),
            type VARCHAR(16) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            is_deleted BOOLEAN NOT NULL DEFAULT FALSE
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_transactions_user_date ON transactions(user_id, date DESC);")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS incomes (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            amount NUMERIC(18, 2) NOT NULL,
            date TIMESTAMPTZ NOT NULL,
            description TEXT,
            category VARCHAR(50)
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_incomes_user_id ON incomes(user_id);")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS expenses (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            amount NUMERIC(18, 2) NOT NULL,
            description VARCHAR(100) NOT NULL,
            date TIMESTAMPTZ NOT NULL,
            category VARCHAR(50) NOT NULL,
            pay VARCHAR(50)
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_expenses_user_date ON expenses(user_id, date DESC);")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS goals (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name VARCHAR(100) NOT NULL,
            target_amount NUMERIC(18, 2) NOT NULL,
            current_amount NUMERIC(18, 2) NOT NULL DEFAULT 0,
            start_date TIMESTAMPTZ NOT NULL,
            target_date TIMESTAMPTZ NOT NULL,
            is_completed BOOLEAN NOT NULL DEFAULT FALSE
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_goals_user_id ON goals(user_id);")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS reminders (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            title VARCHAR(100) NOT NULL,
            description VARCHAR(500) NOT NULL,
            due_date TIMESTAMPTZ NOT NULL,
            is_completed BOOLEAN NOT NULL DEFAULT FALSE
        );
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_reminders_user_due ON reminders(user_id, due_date);")


def downgrade() -> None:
    for table in (
        "reminders",
        "goals",
        "expenses",
        "incomes",
        "transactions",
        "budget_categories",
        "budgets",
        "accounts",
        "users",
    ):
        op.execute(f"DROP TABLE IF EXISTS {table} CASCADE;")
