"""Check-in, reward, quest, lottery and shop tables.

Revision ID: 001_officing_tables
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_officing_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Catalogs ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS titles (
            id SERIAL PRIMARY KEY,
            name VARCHAR(128) UNIQUE NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            unlock_condition_type VARCHAR(32) NOT NULL,
            unlock_condition_value JSONB NOT NULL DEFAULT '{}',
            sort_order INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS quests (
            id SERIAL PRIMARY KEY,
            title VARCHAR(128) NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            rank VARCHAR(1) NOT NULL CHECK (rank IN ('S', 'A', 'B', 'C')),
            base_xp INTEGER NOT NULL CHECK (base_xp >= 0),
            base_points INTEGER NOT NULL CHECK (base_points >= 0),
            quest_type VARCHAR(16) NOT NULL DEFAULT 'daily',
            is_active BOOLEAN NOT NULL DEFAULT true
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS prizes (
            id SERIAL PRIMARY KEY,
            name VARCHAR(128) NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            rank VARCHAR(1) NOT NULL CHECK (rank IN ('S', 'A', 'B', 'C')),
            weight DOUBLE PRECISION NOT NULL CHECK (weight > 0),
            reward_type VARCHAR(16) NOT NULL,
            reward_value JSONB NOT NULL DEFAULT '{}',
            stock INTEGER CHECK (stock >= 0),
            is_available BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS shop_items (
            id SERIAL PRIMARY KEY,
            name VARCHAR(128) NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            cost INTEGER NOT NULL CHECK (cost > 0),
            item_type VARCHAR(32) NOT NULL,
            item_value JSONB NOT NULL DEFAULT '{}',
            is_available BOOLEAN NOT NULL DEFAULT true,
            sort_order INTEGER NOT NULL DEFAULT 0
        )
    """)

    # --- Per-user state ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_progress (
            user_id VARCHAR(64) PRIMARY KEY,
            level INTEGER NOT NULL DEFAULT 1 CHECK (level >= 1),
            current_xp INTEGER NOT NULL DEFAULT 0 CHECK (current_xp >= 0),
            total_points INTEGER NOT NULL DEFAULT 0 CHECK (total_points >= 0),
            current_streak INTEGER NOT NULL DEFAULT 0,
            max_streak INTEGER NOT NULL DEFAULT 0,
            active_title_id INTEGER REFERENCES titles(id) ON DELETE SET NULL,
            pity_counter INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS attendances (
            id BIGSERIAL PRIMARY KEY,
            user_id VARCHAR(64) NOT NULL,
            check_in_date DATE NOT NULL,
            check_in_time TIMESTAMPTZ NOT NULL,
            tag VARCHAR(64) NOT NULL,
            year INTEGER NOT NULL,
            month INTEGER NOT NULL,
            CONSTRAINT uq_attendances_user_date UNIQUE (user_id, check_in_date)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_attendances_user_month
        ON attendances(user_id, year, month)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_attendances_user_tag
        ON attendances(user_id, tag)
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS lottery_tickets (
            user_id VARCHAR(64) PRIMARY KEY,
            ticket_count INTEGER NOT NULL DEFAULT 0 CHECK (ticket_count >= 0),
            earned_from VARCHAR(64),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_quest_logs (
            id BIGSERIAL PRIMARY KEY,
            user_id VARCHAR(64) NOT NULL,
            quest_id INTEGER NOT NULL REFERENCES quests(id),
            assigned_date DATE NOT NULL,
            completed_at TIMESTAMPTZ,
            xp_earned INTEGER,
            points_earned INTEGER,
            CONSTRAINT uq_user_quest_logs_user_quest_date UNIQUE (user_id, quest_id, assigned_date)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_user_quest_logs_user_date
        ON user_quest_logs(user_id, assigned_date)
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_titles (
            id BIGSERIAL PRIMARY KEY,
            user_id VARCHAR(64) NOT NULL,
            title_id INTEGER NOT NULL REFERENCES titles(id) ON DELETE CASCADE,
            unlocked_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_user_titles_user_title UNIQUE (user_id, title_id)
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS lottery_log (
            id BIGSERIAL PRIMARY KEY,
            user_id VARCHAR(64) NOT NULL,
            prize_id INTEGER NOT NULL REFERENCES prizes(id),
            rank VARCHAR(1) NOT NULL,
            pity_counter_at_draw INTEGER NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_lottery_log_user
        ON lottery_log(user_id, created_at DESC)
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS lottery_log CASCADE")
    op.execute("DROP TABLE IF EXISTS user_titles CASCADE")
    op.execute("DROP TABLE IF EXISTS user_quest_logs CASCADE")
    op.execute("DROP TABLE IF EXISTS lottery_tickets CASCADE")
    op.execute("DROP TABLE IF EXISTS attendances CASCADE")
    op.execute("DROP TABLE IF EXISTS user_progress CASCADE")
    op.execute("DROP TABLE IF EXISTS shop_items CASCADE")
    op.execute("DROP TABLE IF EXISTS prizes CASCADE")
    op.execute("DROP TABLE IF EXISTS quests CASCADE")
    op.execute("DROP TABLE IF EXISTS titles CASCADE")
