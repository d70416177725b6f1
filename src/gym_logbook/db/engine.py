"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_filename


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE COLLATE NOCASE,
                password_hash TEXT NOT NULL,
                role TEXT NOT NULL DEFAULT 'user',
                avatar_color TEXT DEFAULT '#FF6B6B',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                category TEXT NOT NULL,
                target_sets INTEGER NOT NULL DEFAULT 3,
                target_reps INTEGER NOT NULL DEFAULT 12,
                target_weight REAL DEFAULT 0,
                gif_url TEXT DEFAULT '',
                created_for_user_id INTEGER,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (created_for_user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Per-user plan: which exercises on which day, in which order
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sequences (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                day_number INTEGER NOT NULL CHECK (day_number >= 1),
                sort_order INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_progress (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL UNIQUE,
                current_day_number INTEGER NOT NULL DEFAULT 1,
                total_workouts_completed INTEGER NOT NULL DEFAULT 0,
                last_workout_date TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                day_number INTEGER NOT NULL,
                exercises_completed TEXT NOT NULL DEFAULT '[]',
                is_complete INTEGER NOT NULL DEFAULT 0,
                started_at TIMESTAMP NOT NULL,
                completed_at TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                date TEXT NOT NULL,
                actual_sets INTEGER NOT NULL,
                actual_reps INTEGER NOT NULL,
                weight REAL DEFAULT 0,
                sets_data TEXT DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS check_ins (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                check_in_time TIMESTAMP NOT NULL,
                check_out_time TIMESTAMP,
                duration_minutes INTEGER,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sequences_user_day
            ON workout_sequences(user_id, day_number, sort_order)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sessions_user_day
            ON workout_sessions(user_id, day_number, is_complete)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_user_date
            ON workout_logs(user_id, date)
        """)
        # One log per exercise per day
        await db.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_logs_user_exercise_date
            ON workout_logs(user_id, exercise_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_check_ins_user
            ON check_ins(user_id, check_in_time)
        """)

        await db.commit()

    logger.info("Database schema ready at %s", db_path)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the database with the default exercise library.

    Only runs against an empty exercises table.

    Returns:
        Number of exercises inserted
    """
    from ..models.exercise import DEFAULT_EXERCISES
    from ..utils.exercise_utils import asset_for_exercise

    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        cursor = await db.execute("SELECT COUNT(*) FROM exercises")
        (existing,) = await cursor.fetchone()
        if existing:
            return 0

        for exercise in DEFAULT_EXERCISES:
            await db.execute(
                """
                INSERT INTO exercises
                (name, category, target_sets, target_reps, target_weight, gif_url)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    exercise.name,
                    exercise.category.value,
                    exercise.target_sets,
                    exercise.target_reps,
                    exercise.target_weight,
                    asset_for_exercise(exercise.name) or "",
                ),
            )

        await db.commit()

    logger.info("Seeded %d default exercises", len(DEFAULT_EXERCISES))
    return len(DEFAULT_EXERCISES)
