"""Data access layer for gym-logbook."""

import json
import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..errors import ValidationError
from ..models.check_in import CheckIn
from ..models.exercise import Exercise, ExerciseCategory
from ..models.progress import UserProgress
from ..models.sequence import SequenceEntry
from ..models.session import WorkoutSession
from ..models.user import User, UserRole
from ..models.workout_log import SetData, WorkoutLog
from .engine import get_db_path

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class UserRepository:
    """Repository for user accounts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user: User) -> int:
        """Create a new user."""
        async with aiosqlite.connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    """
                    INSERT INTO users (name, password_hash, role, avatar_color)
                    VALUES (?, ?, ?, ?)
                    """,
                    (user.name, user.password_hash, user.role.value, user.avatar_color),
                )
            except aiosqlite.IntegrityError:
                raise ValidationError(f"A user named {user.name!r} already exists")
            await db.commit()
            return cursor.lastrowid

    async def get(self, user_id: int) -> User | None:
        """Get a user by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_by_name(self, name: str) -> User | None:
        """Get a user by display name (case-insensitive)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM users WHERE name = ? COLLATE NOCASE", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def list_all(self, role: UserRole | None = None) -> list[User]:
        """List users, optionally filtered by role."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if role:
                cursor = await db.execute(
                    "SELECT * FROM users WHERE role = ? ORDER BY name", (role.value,)
                )
            else:
                cursor = await db.execute("SELECT * FROM users ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def count_owners(self) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM users WHERE role = ?", (UserRole.OWNER.value,)
            )
            (count,) = await cursor.fetchone()
            return count

    async def update(self, user: User) -> None:
        """Update an existing user."""
        if user.id is None:
            raise ValueError("User must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            try:
                await db.execute(
                    """
                    UPDATE users SET
                        name = ?, password_hash = ?, role = ?, avatar_color = ?
                    WHERE id = ?
                    """,
                    (
                        user.name,
                        user.password_hash,
                        user.role.value,
                        user.avatar_color,
                        user.id,
                    ),
                )
            except aiosqlite.IntegrityError:
                raise ValidationError(f"A user named {user.name!r} already exists")
            await db.commit()

    async def delete(self, user_id: int) -> bool:
        """Delete a user and everything that belongs to them."""
        async with aiosqlite.connect(self.db_path) as db:
            try:
                for table in (
                    "workout_sequences",
                    "user_progress",
                    "workout_sessions",
                    "workout_logs",
                    "check_ins",
                ):
                    await db.execute(f"DELETE FROM {table} WHERE user_id = ?", (user_id,))
                await db.execute(
                    "DELETE FROM workout_sequences WHERE exercise_id IN "
                    "(SELECT id FROM exercises WHERE created_for_user_id = ?)",
                    (user_id,),
                )
                await db.execute(
                    "DELETE FROM exercises WHERE created_for_user_id = ?", (user_id,)
                )
                cursor = await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
                await db.commit()
            except aiosqlite.Error:
                await db.rollback()
                raise
            return cursor.rowcount > 0

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        """Convert a database row to a User."""
        return User(
            id=row["id"],
            name=row["name"],
            role=UserRole(row["role"]),
            avatar_color=row["avatar_color"],
            password_hash=row["password_hash"],
            created_at=_parse_ts(row["created_at"]),
        )


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, exercise: Exercise) -> int:
        """Add a new exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO exercises
                (name, category, target_sets, target_reps, target_weight, gif_url,
                 created_for_user_id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    exercise.name,
                    exercise.category.value,
                    exercise.target_sets,
                    exercise.target_reps,
                    exercise.target_weight,
                    exercise.gif_url,
                    exercise.created_for_user_id,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, exercise_id: int) -> Exercise | None:
        """Get an exercise by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def list_all(self) -> list[Exercise]:
        """List all exercises, grouped by category."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY category, name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def list_for_user(self, user_id: int) -> list[Exercise]:
        """Global exercises plus those created for this user."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM exercises
                WHERE created_for_user_id IS NULL OR created_for_user_id = ?
                ORDER BY category, name
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def get_by_category(self, category: ExerciseCategory) -> list[Exercise]:
        """Get exercises in a category."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE category = ? ORDER BY name",
                (category.value,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def update(self, exercise: Exercise) -> None:
        """Update an existing exercise."""
        if exercise.id is None:
            raise ValueError("Exercise must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE exercises SET
                    name = ?, category = ?, target_sets = ?, target_reps = ?,
                    target_weight = ?, gif_url = ?, created_for_user_id = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    exercise.name,
                    exercise.category.value,
                    exercise.target_sets,
                    exercise.target_reps,
                    exercise.target_weight,
                    exercise.gif_url,
                    exercise.created_for_user_id,
                    exercise.id,
                ),
            )
            await db.commit()

    async def delete(self, exercise_id: int) -> bool:
        """Delete an exercise and remove it from every sequence."""
        async with aiosqlite.connect(self.db_path) as db:
            try:
                await db.execute(
                    "DELETE FROM workout_sequences WHERE exercise_id = ?", (exercise_id,)
                )
                cursor = await db.execute(
                    "DELETE FROM exercises WHERE id = ?", (exercise_id,)
                )
                await db.commit()
            except aiosqlite.Error:
                await db.rollback()
                raise
            return cursor.rowcount > 0

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            category=ExerciseCategory.parse(row["category"]),
            target_sets=row["target_sets"],
            target_reps=row["target_reps"],
            target_weight=row["target_weight"] or 0.0,
            gif_url=row["gif_url"] or "",
            created_for_user_id=row["created_for_user_id"],
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )


class SequenceRepository:
    """Repository for per-user workout sequences."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_for_user(
        self, user_id: int, day_number: int | None = None
    ) -> list[SequenceEntry]:
        """Entries ordered by day then sort order, each with its exercise."""
        query = """
            SELECT s.id, s.user_id, s.exercise_id, s.day_number, s.sort_order,
                   e.name AS e_name, e.category AS e_category,
                   e.target_sets AS e_target_sets, e.target_reps AS e_target_reps,
                   e.target_weight AS e_target_weight, e.gif_url AS e_gif_url,
                   e.created_for_user_id AS e_created_for_user_id
            FROM workout_sequences s
            LEFT JOIN exercises e ON e.id = s.exercise_id
            WHERE s.user_id = ?
        """
        params: tuple = (user_id,)
        if day_number is not None:
            query += " AND s.day_number = ?"
            params = (user_id, day_number)
        query += " ORDER BY s.day_number ASC, s.sort_order ASC, s.id ASC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def get(self, entry_id: int) -> SequenceEntry | None:
        """Get a single entry (without its exercise)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_sequences WHERE id = ?", (entry_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return SequenceEntry(
                id=row["id"],
                user_id=row["user_id"],
                exercise_id=row["exercise_id"],
                day_number=row["day_number"],
                sort_order=row["sort_order"],
            )

    async def max_day(self, user_id: int) -> int:
        """Highest day_number for the user, 0 if they have no sequence."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT MAX(day_number) FROM workout_sequences WHERE user_id = ?",
                (user_id,),
            )
            (value,) = await cursor.fetchone()
            return value or 0

    async def scheduled_days(self, user_id: int) -> list[int]:
        """Day numbers that have at least one entry, ascending."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT DISTINCT day_number FROM workout_sequences
                WHERE user_id = ? ORDER BY day_number
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [row[0] for row in rows]

    async def max_sort_order(self, user_id: int, day_number: int) -> int | None:
        """Highest sort_order in a day, None for an empty day."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT sort_order FROM workout_sequences
                WHERE user_id = ? AND day_number = ?
                ORDER BY sort_order DESC LIMIT 1
                """,
                (user_id, day_number),
            )
            row = await cursor.fetchone()
            return row[0] if row else None

    async def exercise_ids_for_day(self, user_id: int, day_number: int) -> list[int]:
        """Exercise ids scheduled on a day, in sort order."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT exercise_id FROM workout_sequences
                WHERE user_id = ? AND day_number = ?
                ORDER BY sort_order ASC, id ASC
                """,
                (user_id, day_number),
            )
            rows = await cursor.fetchall()
            return [row[0] for row in rows]

    async def add(self, entry: SequenceEntry) -> int:
        """Insert an entry with the sort_order it already carries."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_sequences (user_id, exercise_id, day_number, sort_order)
                VALUES (?, ?, ?, ?)
                """,
                (entry.user_id, entry.exercise_id, entry.day_number, entry.sort_order),
            )
            await db.commit()
            return cursor.lastrowid

    async def delete(self, entry_id: int) -> bool:
        """Remove an entry."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_sequences WHERE id = ?", (entry_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    async def reorder(self, user_id: int, day_number: int, entry_ids: list[int]) -> None:
        """Rewrite a day's sort_order to match ``entry_ids``, all or nothing.

        ``entry_ids`` must name exactly the entries currently on that day.
        """
        async with aiosqlite.connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    "SELECT id FROM workout_sequences WHERE user_id = ? AND day_number = ?",
                    (user_id, day_number),
                )
                current = {row[0] for row in await cursor.fetchall()}
                if len(entry_ids) != len(set(entry_ids)) or set(entry_ids) != current:
                    raise ValidationError(
                        f"Reorder must list each entry of day {day_number} exactly once"
                    )

                await db.executemany(
                    "UPDATE workout_sequences SET sort_order = ? WHERE id = ?",
                    [(index, entry_id) for index, entry_id in enumerate(entry_ids)],
                )
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    def _row_to_entry(self, row: aiosqlite.Row) -> SequenceEntry:
        """Convert a joined row to a SequenceEntry with its exercise."""
        exercise = None
        if row["e_name"] is not None:
            exercise = Exercise(
                id=row["exercise_id"],
                name=row["e_name"],
                category=ExerciseCategory.parse(row["e_category"]),
                target_sets=row["e_target_sets"],
                target_reps=row["e_target_reps"],
                target_weight=row["e_target_weight"] or 0.0,
                gif_url=row["e_gif_url"] or "",
                created_for_user_id=row["e_created_for_user_id"],
            )
        return SequenceEntry(
            id=row["id"],
            user_id=row["user_id"],
            exercise_id=row["exercise_id"],
            day_number=row["day_number"],
            sort_order=row["sort_order"],
            exercise=exercise,
        )


class ProgressRepository:
    """Repository for per-user day progress."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: int) -> UserProgress | None:
        """Get progress for a user, None if absent."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_progress WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_progress(row)

    async def get_or_create(self, user_id: int) -> UserProgress:
        """Return the user's progress row, creating it on first access.

        Uses insert-if-absent against the UNIQUE user_id, so concurrent
        callers can never create two rows.
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                INSERT INTO user_progress (user_id, current_day_number, total_workouts_completed)
                VALUES (?, 1, 0)
                ON CONFLICT(user_id) DO NOTHING
                """,
                (user_id,),
            )
            created = cursor.rowcount > 0
            await db.commit()

            cursor = await db.execute(
                "SELECT * FROM user_progress WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()

        if created:
            logger.info("Created progress for user %s at day 1", user_id)
        return self._row_to_progress(row)

    async def update(self, progress: UserProgress) -> None:
        """Write the progress row for ``progress.user_id``."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE user_progress SET
                    current_day_number = ?, total_workouts_completed = ?,
                    last_workout_date = ?, updated_at = ?
                WHERE user_id = ?
                """,
                (
                    progress.current_day_number,
                    progress.total_workouts_completed,
                    progress.last_workout_date.isoformat() if progress.last_workout_date else None,
                    _now(),
                    progress.user_id,
                ),
            )
            await db.commit()

    async def count(self, user_id: int) -> int:
        """Number of progress rows for a user (0 or 1)."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM user_progress WHERE user_id = ?", (user_id,)
            )
            (value,) = await cursor.fetchone()
            return value

    def _row_to_progress(self, row: aiosqlite.Row) -> UserProgress:
        """Convert a database row to a UserProgress."""
        last_workout_date = None
        if row["last_workout_date"]:
            last_workout_date = date.fromisoformat(row["last_workout_date"])

        return UserProgress(
            id=row["id"],
            user_id=row["user_id"],
            current_day_number=row["current_day_number"],
            total_workouts_completed=row["total_workouts_completed"],
            last_workout_date=last_workout_date,
            updated_at=_parse_ts(row["updated_at"]),
        )


class SessionRepository:
    """Repository for workout sessions."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: WorkoutSession) -> int:
        """Create a new session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_sessions
                (user_id, day_number, exercises_completed, is_complete, started_at, completed_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    session.user_id,
                    session.day_number,
                    json.dumps(session.exercises_completed),
                    int(session.is_complete),
                    session.started_at.isoformat(timespec="seconds"),
                    session.completed_at.isoformat(timespec="seconds") if session.completed_at else None,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, session_id: int) -> WorkoutSession | None:
        """Get a session by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_sessions WHERE id = ?", (session_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def find_open(
        self, user_id: int, day_number: int, started_since: datetime | None = None
    ) -> WorkoutSession | None:
        """Most recent incomplete session for (user, day)."""
        query = """
            SELECT * FROM workout_sessions
            WHERE user_id = ? AND day_number = ? AND is_complete = 0
        """
        params: list = [user_id, day_number]
        if started_since is not None:
            query += " AND started_at >= ?"
            params.append(started_since.isoformat(timespec="seconds"))
        query += " ORDER BY started_at DESC, id DESC LIMIT 1"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def list_for_user(
        self, user_id: int, day_number: int | None = None
    ) -> list[WorkoutSession]:
        """Sessions for a user, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if day_number is not None:
                cursor = await db.execute(
                    """
                    SELECT * FROM workout_sessions
                    WHERE user_id = ? AND day_number = ?
                    ORDER BY started_at DESC, id DESC
                    """,
                    (user_id, day_number),
                )
            else:
                cursor = await db.execute(
                    """
                    SELECT * FROM workout_sessions WHERE user_id = ?
                    ORDER BY started_at DESC, id DESC
                    """,
                    (user_id,),
                )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def update_completed(self, session_id: int, exercise_ids: list[int]) -> None:
        """Replace the completed-exercise set of a session."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "UPDATE workout_sessions SET exercises_completed = ? WHERE id = ?",
                (json.dumps(exercise_ids), session_id),
            )
            await db.commit()

    async def close(self, session_id: int, completed_at: datetime) -> bool:
        """Mark a session complete if it is still open.

        Returns:
            True if this call closed it, False if it was already complete
        """
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE workout_sessions SET is_complete = 1, completed_at = ?
                WHERE id = ? AND is_complete = 0
                """,
                (completed_at.isoformat(timespec="seconds"), session_id),
            )
            await db.commit()
            return cursor.rowcount == 1

    async def close_open(self, user_id: int, day_number: int, completed_at: datetime) -> int:
        """Close every open session for (user, day). Returns how many closed."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE workout_sessions SET is_complete = 1, completed_at = ?
                WHERE user_id = ? AND day_number = ? AND is_complete = 0
                """,
                (completed_at.isoformat(timespec="seconds"), user_id, day_number),
            )
            await db.commit()
            return cursor.rowcount

    def _row_to_session(self, row: aiosqlite.Row) -> WorkoutSession:
        """Convert a database row to a WorkoutSession."""
        return WorkoutSession(
            id=row["id"],
            user_id=row["user_id"],
            day_number=row["day_number"],
            exercises_completed=json.loads(row["exercises_completed"] or "[]"),
            is_complete=bool(row["is_complete"]),
            started_at=datetime.fromisoformat(row["started_at"]),
            completed_at=_parse_ts(row["completed_at"]),
        )


class WorkoutLogRepository:
    """Repository for per-exercise workout logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, log: WorkoutLog) -> int:
        """Insert a new log."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_logs
                (user_id, exercise_id, date, actual_sets, actual_reps, weight, sets_data)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log.user_id,
                    log.exercise_id,
                    log.date.isoformat(),
                    log.actual_sets,
                    log.actual_reps,
                    log.weight,
                    json.dumps([s.to_dict() for s in log.sets_data]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, log_id: int) -> WorkoutLog | None:
        """Get a log by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM workout_logs WHERE id = ?", (log_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def find(self, user_id: int, exercise_id: int, log_date: date) -> WorkoutLog | None:
        """The log for (user, exercise, date), if any."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workout_logs
                WHERE user_id = ? AND exercise_id = ? AND date = ?
                ORDER BY id DESC LIMIT 1
                """,
                (user_id, exercise_id, log_date.isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def list_for_user(
        self,
        user_id: int,
        exercise_id: int | None = None,
        log_date: date | None = None,
    ) -> list[WorkoutLog]:
        """Logs for a user, newest first, with optional filters."""
        query = "SELECT * FROM workout_logs WHERE user_id = ?"
        params: list = [user_id]
        if exercise_id is not None:
            query += " AND exercise_id = ?"
            params.append(exercise_id)
        if log_date is not None:
            query += " AND date = ?"
            params.append(log_date.isoformat())
        query += " ORDER BY created_at DESC, id DESC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_all(self) -> list[WorkoutLog]:
        """Every log, oldest date first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM workout_logs ORDER BY date, id")
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def update(self, log: WorkoutLog) -> None:
        """Update an existing log."""
        if log.id is None:
            raise ValueError("Log must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_logs SET
                    actual_sets = ?, actual_reps = ?, weight = ?, sets_data = ?
                WHERE id = ?
                """,
                (
                    log.actual_sets,
                    log.actual_reps,
                    log.weight,
                    json.dumps([s.to_dict() for s in log.sets_data]),
                    log.id,
                ),
            )
            await db.commit()

    async def delete(self, log_id: int) -> bool:
        """Delete a log."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM workout_logs WHERE id = ?", (log_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_log(self, row: aiosqlite.Row) -> WorkoutLog:
        """Convert a database row to a WorkoutLog."""
        sets_data = json.loads(row["sets_data"]) if row["sets_data"] else []
        return WorkoutLog(
            id=row["id"],
            user_id=row["user_id"],
            exercise_id=row["exercise_id"],
            date=date.fromisoformat(row["date"]),
            actual_sets=row["actual_sets"],
            actual_reps=row["actual_reps"],
            weight=row["weight"] or 0.0,
            sets_data=[SetData.from_dict(s) for s in sets_data],
            created_at=_parse_ts(row["created_at"]),
        )


class CheckInRepository:
    """Repository for gym check-ins."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, check_in: CheckIn) -> int:
        """Record a check-in."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO check_ins (user_id, check_in_time, check_out_time, duration_minutes)
                VALUES (?, ?, ?, ?)
                """,
                (
                    check_in.user_id,
                    check_in.check_in_time.isoformat(timespec="seconds"),
                    check_in.check_out_time.isoformat(timespec="seconds") if check_in.check_out_time else None,
                    check_in.duration_minutes,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get_open(self, user_id: int) -> CheckIn | None:
        """Latest check-in without a check-out."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM check_ins
                WHERE user_id = ? AND check_out_time IS NULL
                ORDER BY check_in_time DESC, id DESC LIMIT 1
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_check_in(row)

    async def close(self, check_in: CheckIn) -> bool:
        """Persist a check-out. Returns False if it was already closed."""
        if check_in.id is None or check_in.check_out_time is None:
            raise ValueError("Check-in must have an ID and a check-out time")

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE check_ins SET check_out_time = ?, duration_minutes = ?
                WHERE id = ? AND check_out_time IS NULL
                """,
                (
                    check_in.check_out_time.isoformat(timespec="seconds"),
                    check_in.duration_minutes,
                    check_in.id,
                ),
            )
            await db.commit()
            return cursor.rowcount == 1

    async def list_for_user(self, user_id: int) -> list[CheckIn]:
        """A user's check-ins, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM check_ins WHERE user_id = ? ORDER BY check_in_time ASC, id ASC",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_check_in(row) for row in rows]

    async def list_recent(self, limit: int | None = None) -> list[CheckIn]:
        """All check-ins, newest first."""
        query = "SELECT * FROM check_ins ORDER BY check_in_time DESC, id DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_check_in(row) for row in rows]

    def _row_to_check_in(self, row: aiosqlite.Row) -> CheckIn:
        """Convert a database row to a CheckIn."""
        return CheckIn(
            id=row["id"],
            user_id=row["user_id"],
            check_in_time=datetime.fromisoformat(row["check_in_time"]),
            check_out_time=_parse_ts(row["check_out_time"]),
            duration_minutes=row["duration_minutes"],
        )
