from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from resume_scoring.core.errors import ConfigurationNotFoundError
from resume_scoring.schemas.scoring import WeightProfile
from resume_scoring.schemas.tuning import (
    ConfigPerformance,
    ConfigStatus,
    FeedbackRecord,
    WeightConfiguration,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATION_ID = "default_v1"


def default_configuration() -> WeightConfiguration:
    return WeightConfiguration(
        id=DEFAULT_CONFIGURATION_ID,
        name="Default weights",
        weights=WeightProfile(
            content_quality=40,
            ats_compatibility=35,
            format_structure=15,
            impact_metrics=10,
        ),
        role=None,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        status=ConfigStatus.ACTIVE,
    )


def _timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _in_window(record: FeedbackRecord, start: datetime, end: datetime) -> bool:
    return _timestamp(start) <= _timestamp(record.timestamp) <= _timestamp(end)


def _reject_active(config: WeightConfiguration) -> None:
    if config.active:
        raise ValueError(f"configuration '{config.id}' must be activated through activate(), not saved as active")


class FeedbackStore(Protocol):
    def add(self, record: FeedbackRecord) -> None:
        ...

    def list_between(self, start: datetime, end: datetime, role: str | None = None) -> list[FeedbackRecord]:
        ...

    def list_by_role(self, role: str, limit: int = 50) -> list[FeedbackRecord]:
        ...


class WeightConfigStore(Protocol):
    def save(self, config: WeightConfiguration) -> WeightConfiguration:
        """Insert or replace `config` by id. Active configurations are only created by `activate`."""
        ...

    def get(self, config_id: str) -> WeightConfiguration | None:
        ...

    def get_active(self, role: str | None) -> WeightConfiguration | None:
        """Active configuration scoped exactly to `role` (None is the global scope)."""
        ...

    def list_configurations(self, role: str | None = None) -> list[WeightConfiguration]:
        ...

    def mark_validated(self, config_id: str, weights: WeightProfile) -> WeightConfiguration:
        """Move `config_id` from proposed to validated with `weights`; any other status is left as is."""
        ...

    def activate(self, config_id: str, weights: WeightProfile | None = None) -> WeightConfiguration:
        """Atomically supersede the current active config in the same scope and activate `config_id`."""
        ...


class InMemoryFeedbackStore:
    def __init__(self) -> None:
        self._records: list[FeedbackRecord] = []
        self._lock = threading.Lock()

    def add(self, record: FeedbackRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list_between(self, start: datetime, end: datetime, role: str | None = None) -> list[FeedbackRecord]:
        with self._lock:
            records = list(self._records)
        return sorted(
            (
                record
                for record in records
                if _in_window(record, start, end) and (role is None or record.job_role == role)
            ),
            key=lambda record: record.timestamp,
        )

    def list_by_role(self, role: str, limit: int = 50) -> list[FeedbackRecord]:
        with self._lock:
            records = [record for record in self._records if record.job_role == role]
        records.sort(key=lambda record: record.timestamp, reverse=True)
        return records[: max(0, limit)]


class InMemoryWeightConfigStore:
    def __init__(self, *, seed_default: bool = False) -> None:
        self._configs: dict[str, WeightConfiguration] = {}
        self._lock = threading.Lock()
        if seed_default:
            default = default_configuration()
            self._configs[default.id] = default

    def save(self, config: WeightConfiguration) -> WeightConfiguration:
        _reject_active(config)
        with self._lock:
            self._configs[config.id] = config
        return config

    def get(self, config_id: str) -> WeightConfiguration | None:
        with self._lock:
            return self._configs.get(config_id)

    def get_active(self, role: str | None) -> WeightConfiguration | None:
        with self._lock:
            for config in self._configs.values():
                if config.active and config.role == role:
                    return config
        return None

    def list_configurations(self, role: str | None = None) -> list[WeightConfiguration]:
        with self._lock:
            configs = [config for config in self._configs.values() if role is None or config.role == role]
        return sorted(configs, key=lambda config: config.created_at)

    def mark_validated(self, config_id: str, weights: WeightProfile) -> WeightConfiguration:
        with self._lock:
            config = self._configs.get(config_id)
            if config is None:
                raise ConfigurationNotFoundError(config_id)
            if config.status != ConfigStatus.PROPOSED:
                return config
            validated = config.model_copy(update={"weights": weights, "status": ConfigStatus.VALIDATED})
            self._configs[config_id] = validated
            return validated

    def activate(self, config_id: str, weights: WeightProfile | None = None) -> WeightConfiguration:
        with self._lock:
            target = self._configs.get(config_id)
            if target is None:
                raise ConfigurationNotFoundError(config_id)
            if target.active:
                return target
            for other_id, other in list(self._configs.items()):
                if other.active and other.role == target.role:
                    self._configs[other_id] = other.model_copy(update={"status": ConfigStatus.SUPERSEDED})
            update: dict = {"status": ConfigStatus.ACTIVE}
            if weights is not None:
                update["weights"] = weights
            activated = target.model_copy(update=update)
            self._configs[config_id] = activated
            return activated


class _SQLiteStore:
    def __init__(self, db_path: str | Path):
        self._db_path = str(db_path)
        self._lock = threading.Lock()
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(
            self._db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._conn.execute("PRAGMA busy_timeout=5000;")
        self._create_schema()

    def _create_schema(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class SQLiteFeedbackStore(_SQLiteStore):
    _COLUMNS = (
        "feedback_id, resume_id, job_role, score, component_scores_json, rating, helpful, "
        "comment, inaccurate_component, expected_score, timestamp"
    )

    def _create_schema(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS feedback_records (
                feedback_id TEXT PRIMARY KEY,
                resume_id TEXT NOT NULL,
                job_role TEXT NOT NULL,
                score INTEGER NOT NULL,
                component_scores_json TEXT NOT NULL,
                rating INTEGER NOT NULL,
                helpful INTEGER NOT NULL,
                comment TEXT,
                inaccurate_component TEXT,
                expected_score INTEGER,
                timestamp TEXT NOT NULL
            );
            """
        )
        self._conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_feedback_records_timestamp
            ON feedback_records (timestamp);
            """
        )
        self._conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_feedback_records_role
            ON feedback_records (job_role, timestamp);
            """
        )

    @staticmethod
    def _from_row(row: tuple) -> FeedbackRecord:
        return FeedbackRecord(
            feedback_id=row[0],
            resume_id=row[1],
            job_role=row[2],
            score=row[3],
            component_scores=json.loads(row[4]) if row[4] else {},
            rating=row[5],
            helpful=bool(row[6]),
            comment=row[7],
            inaccurate_component=row[8],
            expected_score=row[9],
            timestamp=datetime.fromisoformat(row[10]),
        )

    def add(self, record: FeedbackRecord) -> None:
        with self._lock:
            self._conn.execute(
                f"INSERT INTO feedback_records ({self._COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.feedback_id,
                    record.resume_id,
                    record.job_role,
                    record.score,
                    json.dumps(record.component_scores),
                    record.rating,
                    int(record.helpful),
                    record.comment,
                    record.inaccurate_component,
                    record.expected_score,
                    _timestamp(record.timestamp),
                ),
            )
        logger.debug("feedback_stored feedback_id=%s role=%s", record.feedback_id, record.job_role)

    def list_between(self, start: datetime, end: datetime, role: str | None = None) -> list[FeedbackRecord]:
        query = f"SELECT {self._COLUMNS} FROM feedback_records WHERE timestamp >= ? AND timestamp <= ?"
        params: list[object] = [_timestamp(start), _timestamp(end)]
        if role is not None:
            query += " AND job_role = ?"
            params.append(role)
        query += " ORDER BY timestamp ASC"
        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [self._from_row(row) for row in rows]

    def list_by_role(self, role: str, limit: int = 50) -> list[FeedbackRecord]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {self._COLUMNS} FROM feedback_records WHERE job_role = ? ORDER BY timestamp DESC LIMIT ?",
                (role, max(0, limit)),
            ).fetchall()
        return [self._from_row(row) for row in rows]


class SQLiteWeightConfigStore(_SQLiteStore):
    _COLUMNS = "id, name, weights_json, role, created_at, status, performance_json"

    def _create_schema(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS weight_configurations (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                weights_json TEXT NOT NULL,
                role TEXT,
                created_at TEXT NOT NULL,
                status TEXT NOT NULL,
                performance_json TEXT
            );
            """
        )
        self._conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_weight_configurations_role_status
            ON weight_configurations (role, status);
            """
        )
        row = self._conn.execute("SELECT COUNT(*) FROM weight_configurations").fetchone()
        if row[0] == 0:
            self._write(default_configuration())
            logger.info("weight_config_seeded id=%s", DEFAULT_CONFIGURATION_ID)

    @staticmethod
    def _from_row(row: tuple) -> WeightConfiguration:
        return WeightConfiguration(
            id=row[0],
            name=row[1],
            weights=WeightProfile.model_validate(json.loads(row[2])),
            role=row[3],
            created_at=datetime.fromisoformat(row[4]),
            status=ConfigStatus(row[5]),
            performance=ConfigPerformance.model_validate(json.loads(row[6])) if row[6] else None,
        )

    def _write(self, config: WeightConfiguration) -> None:
        self._conn.execute(
            f"INSERT OR REPLACE INTO weight_configurations ({self._COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                config.id,
                config.name,
                json.dumps(config.weights.as_dict()),
                config.role,
                _timestamp(config.created_at),
                config.status.value,
                json.dumps(config.performance.model_dump()) if config.performance else None,
            ),
        )

    def save(self, config: WeightConfiguration) -> WeightConfiguration:
        _reject_active(config)
        with self._lock:
            self._write(config)
        logger.debug("weight_config_saved id=%s status=%s", config.id, config.status.value)
        return config

    def get(self, config_id: str) -> WeightConfiguration | None:
        with self._lock:
            row = self._conn.execute(
                f"SELECT {self._COLUMNS} FROM weight_configurations WHERE id = ?",
                (config_id,),
            ).fetchone()
        return self._from_row(row) if row else None

    def get_active(self, role: str | None) -> WeightConfiguration | None:
        with self._lock:
            row = self._conn.execute(
                f"SELECT {self._COLUMNS} FROM weight_configurations WHERE role IS ? AND status = ? "
                "ORDER BY created_at DESC LIMIT 1",
                (role, ConfigStatus.ACTIVE.value),
            ).fetchone()
        return self._from_row(row) if row else None

    def list_configurations(self, role: str | None = None) -> list[WeightConfiguration]:
        query = f"SELECT {self._COLUMNS} FROM weight_configurations"
        params: tuple = ()
        if role is not None:
            query += " WHERE role = ?"
            params = (role,)
        query += " ORDER BY created_at ASC"
        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [self._from_row(row) for row in rows]

    def mark_validated(self, config_id: str, weights: WeightProfile) -> WeightConfiguration:
        with self._lock:
            self._conn.execute(
                "UPDATE weight_configurations SET status = ?, weights_json = ? WHERE id = ? AND status = ?",
                (
                    ConfigStatus.VALIDATED.value,
                    json.dumps(weights.as_dict()),
                    config_id,
                    ConfigStatus.PROPOSED.value,
                ),
            )
        config = self.get(config_id)
        if config is None:
            raise ConfigurationNotFoundError(config_id)
        return config

    def activate(self, config_id: str, weights: WeightProfile | None = None) -> WeightConfiguration:
        with self._lock:
            self._conn.execute("BEGIN IMMEDIATE")
            try:
                row = self._conn.execute(
                    "SELECT role, status FROM weight_configurations WHERE id = ?",
                    (config_id,),
                ).fetchone()
                if row is None:
                    raise ConfigurationNotFoundError(config_id)
                role, status = row
                if status != ConfigStatus.ACTIVE.value:
                    self._conn.execute(
                        "UPDATE weight_configurations SET status = ? WHERE role IS ? AND status = ?",
                        (ConfigStatus.SUPERSEDED.value, role, ConfigStatus.ACTIVE.value),
                    )
                    self._conn.execute(
                        "UPDATE weight_configurations SET status = ? WHERE id = ?",
                        (ConfigStatus.ACTIVE.value, config_id),
                    )
                    if weights is not None:
                        self._conn.execute(
                            "UPDATE weight_configurations SET weights_json = ? WHERE id = ?",
                            (json.dumps(weights.as_dict()), config_id),
                        )
                self._conn.execute("COMMIT")
            except Exception:
                self._conn.execute("ROLLBACK")
                raise
        activated = self.get(config_id)
        if activated is None:
            raise ConfigurationNotFoundError(config_id)
        return activated
