"""
Reputation Ledger - per (category, user) reputation scores.

Two backends share one contract:
  - SqlReputationLedger keeps scores in the relational store
  - RedisReputationLedger keeps scores in Redis, one integer key per record

Records are created lazily: a first read stores and returns DEFAULT_REPUTATION,
a first write stores DEFAULT_REPUTATION + delta. Scores may go negative.
"""
import logging
from typing import Optional

import redis
from sqlalchemy import update
from sqlalchemy.orm import Session

from answerboard.core.config import settings
from answerboard.db import unit_of_work, storage_errors
from answerboard.errors import StorageError, WriteConflictError
from answerboard.models import ReputationRecord

logger = logging.getLogger(__name__)


class ReputationLedger:
    """Contract every reputation backend implements."""

    default_score: int = settings.DEFAULT_REPUTATION

    def get(self, category: str, user_id: str) -> int:
        raise NotImplementedError

    def adjust(self, category: str, user_id: str, delta: int) -> None:
        raise NotImplementedError


class SqlReputationLedger(ReputationLedger):
    """Ledger stored in the reputation_records table."""

    def __init__(self, db: Session, default_score: Optional[int] = None):
        self.db = db
        if default_score is not None:
            self.default_score = default_score

    def _find(self, category: str, user_id: str) -> Optional[ReputationRecord]:
        return self.db.query(ReputationRecord).filter(
            ReputationRecord.category == category,
            ReputationRecord.user_id == user_id,
        ).first()

    def get(self, category: str, user_id: str) -> int:
        with storage_errors():
            record = self._find(category, user_id)
        if record is not None:
            return record.score

        try:
            with unit_of_work(self.db):
                self.db.add(ReputationRecord(category=category, user_id=user_id, score=self.default_score))
        except WriteConflictError:
            # Another worker created the record between our read and insert
            with storage_errors():
                record = self._find(category, user_id)
            if record is None:
                raise StorageError("Reputation record vanished after concurrent insert")
            return record.score

        logger.debug("Created reputation record %s/%s with default %s", category, user_id, self.default_score)
        return self.default_score

    def _increment(self, category: str, user_id: str, delta: int) -> bool:
        result = self.db.execute(
            update(ReputationRecord)
            .where(
                ReputationRecord.category == category,
                ReputationRecord.user_id == user_id,
            )
            .values(score=ReputationRecord.score + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def adjust(self, category: str, user_id: str, delta: int) -> None:
        try:
            with unit_of_work(self.db):
                if not self._increment(category, user_id, delta):
                    self.db.add(ReputationRecord(
                        category=category,
                        user_id=user_id,
                        score=self.default_score + delta,
                    ))
        except WriteConflictError:
            # Lost the insert race; the record exists now, so increment it
            with unit_of_work(self.db):
                if not self._increment(category, user_id, delta):
                    raise StorageError("Reputation record missing after insert conflict")

        logger.info("Reputation %s/%s adjusted by %+d", category, user_id, delta)


class RedisReputationLedger(ReputationLedger):
    """Ledger stored in Redis under rep:{category}:{user_id}."""

    KEY_PREFIX = "rep"

    def __init__(self, client: "redis.Redis", default_score: Optional[int] = None):
        self._redis = client
        if default_score is not None:
            self.default_score = default_score

    def _key(self, category: str, user_id: str) -> str:
        return f"{self.KEY_PREFIX}:{category}:{user_id}"

    def get(self, category: str, user_id: str) -> int:
        key = self._key(category, user_id)
        try:
            pipe = self._redis.pipeline(transaction=True)
            pipe.set(key, self.default_score, nx=True)
            pipe.get(key)
            _, value = pipe.execute()
        except redis.RedisError as e:
            logger.error("Redis reputation read failed for %s: %s", key, e)
            raise StorageError("Reputation store unavailable") from e
        return int(value)

    def adjust(self, category: str, user_id: str, delta: int) -> None:
        key = self._key(category, user_id)
        try:
            # SET NX seeds the default so INCRBY lands on default + delta for new records
            pipe = self._redis.pipeline(transaction=True)
            pipe.set(key, self.default_score, nx=True)
            pipe.incrby(key, delta)
            _, score = pipe.execute()
        except redis.RedisError as e:
            logger.error("Redis reputation update failed for %s: %s", key, e)
            raise StorageError("Reputation store unavailable") from e
        logger.info("Reputation %s adjusted by %+d (now %s)", key, delta, score)


_redis_client: Optional["redis.Redis"] = None


def get_redis_client() -> "redis.Redis":
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_client


def build_ledger(db: Session) -> ReputationLedger:
    """Ledger for the configured REPUTATION_BACKEND."""
    if settings.uses_redis_ledger:
        return RedisReputationLedger(get_redis_client())
    return SqlReputationLedger(db)
