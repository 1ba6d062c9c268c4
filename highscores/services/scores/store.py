import threading
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from highscores.errors import StorageError, ValidationError
from highscores.models import ScoreRecord

MAX_TOP_N = 1000


def _check_bound(name: str, value, minimum: int, maximum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Invalid '{name}'")
    if value < minimum or (maximum is not None and value > maximum):
        raise ValidationError(f"Invalid '{name}'")
    return value


class ScoreStore:
    """Append-only table of verified scores with ranked reads.

    Rankings are score descending; equal scores keep insertion order
    (lower id first). Inserts from this process are serialized by a lock and
    each one commits on its own, so a failed insert leaves nothing behind.
    """

    def __init__(self, db, collapse_duplicates: bool = False, logger=None):
        self.db = db
        self.collapse_duplicates = collapse_duplicates
        self.logger = logger
        self._write_lock = threading.Lock()

    def _ranked(self):
        return ScoreRecord.query.order_by(ScoreRecord.score.desc(), ScoreRecord.id.asc())

    def _fail(self, action: str, exc: Exception) -> StorageError:
        if self.logger is not None:
            self.logger.error(f"[storage-error] action={action} error={exc}")
        return StorageError(str(exc))

    def insert(self, record: ScoreRecord) -> int:
        with self._write_lock:
            try:
                if self.collapse_duplicates:
                    existing = ScoreRecord.query.filter_by(
                        initials=record.initials,
                        score=record.score,
                        player_id=record.player_id,
                        submitted_at=record.submitted_at,
                    ).order_by(ScoreRecord.id.asc()).first()
                    if existing is not None:
                        if self.logger is not None:
                            self.logger.info(f"[insert-collapsed] id={existing.id} uniqueid={record.player_id}")
                        return existing.id
                self.db.session.add(record)
                self.db.session.flush()
                new_id = record.id
                self.db.session.commit()
            except Exception as exc:
                # driver errors such as OverflowError reach here unwrapped by SQLAlchemy
                self.db.session.rollback()
                raise self._fail('insert', exc) from exc
        if self.logger is not None:
            self.logger.info(f"[insert] id={new_id} uniqueid={record.player_id} score={record.score}")
        return new_id

    def query_by_player(self, player_id: str, limit: Optional[int] = None, offset: int = 0) -> List[ScoreRecord]:
        _check_bound('offset', offset, 0)
        query = self._ranked().filter(ScoreRecord.player_id == player_id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(_check_bound('limit', limit, 1))
        try:
            return query.all()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise self._fail('query_by_player', exc) from exc

    def query_top_n(self, n: int) -> List[ScoreRecord]:
        _check_bound('n', n, 1, MAX_TOP_N)
        try:
            return self._ranked().limit(n).all()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise self._fail('query_top_n', exc) from exc

    def count(self) -> int:
        try:
            return ScoreRecord.query.count()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise self._fail('count', exc) from exc
