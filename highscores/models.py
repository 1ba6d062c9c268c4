from sqlalchemy import event

from highscores import db
from highscores.errors import StorageError


class ScoreRecord(db.Model):
    __tablename__ = 'scores'
    __table_args__ = (
        db.CheckConstraint('score >= 0', name='ck_scores_score_non_negative'),
        {'sqlite_autoincrement': True},
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    initials = db.Column(db.Text, nullable=False)
    score = db.Column(db.Integer, nullable=False, index=True)
    # Column names match the legacy highscores.db layout
    player_id = db.Column('uniqueid', db.Text, nullable=False, index=True)
    submitted_at = db.Column('timestamp', db.Integer, nullable=False)

    def __repr__(self):
        return f'<ScoreRecord id={self.id} initials={self.initials!r} score={self.score}>'


@event.listens_for(ScoreRecord, 'before_update')
def _refuse_update(mapper, connection, target):
    raise StorageError(f'Score record {target.id} is immutable')


@event.listens_for(ScoreRecord, 'before_delete')
def _refuse_delete(mapper, connection, target):
    raise StorageError(f'Score record {target.id} cannot be deleted')
