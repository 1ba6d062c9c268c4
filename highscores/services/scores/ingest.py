from highscores.errors import IntegrityError, ValidationError
from highscores.models import ScoreRecord
from highscores.services.scores.integrity import IntegrityVerifier
from highscores.services.scores.store import ScoreStore
from highscores.services.scores.timestamps import TimestampNormalizer

# Largest value a 64-bit INTEGER column holds
MAX_SCORE = 2 ** 63 - 1


def _require_text(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or value.strip() == '':
        raise ValidationError(f"Invalid or missing '{field}'")
    try:
        value.encode('utf-8')
    except UnicodeEncodeError as exc:
        # lone surrogates parse from JSON but cannot be stored as text
        raise ValidationError(f"Invalid or missing '{field}'") from exc
    return value


def _require_score(data: dict) -> int:
    value = data.get('score')
    if isinstance(value, bool):
        raise ValidationError("Invalid or missing 'score'")
    # JSON clients may send 500.0; the signing client serializes it as 500
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0 or value > MAX_SCORE:
        raise ValidationError("Invalid or missing 'score'")
    return value


class ScoreIngestor:
    """validate -> verify digest -> parse timestamp -> insert."""

    def __init__(self, verifier: IntegrityVerifier, normalizer: TimestampNormalizer, store: ScoreStore, logger=None):
        self.verifier = verifier
        self.normalizer = normalizer
        self.store = store
        self.logger = logger

    def submit(self, data) -> ScoreRecord:
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')
        initials = _require_text(data, 'initials')
        score = _require_score(data)
        player_id = _require_text(data, 'uniqueid')
        timestamp_text = _require_text(data, 'timestamp')
        claimed = _require_text(data, 'hash')

        try:
            self.verifier.verify(initials, score, player_id, timestamp_text, claimed)
        except IntegrityError:
            if self.logger is not None:
                self.logger.warning(f"[integrity-reject] uniqueid={player_id} score={score}")
            raise

        submitted_at = self.normalizer.parse(timestamp_text)
        record = ScoreRecord(
            initials=initials,
            score=score,
            player_id=player_id,
            submitted_at=submitted_at,
        )
        self.store.insert(record)
        return record
