"""Score domain services: integrity, timestamps, storage and rankings.

Everything here is built once by ``build_services`` in the application
factory and shared by reference; routes and socket handlers reach it via
``current_app.extensions['highscores']``.
"""

from dataclasses import dataclass

from .ingest import ScoreIngestor
from .integrity import IntegrityStrategy, IntegrityVerifier
from .leaderboard import LeaderboardQueryEngine
from .store import ScoreStore
from .timestamps import TimestampNormalizer


@dataclass
class ScoreServices:
    verifier: IntegrityVerifier
    normalizer: TimestampNormalizer
    store: ScoreStore
    leaderboard: LeaderboardQueryEngine
    ingestor: ScoreIngestor


def build_services(config, db, logger=None) -> ScoreServices:
    strategy = IntegrityStrategy(
        algorithm=config.get('DIGEST_ALGORITHM', 'sha1'),
        comparison=config.get('DIGEST_COMPARISON', 'literal'),
    )
    verifier = IntegrityVerifier(config['SCORE_SECRET_KEY'], strategy, logger=logger)
    normalizer = TimestampNormalizer(config.get('SCORE_TIMEZONE', 'UTC'))
    store = ScoreStore(
        db,
        collapse_duplicates=bool(config.get('COLLAPSE_DUPLICATE_SUBMISSIONS', False)),
        logger=logger,
    )
    leaderboard = LeaderboardQueryEngine(store, normalizer)
    ingestor = ScoreIngestor(verifier, normalizer, store, logger=logger)
    return ScoreServices(verifier, normalizer, store, leaderboard, ingestor)
