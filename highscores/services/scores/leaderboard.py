from typing import Dict, List, Optional

from highscores.services.scores.store import ScoreStore
from highscores.services.scores.timestamps import TimestampNormalizer

TOP_10 = 10
TOP_100 = 100


class LeaderboardQueryEngine:
    """Shapes ScoreStore reads into the payloads served to clients.

    Player history and top-10 carry display strings in ``timestamp``;
    the top-100 feed carries raw epoch seconds instead, as the legacy
    machine endpoint always did.
    """

    def __init__(self, store: ScoreStore, normalizer: TimestampNormalizer):
        self.store = store
        self.normalizer = normalizer

    def _display_rows(self, records) -> List[Dict]:
        return [
            {
                'initials': r.initials,
                'score': r.score,
                'timestamp': self.normalizer.format_display(r.submitted_at),
            }
            for r in records
        ]

    def player_scores(self, player_id: str, limit: Optional[int] = None, offset: int = 0) -> List[Dict]:
        return self._display_rows(self.store.query_by_player(player_id, limit=limit, offset=offset))

    def top_10(self) -> List[Dict]:
        return self._display_rows(self.store.query_top_n(TOP_10))

    def top_100_raw(self) -> List[Dict]:
        records = self.store.query_top_n(TOP_100)
        return [{'initials': r.initials, 'score': r.score, 'timestamp': r.submitted_at} for r in records]
