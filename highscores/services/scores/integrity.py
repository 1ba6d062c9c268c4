"""Keyed-digest verification of score submissions.

The game client serializes the four submitted fields as compact JSON, appends
the shared secret and sends the hex digest along with the fields. The server
repeats the exact same canonicalization and compares.

The defaults (SHA-1, plain string equality, a single static secret) reproduce
what deployed clients expect. They are weak: fast to brute force and open to
timing side channels. Both knobs live on ``IntegrityStrategy`` so they can be
tightened from configuration without touching call sites.
"""

import hashlib
import hmac
import json
import re
from dataclasses import dataclass
from typing import Callable, Dict

from highscores.errors import IntegrityError


def _literal_equals(claimed: str, computed: str) -> bool:
    return claimed == computed


def _constant_time_equals(claimed: str, computed: str) -> bool:
    return hmac.compare_digest(claimed.encode('utf-8'), computed.encode('utf-8'))


_SURROGATE = re.compile('[\ud800-\udfff]')

COMPARISONS: Dict[str, Callable[[str, str], bool]] = {
    'literal': _literal_equals,
    'constant_time': _constant_time_equals,
}


def canonicalize(initials: str, score: int, player_id: str, timestamp_text: str) -> str:
    """Serialize the signed fields exactly the way the game client does.

    Key order and wire names are fixed, there is no whitespace between
    tokens and non-ASCII text is emitted as-is. Lone surrogates are
    written as lowercase ``\\uXXXX`` escapes, like ``JSON.stringify``.
    """
    payload = {
        'initials': initials,
        'score': score,
        'uniqueid': player_id,
        'timestamp': timestamp_text,
    }
    text = json.dumps(payload, separators=(',', ':'), ensure_ascii=False)
    return _SURROGATE.sub(lambda m: f'\\u{ord(m.group()):04x}', text)


@dataclass(frozen=True)
class IntegrityStrategy:
    algorithm: str = 'sha1'
    comparison: str = 'literal'

    def __post_init__(self):
        name = self.algorithm.lower()
        # shake digests need an explicit output length
        if name not in hashlib.algorithms_available or name.startswith('shake_'):
            raise ValueError(f'Unsupported digest algorithm: {self.algorithm}')
        if self.comparison not in COMPARISONS:
            raise ValueError(f'Unknown digest comparison: {self.comparison}')

    def digest(self, text: str) -> str:
        return hashlib.new(self.algorithm.lower(), text.encode('utf-8')).hexdigest()

    def matches(self, claimed: str, computed: str) -> bool:
        return COMPARISONS[self.comparison](claimed, computed)


def compute_digest(initials, score, player_id, timestamp_text, secret, strategy=None) -> str:
    strategy = strategy or IntegrityStrategy()
    return strategy.digest(canonicalize(initials, score, player_id, timestamp_text) + secret)


class IntegrityVerifier:
    """Accepts or rejects submitted fields against a claimed digest."""

    def __init__(self, secret: str, strategy: IntegrityStrategy = None, logger=None):
        if not secret:
            raise ValueError('A shared secret is required for score verification')
        self._secret = secret
        self.strategy = strategy or IntegrityStrategy()
        self.logger = logger

    def expected_digest(self, initials, score, player_id, timestamp_text) -> str:
        return compute_digest(initials, score, player_id, timestamp_text, self._secret, self.strategy)

    def verify(self, initials, score, player_id, timestamp_text, claimed_digest) -> None:
        computed = self.expected_digest(initials, score, player_id, timestamp_text)
        if self.logger is not None:
            self.logger.debug(f"[integrity] received={claimed_digest} recomputed={computed}")
        if not self.strategy.matches(claimed_digest, computed):
            raise IntegrityError('Invalid hash')
