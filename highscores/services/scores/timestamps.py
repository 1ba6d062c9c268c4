import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from highscores.errors import FormatError

_DELIMITERS = re.compile(r'[/: ]')
_NUMERIC = re.compile(r'[0-9]+')


class TimestampNormalizer:
    """Converts client timestamps (``DD/MM/YYYY HH:MM:SS``) to epoch seconds.

    The six fields are read as wall-clock time in ``zone``. Stored instants
    carry no zone, so ``format_display`` must use the same one for the
    rendered time to match what the client sent.
    """

    def __init__(self, zone: str = 'UTC'):
        try:
            self.tz = ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f'Unknown time zone: {zone}') from exc
        self.zone = zone

    def parse(self, text: str) -> int:
        parts = _DELIMITERS.split(text)
        if len(parts) != 6 or not all(_NUMERIC.fullmatch(p) for p in parts):
            raise FormatError('Invalid timestamp format')
        day, month, year, hours, minutes, seconds = (int(p) for p in parts)
        try:
            moment = datetime(year, month, day, hours, minutes, seconds, tzinfo=self.tz)
        except (ValueError, OverflowError) as exc:
            raise FormatError('Invalid timestamp format') from exc
        return int(moment.timestamp())

    def format_display(self, epoch_seconds: int) -> str:
        """Render like ``toLocaleString('en-US')``: ``6/15/2024, 10:30:00 AM``."""
        moment = datetime.fromtimestamp(epoch_seconds, tz=self.tz)
        hour = moment.hour % 12 or 12
        meridiem = 'AM' if moment.hour < 12 else 'PM'
        return (
            f'{moment.month}/{moment.day}/{moment.year}, '
            f'{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}'
        )
