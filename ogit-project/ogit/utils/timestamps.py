# What it does: Resolves the local time for author/committer lines and converts it back for display
# How it does: A timestamp is a pair (epoch seconds, "+HHMM" offset). The pair is resolved once per commit so the author and
#   committer lines always agree

import re
from datetime import datetime, timedelta, timezone

OFFSET_RE = re.compile(r'([+-])(\d{2})(\d{2})', re.ASCII)


def format_offset(seconds): # 19800 -> "+0530", -18000 -> "-0500"
    sign = '-' if seconds < 0 else '+'
    minutes = abs(int(seconds)) // 60
    return f'{sign}{minutes // 60:02d}{minutes % 60:02d}'


def parse_offset(offset): # "+0530" -> 19800; raises ValueError for anything that is not fixed-width
    match = OFFSET_RE.fullmatch(offset)
    if not match:
        raise ValueError(f"invalid UTC offset: {offset!r}")
    sign, hours, minutes = match.groups()
    seconds = int(hours) * 3600 + int(minutes) * 60
    return -seconds if sign == '-' else seconds


def local_now():
    now = datetime.now().astimezone()
    return int(now.timestamp()), format_offset(now.utcoffset().total_seconds())


def to_datetime(timestamp, offset):
    tz = timezone(timedelta(seconds=parse_offset(offset)))
    return datetime.fromtimestamp(timestamp, tz)
