# What it does: Encodes commit metadata into the canonical commit payload and parses it back
# How it does: A commit payload is a block of header lines ("tree", "parent", "author", "committer"), a blank line and the message.
#   The message is kept as raw bytes so any encoding survives a round trip. Writing a commit first checks that its tree and parents
#   exist with the right types, so a commit never references a missing object
# What data structure it uses: Directed Acyclic Graph (DAG) (each commit links to its parents); the porcelain keeps it linear

import logging
from collections import namedtuple

from . import objects, timestamps
from .errors import MalformedCommit

logger = logging.getLogger(__name__)

HEADER_KEYS = (b'tree', b'parent', b'author', b'committer')

Commit = namedtuple('Commit', ['tree', 'parents', 'author', 'committer', 'message'])


class Signature(namedtuple('Signature', ['identity', 'timestamp', 'offset'])):
    """Who made a commit and when: identity text, epoch seconds and a "+HHMM" UTC offset."""

    __slots__ = ()

    @classmethod
    def now(cls, identity):
        timestamp, offset = timestamps.local_now()
        return cls(identity, timestamp, offset)

    def format(self, keyword): # Refuses anything parse_signature could not read back
        identity = self.identity
        if not isinstance(identity, str) or len(identity.split()) < 2 or identity != identity.strip() \
                or '\n' in identity or '\r' in identity:
            raise MalformedCommit(f"{keyword} identity must look like 'Name <email>', got {identity!r}")
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise MalformedCommit(f"{keyword} timestamp must be whole epoch seconds, got {self.timestamp!r}")
        try:
            timestamps.to_datetime(self.timestamp, self.offset)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise MalformedCommit(f"bad {keyword} time {self.timestamp!r} {self.offset!r}") from e
        return f'{keyword} {identity} {self.timestamp} {self.offset}'

    @property
    def datetime(self):
        return timestamps.to_datetime(self.timestamp, self.offset)


def parse_signature(line):
    """
    Parses "<keyword> <identity...> <epoch> <+HHMM>". The identity is everything
    between the keyword and the two trailing fields.
    """
    tokens = line.split()
    if len(tokens) < 5:
        raise MalformedCommit(f"expected at least 5 fields in {line!r}")

    _, value = line.split(None, 1)
    identity, epoch, offset = value.rsplit(None, 2)
    try:
        timestamp = int(epoch)
        timestamps.to_datetime(timestamp, offset)
    except (ValueError, OverflowError, OSError) as e:
        raise MalformedCommit(f"bad timestamp in {line!r}") from e
    return Signature(identity, timestamp, offset)


def encode_commit(tree, parents, author, committer, message):
    if isinstance(message, str):
        message = message.encode()

    lines = [f'tree {tree}']
    for parent in parents:
        lines.append(f'parent {parent}')
    lines.append(author.format('author'))
    lines.append(committer.format('committer'))
    lines.append('')

    header = '\n'.join(lines).encode() + b'\n'
    return header + message.rstrip() + b'\n'


def decode_commit(content):
    """
    Parses a commit payload. Header lines are recognised by their keyword; the
    header ends at the first blank line, or at the first line with an unknown
    keyword, and everything from there on is the message.
    """
    fields = {b'tree': [], b'parent': [], b'author': [], b'committer': []}
    lines = content.split(b'\n')
    message_start = len(lines)

    for i, line in enumerate(lines):
        if not line.strip():
            message_start = i + 1
            break
        keyword, _, value = line.partition(b' ')
        if keyword not in HEADER_KEYS or not value:
            message_start = i
            break
        fields[keyword].append(line.decode(errors='replace'))

    message = b'\n'.join(lines[message_start:])
    if message.endswith(b'\n'):
        message = message[:-1]

    if len(fields[b'tree']) != 1:
        raise MalformedCommit("commit must name exactly one tree")
    if len(fields[b'author']) != 1 or len(fields[b'committer']) != 1:
        raise MalformedCommit("commit must have one author and one committer line")

    return Commit(
        tree=fields[b'tree'][0].split(' ', 1)[1].strip(),
        parents=[line.split(' ', 1)[1].strip() for line in fields[b'parent']],
        author=parse_signature(fields[b'author'][0]),
        committer=parse_signature(fields[b'committer'][0]),
        message=message,
    )


def write_commit(store_root, tree, parents, message, author, committer=None): # Validates the references, encodes and stores a commit
    objects.read_object(store_root, tree, expected='tree')
    for parent in parents:
        objects.read_object(store_root, parent, expected='commit')

    content = encode_commit(tree, parents, author, committer or author, message)
    oid = objects.write_object(store_root, content, 'commit')
    logger.debug("Wrote commit %s (tree %s, %d parents)", oid[:7], tree[:7], len(parents))
    return oid


def read_commit(store_root, oid):
    return decode_commit(objects.read_object(store_root, oid, expected='commit').content)


def iter_history(store_root, oid): # Follows first parents from `oid` back to the root commit
    while oid:
        commit = read_commit(store_root, oid)
        yield oid, commit
        oid = commit.parents[0] if commit.parents else None
