# What it does: Locates the repository and manages HEAD, the only mutable pointer in it
# How it does: `find_repo_root` walks up the directory tree to locate the `.ogit` directory. HEAD is a single file inside the store
#   holding one commit id; a missing or empty file means no commit has been made yet. Object names given by the user are resolved
#   here (HEAD, full ids, unique abbreviated ids)
# What data structure it uses: Linear recursion to find the repo root; HEAD is a pointer into the commit graph

import logging
import os
import string

from . import objects
from .errors import AmbiguousObjectName, NotARepository, ObjectNotFound, StorageError

logger = logging.getLogger(__name__)

STORE_DIR = '.ogit'
HEAD_FILE = 'HEAD'
MIN_ABBREV = 4


def store_path(repo_root):
    return os.path.join(repo_root, STORE_DIR)


def find_repo_root(path='.'): # Recursively searches for the .ogit directory to find the repository root
    path = os.path.abspath(path)
    if os.path.isdir(store_path(path)):
        return path
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_repo_root(parent_path)


def require_repo_root(path='.'):
    repo_root = find_repo_root(path)
    if not repo_root:
        raise NotARepository(os.path.abspath(path))
    return repo_root


def read_head(store_root): # Returns the commit id HEAD points to, or None if there are no commits
    head_path = os.path.join(store_root, HEAD_FILE)
    try:
        with open(head_path, 'r') as f:
            head_content = f.read().strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageError(f"cannot read HEAD: {e}") from e
    return head_content or None


def update_head(store_root, oid):
    head_path = os.path.join(store_root, HEAD_FILE)
    try:
        with open(head_path, 'w') as f:
            f.write(f"{oid}\n")
    except OSError as e:
        raise StorageError(f"cannot update HEAD: {e}") from e
    logger.debug("HEAD is now %s", oid)


def resolve_object(store_root, name):
    if name in ('HEAD', '@'):
        oid = read_head(store_root)
        if not oid:
            raise ObjectNotFound('HEAD')
        return oid

    name = name.lower()
    if not name or not all(c in string.hexdigits for c in name):
        raise ObjectNotFound(name)
    if len(name) == 40:
        return name
    if len(name) < MIN_ABBREV:
        raise ObjectNotFound(name)

    candidates = objects.find_objects(store_root, name)
    if not candidates:
        raise ObjectNotFound(name)
    if len(candidates) > 1:
        raise AmbiguousObjectName(name, candidates)
    return candidates[0]
