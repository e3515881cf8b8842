# The command: ogit commit -m "<message>"
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the whole working directory and moves HEAD to it
# How it does: It builds a Merkle Tree of the working directory to get a single root hash for the project's state. The parent is the
#   current HEAD (none for the first commit), so history stays linear. The commit object is written first and HEAD is updated last,
#   so HEAD never names a commit that failed to be stored
# What data structure it uses: Merkle Tree (the project's file structure), Directed Acyclic Graph (DAG) (each commit links to its
#   parent), Hash Table / Dictionary (the underlying object store)

import sys

from ogit.utils import commits, config, ignore, repository, trees
from ogit.utils.errors import OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        commit_hash = create_commit(repo_root, args.message)
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    subject = args.message.splitlines()[0] if args.message.strip() else ''
    print(f"[{commit_hash[:7]}] {subject}")


def create_commit(repo_root, message, author=None, when=None):
    """
    Snapshots `repo_root` and records it as a child of HEAD.

    `author` defaults to the configured user identity; `when` is a
    (epoch seconds, "+HHMM") pair and defaults to the local time.
    """
    store_root = repository.store_path(repo_root)

    tree_hash = trees.write_tree(store_root, repo_root, ignore.load_patterns(repo_root))

    parent_commit = repository.read_head(store_root)
    parents = [parent_commit] if parent_commit else [] # List of parent commits (empty for initial commit)

    identity = author or config.get_user_identity(repo_root)
    if when is None:
        signature = commits.Signature.now(identity)
    else:
        signature = commits.Signature(identity, *when)

    commit_hash = commits.write_commit(store_root, tree_hash, parents, message, signature)
    repository.update_head(store_root, commit_hash)
    return commit_hash
