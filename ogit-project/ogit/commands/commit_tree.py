# The command: ogit commit-tree <tree> [-p <parent>]... [-m <message>]
# What it does: Creates a commit object for an existing tree and prints its id, without moving HEAD
# How it does: Reads the message from -m or, when absent, from stdin. The tree and every parent must already be stored with the right
#   type before the commit is written

import sys

from ogit.utils import commits, config, repository
from ogit.utils.errors import OgitError


def run(args):
    message = args.message if args.message is not None else sys.stdin.buffer.read()

    try:
        repo_root = repository.require_repo_root()
        store_root = repository.store_path(repo_root)
        tree_oid = repository.resolve_object(store_root, args.tree)
        parents = [repository.resolve_object(store_root, p) for p in args.parent or []]
        author = commits.Signature.now(config.get_user_identity(repo_root))
        oid = commits.write_commit(store_root, tree_oid, parents, message, author)
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print(oid)
