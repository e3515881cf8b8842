# The command: ogit checkout <commit>
# What it does: Replaces the working directory with the snapshot of a commit and points HEAD at that commit
# How it does: Resolves the commit and its tree, restores the tree over a cleared working directory and moves HEAD only after every
#   file has been written. There is no merging and no partial checkout; untracked files that are not ignored are removed

import sys

from ogit.utils import commits, repository
from ogit.utils.errors import OgitError

from .read_tree import restore_tree


def run(args):
    try:
        repo_root = repository.require_repo_root()
        commit_hash = checkout_commit(repo_root, args.commit)
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"HEAD is now at {commit_hash[:7]}")


def checkout_commit(repo_root, name):
    store_root = repository.store_path(repo_root)
    commit_hash = repository.resolve_object(store_root, name)
    commit = commits.read_commit(store_root, commit_hash)

    restore_tree(repo_root, commit.tree)
    repository.update_head(store_root, commit_hash)
    return commit_hash
