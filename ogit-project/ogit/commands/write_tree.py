# The command: ogit write-tree [directory]
# What it does: Snapshots a directory (the repository root by default) as a tree object and prints its id
# How it does: Recursively stores every non-ignored file as a blob and every directory as a tree. Nothing else changes; HEAD is untouched

import os
import sys

from ogit.utils import ignore, repository, trees
from ogit.utils.errors import OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        directory = args.directory or repo_root
        if not os.path.isdir(directory):
            print(f"fatal: not a directory: '{directory}'", file=sys.stderr)
            sys.exit(1)
        patterns = ignore.load_patterns(repo_root)
        tree_oid = trees.write_tree(repository.store_path(repo_root), directory, patterns)
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print(tree_oid)
