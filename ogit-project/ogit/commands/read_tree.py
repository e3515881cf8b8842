# The command: ogit read-tree <tree>
# What it does: Replaces the working directory with the contents of a tree object
# How it does: The tree is flattened first, so a missing or corrupt tree object fails before any file is touched. Then every
#   non-ignored file is removed and each blob is written back with its permission bits

import sys

from ogit.utils import ignore, objects, repository, trees
from ogit.utils.errors import ObjectNotFound, OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        store_root = repository.store_path(repo_root)
        restore_tree(repo_root, repository.resolve_object(store_root, args.tree))
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)


def restore_tree(repo_root, tree_oid): # Full restore: clears non-ignored entries, then writes the tree
    store_root = repository.store_path(repo_root)
    patterns = ignore.load_patterns(repo_root)

    for _, _, blob_oid in trees.iter_tree(store_root, tree_oid):
        if not objects.object_exists(store_root, blob_oid):
            raise ObjectNotFound(blob_oid)

    trees.empty_directory(repo_root, patterns)
    return trees.read_tree(store_root, tree_oid, repo_root)
