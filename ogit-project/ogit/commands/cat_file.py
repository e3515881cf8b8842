# The command: ogit cat-file [-t] <object>
# What it does: Writes the raw payload of an object to stdout, or only its type with -t

import sys

from ogit.utils import objects, repository
from ogit.utils.errors import OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        store_root = repository.store_path(repo_root)
        obj = objects.read_object(store_root, repository.resolve_object(store_root, args.object))
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    if args.type:
        print(obj.type)
        return
    sys.stdout.flush()
    sys.stdout.buffer.write(obj.content)
    sys.stdout.flush()
