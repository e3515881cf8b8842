# The command: ogit hash-object <file>
# What it does: Stores the contents of a file as a blob and prints the blob's id

import sys

from ogit.utils import objects, repository
from ogit.utils.errors import OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        with open(args.file, 'rb') as f:
            content = f.read()
        oid = objects.write_object(repository.store_path(repo_root), content, 'blob')
    except OSError as e:
        print(f"fatal: could not read '{args.file}': {e.strerror}", file=sys.stderr)
        sys.exit(1)
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print(oid)
