# What it does: Builds tree objects from a directory on disk and restores a directory from a tree object
# How it does: `write_tree` walks the directory depth-first in post-order: files become blobs, subdirectories become trees, and the
#   directory itself is stored as one line per child ("<mode> <type> <id> <name>"). Children are listed in the order the filesystem
#   returns them, not sorted, so a tree id depends on that order. `read_tree` flattens a tree back into (path, mode, blob id)
#   triples and writes each blob to its path
# What data structure it uses: Merkle Tree (every tree id is derived from the ids of its children, so any nested change alters the
#   root id), built with recursion

import logging
import os
import stat
from collections import namedtuple

from . import ignore, objects
from .errors import InvalidObject, StorageError

logger = logging.getLogger(__name__)

TREE_MODE = '040000'

TreeEntry = namedtuple('TreeEntry', ['mode', 'type', 'oid', 'name'])


def format_filemode(st_mode, obj_type):
    if obj_type == 'tree':
        return TREE_MODE
    return f'{st_mode:06o}'


def serialize_tree(entries): # File names are written as raw filesystem bytes, unescaped
    return b''.join(f'{e.mode} {e.type} {e.oid} '.encode() + os.fsencode(e.name) + b'\n' for e in entries)


def parse_tree(content): # Parses a tree payload into a list of TreeEntry, rejecting names that could escape the directory
    entries = []
    for line in content.split(b'\n'):
        if not line:
            continue
        parts = line.split(b' ', 3)
        if len(parts) != 4:
            raise InvalidObject(f"malformed tree entry: {line!r}")
        mode, obj_type, oid = (part.decode(errors='replace') for part in parts[:3])
        name = os.fsdecode(parts[3])
        if obj_type not in ('blob', 'tree'):
            raise InvalidObject(f"unexpected {obj_type!r} entry in tree: {line!r}")
        if '/' in name or os.sep in name or name in ('', '.', '..'):
            raise InvalidObject(f"unsafe file name in tree: {name!r}")
        entries.append(TreeEntry(mode, obj_type, oid, name))
    return entries


def write_tree(store_root, directory, ignore_patterns=(), _prefix=''):
    """
    Recursively writes `directory` to the object store and returns the id of its tree.

    Symbolic links to directories are skipped; links to files are stored as the
    file they point to. `ignore_patterns` are compiled matchers (see
    ignore.compile_patterns); they are checked against paths relative to the
    top-level directory.
    """
    patterns = list(ignore_patterns) or ignore.compile_patterns([])
    entries = []

    try:
        with os.scandir(directory) as it:
            children = list(it)
    except OSError as e:
        raise StorageError(f"cannot list {directory}: {e}") from e

    for child in children:
        rel_path = _prefix + child.name
        if ignore.is_ignored(rel_path, patterns):
            continue

        if child.is_symlink() and child.is_dir():
            # Linked directories may point outside the snapshot or back into it
            logger.debug("Skipping symlinked directory %s", rel_path)
            continue

        if child.is_dir(follow_symlinks=False):
            oid = write_tree(store_root, child.path, patterns, rel_path + '/')
            entries.append(TreeEntry(TREE_MODE, 'tree', oid, child.name))
        else:
            try:
                with open(child.path, 'rb') as f:
                    content = f.read()
                st_mode = os.stat(child.path).st_mode
            except OSError as e:
                raise StorageError(f"cannot read {child.path}: {e}") from e
            oid = objects.write_object(store_root, content, 'blob')
            entries.append(TreeEntry(format_filemode(st_mode, 'blob'), 'blob', oid, child.name))

    tree_oid = objects.write_object(store_root, serialize_tree(entries), 'tree')
    logger.debug("Wrote tree %s for %s (%d entries)", tree_oid[:7], directory, len(entries))
    return tree_oid


def read_tree_entries(store_root, tree_oid):
    return parse_tree(objects.read_object(store_root, tree_oid, expected='tree').content)


def iter_tree(store_root, tree_oid, base=''): # Flattens a tree into (relative path, mode, blob id), depth-first
    for entry in read_tree_entries(store_root, tree_oid):
        path = base + entry.name
        if entry.type == 'blob':
            yield path, entry.mode, entry.oid
        else:
            yield from iter_tree(store_root, entry.oid, path + '/')


def read_tree(store_root, tree_oid, directory):
    """
    Writes every blob reachable from `tree_oid` below `directory`, restoring its
    permission bits. Existing files are overwritten; nothing is removed.
    """
    files = list(iter_tree(store_root, tree_oid))
    for path, mode, blob_oid in files:
        content = objects.read_object(store_root, blob_oid, expected='blob').content
        full_path = os.path.join(directory, *path.split('/'))
        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, 'wb') as f:
                f.write(content)
            os.chmod(full_path, stat.S_IMODE(int(mode, 8)))
        except ValueError as e:
            raise InvalidObject(f"bad file mode {mode!r} for {path}") from e
        except OSError as e:
            raise StorageError(f"cannot restore {path}: {e}") from e

    logger.debug("Restored %d files from tree %s", len(files), tree_oid[:7])
    return files


def empty_directory(directory, ignore_patterns): # Removes every non-ignored file, then every non-ignored directory left empty
    for root, dirnames, filenames in os.walk(directory, topdown=False):
        rel_root = os.path.relpath(root, directory)
        rel_root = '' if rel_root == '.' else rel_root.replace(os.sep, '/') + '/'
        if rel_root and ignore.is_ignored(rel_root.rstrip('/'), ignore_patterns):
            continue

        for filename in filenames:
            if ignore.is_ignored(rel_root + filename, ignore_patterns):
                continue
            try:
                os.remove(os.path.join(root, filename))
            except OSError as e:
                raise StorageError(f"cannot remove {rel_root + filename}: {e}") from e

        for dirname in dirnames:
            path = os.path.join(root, dirname)
            if ignore.is_ignored(rel_root + dirname, ignore_patterns):
                continue
            if os.path.islink(path):
                os.remove(path)
                continue
            try:
                os.rmdir(path)
            except OSError:
                pass # still holds ignored files
