# What it does: Manages the low-level object database holding every blob, tree and commit
# How it does: Objects are content addressed. The canonical encoding is "<type> <length>\0<payload>", its SHA-1 is the object id,
#   and the zlib-compressed encoding is stored at <store>/<first 2 hex chars>/<remaining 38>. Reading re-hashes the decoded bytes,
#   so an object that does not match the id it was fetched by is reported as corrupt
# What data structure it uses: Hash Table / Dictionary (the store is a content-addressed dictionary keyed by SHA-1), sharded into 256 buckets

import hashlib
import logging
import os
import zlib
from collections import namedtuple

from .errors import InvalidObject, ObjectNotFound, ObjectTypeMismatch, RepositoryExists, StorageError

logger = logging.getLogger(__name__)

OBJECT_TYPES = ('blob', 'tree', 'commit')

OgitObject = namedtuple('OgitObject', ['oid', 'type', 'content'])


def object_header(content, obj_type): # b"<type> <len>\0"
    return f'{obj_type} {len(content)}\0'.encode()


def encode_object(content, obj_type):
    if obj_type not in OBJECT_TYPES:
        raise InvalidObject(f"unknown object type: {obj_type!r}")
    return object_header(content, obj_type) + content


def hash_object(content, obj_type='blob'): # Returns the id the object would be stored under, without writing anything
    return hashlib.sha1(encode_object(content, obj_type)).hexdigest()


def decode_object(data):
    """
    Splits raw object bytes into an OgitObject. The header is everything up to
    the first NUL; the text before its first space names the type.
    """
    null_byte_index = data.find(b'\0')
    if null_byte_index < 0:
        raise InvalidObject("object header is not terminated")

    header = data[:null_byte_index].decode(errors='replace')
    content = data[null_byte_index + 1:]

    obj_type, _, size = header.partition(' ')
    if obj_type not in OBJECT_TYPES:
        raise InvalidObject(f"unknown object type: {obj_type!r}")
    if not (size.isascii() and size.isdigit()) or int(size) != len(content):
        raise InvalidObject(f"object length {size!r} does not match payload of {len(content)} bytes")

    return OgitObject(hashlib.sha1(data).hexdigest(), obj_type, content)


def object_path(store_root, oid):
    return os.path.join(store_root, oid[:2], oid[2:])


def init_store(store_root): # Creates the store root; an existing root is an error
    try:
        os.makedirs(store_root)
    except FileExistsError:
        raise RepositoryExists(store_root)
    except OSError as e:
        raise StorageError(f"cannot create {store_root}: {e}") from e
    logger.debug("Initialized object store in %s", store_root)


def object_exists(store_root, oid):
    return os.path.isfile(object_path(store_root, oid))


def write_object(store_root, content, obj_type): # Hashes content, writes it as an object of the given type and returns its id
    data = encode_object(content, obj_type)
    oid = hashlib.sha1(data).hexdigest()
    path = object_path(store_root, oid)

    if os.path.exists(path):
        logger.debug("Object %s already in store, skipped", oid[:7])
        return oid

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb') as f:
            f.write(zlib.compress(data))
    except OSError as e:
        raise StorageError(f"cannot write object {oid}: {e}") from e

    logger.debug("Stored %s %s (%d bytes)", obj_type, oid[:7], len(content))
    return oid


def read_object(store_root, oid, expected=None): # Reads an object by its id; `expected` restricts the accepted type
    path = object_path(store_root, oid)

    try:
        with open(path, 'rb') as f:
            compressed_data = f.read()
    except (FileNotFoundError, NotADirectoryError):
        raise ObjectNotFound(oid)
    except OSError as e:
        raise StorageError(f"cannot read object {oid}: {e}") from e

    try:
        data = zlib.decompress(compressed_data)
    except zlib.error as e:
        raise InvalidObject(f"object {oid} is not valid zlib data") from e

    obj = decode_object(data)
    if obj.oid != oid:
        raise InvalidObject(f"object {oid} is corrupt (content hashes to {obj.oid})")

    if expected is not None and obj.type != expected:
        raise ObjectTypeMismatch(oid, expected, obj.type)
    return obj


def find_objects(store_root, prefix): # All stored ids starting with a hex prefix of at least 2 characters
    shard_dir = os.path.join(store_root, prefix[:2])
    if not os.path.isdir(shard_dir):
        return []
    rest = prefix[2:]
    return sorted(prefix[:2] + name for name in os.listdir(shard_dir) if name.startswith(rest))
