# Unit tests for utils/objects.py

import pytest
import os
import zlib

from ogit.utils import objects
from ogit.utils.errors import (
    InvalidObject, ObjectNotFound, ObjectTypeMismatch, RepositoryExists, StorageError
)

HELLO_ID = '95d09f2b10159347eece71399a7e2e907ea3df4f'


class TestHashObject:
    # Tests for objects.hash_object() and the canonical encoding

    def test_known_blob_id(self):
        assert objects.hash_object(b'hello world', 'blob') == HELLO_ID

    def test_header_format(self):
        assert objects.encode_object(b'hello world', 'blob') == b'blob 11\x00hello world'

    def test_deterministic(self):
        first = objects.hash_object(b'some content', 'tree')
        assert objects.hash_object(b'some content', 'tree') == first

    def test_type_changes_id(self):
        assert objects.hash_object(b'x', 'blob') != objects.hash_object(b'x', 'commit')

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidObject):
            objects.encode_object(b'x', 'tag')


class TestDecodeObject:
    # Tests for objects.decode_object()

    @pytest.mark.parametrize('obj_type', objects.OBJECT_TYPES)
    def test_decode_encoded(self, obj_type):
        payload = b'\x00\xffbinary\npayload'
        obj = objects.decode_object(objects.encode_object(payload, obj_type))
        assert obj.type == obj_type
        assert obj.content == payload
        assert obj.oid == objects.hash_object(payload, obj_type)

    def test_unknown_type(self):
        with pytest.raises(InvalidObject):
            objects.decode_object(b'tag 3\x00abc')

    def test_missing_nul(self):
        with pytest.raises(InvalidObject):
            objects.decode_object(b'blob 3 abc')

    def test_non_ascii_digit_length(self):
        with pytest.raises(InvalidObject):
            objects.decode_object('blob ²'.encode() + b'\x00x')

    def test_length_mismatch(self):
        with pytest.raises(InvalidObject):
            objects.decode_object(b'blob 5\x00abc')


class TestObjectStore:
    # Tests for writing and reading objects on disk

    def test_sharded_path(self, store_root):
        oid = objects.write_object(store_root, b'hello world', 'blob')
        assert oid == HELLO_ID
        assert os.path.isfile(os.path.join(store_root, '95', 'd09f2b10159347eece71399a7e2e907ea3df4f'))

    def test_stored_bytes_are_compressed_encoding(self, store_root):
        oid = objects.write_object(store_root, b'hello world', 'blob')
        with open(objects.object_path(store_root, oid), 'rb') as f:
            assert zlib.decompress(f.read()) == b'blob 11\x00hello world'

    def test_read_back(self, store_root):
        oid = objects.write_object(store_root, b'payload', 'tree')
        obj = objects.read_object(store_root, oid)
        assert obj == (oid, 'tree', b'payload')

    def test_write_is_idempotent(self, store_root):
        first = objects.write_object(store_root, b'same', 'blob')
        second = objects.write_object(store_root, b'same', 'blob')
        assert first == second
        assert objects.read_object(store_root, first).content == b'same'

    def test_expected_type_mismatch(self, store_root):
        oid = objects.write_object(store_root, b'', 'tree')
        with pytest.raises(ObjectTypeMismatch) as excinfo:
            objects.read_object(store_root, oid, expected='blob')
        assert excinfo.value.expected == 'blob'
        assert excinfo.value.actual == 'tree'
        assert 'blob' in str(excinfo.value) and 'tree' in str(excinfo.value)

    def test_not_found(self, store_root):
        with pytest.raises(ObjectNotFound):
            objects.read_object(store_root, 'ab' * 20)

    def test_corrupt_compression(self, store_root):
        oid = objects.write_object(store_root, b'data', 'blob')
        with open(objects.object_path(store_root, oid), 'wb') as f:
            f.write(b'not zlib')
        with pytest.raises(InvalidObject):
            objects.read_object(store_root, oid)

    def test_content_not_matching_id(self, store_root):
        oid = objects.write_object(store_root, b'original', 'blob')
        with open(objects.object_path(store_root, oid), 'wb') as f:
            f.write(zlib.compress(objects.encode_object(b'tampered', 'blob')))
        with pytest.raises(InvalidObject):
            objects.read_object(store_root, oid)

    def test_write_failure_is_storage_error(self, store_root):
        oid = objects.hash_object(b'blocked', 'blob')
        # A file where the shard directory should be
        with open(os.path.join(store_root, oid[:2]), 'w') as f:
            f.write('')
        with pytest.raises(StorageError) as excinfo:
            objects.write_object(store_root, b'blocked', 'blob')
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_object_exists(self, store_root):
        oid = objects.write_object(store_root, b'x', 'blob')
        assert objects.object_exists(store_root, oid)
        assert not objects.object_exists(store_root, '00' * 20)

    def test_find_objects_by_prefix(self, store_root):
        oid = objects.write_object(store_root, b'hello world', 'blob')
        assert objects.find_objects(store_root, oid[:6]) == [oid]
        assert objects.find_objects(store_root, 'ffff') == []


class TestInitStore:
    # Tests for objects.init_store()

    def test_creates_root(self, temp_dir):
        store_root = os.path.join(temp_dir, '.ogit')
        objects.init_store(store_root)
        assert os.path.isdir(store_root)

    def test_reinit_fails(self, temp_dir):
        store_root = os.path.join(temp_dir, '.ogit')
        objects.init_store(store_root)
        with pytest.raises(RepositoryExists):
            objects.init_store(store_root)
