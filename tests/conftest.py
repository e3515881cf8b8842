# Shared pytest fixtures for ogit tests

import pytest
import os
import shutil
import tempfile

from ogit.utils import objects, repository, trees, commits, ignore

AUTHOR = "Test User <test@example.com>"
WHEN = (1700000000, '+0000')


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = os.path.realpath(tempfile.mkdtemp())
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_repo(temp_dir):
    # Creates an initialized ogit repository in a temporary directory
    original_dir = os.getcwd()
    os.chdir(temp_dir)

    objects.init_store(repository.store_path(temp_dir))

    # Set up config
    config_path = os.path.join(temp_dir, '.ogit', 'config')
    with open(config_path, 'w') as f:
        f.write('[user]\n')
        f.write('name = Test User\n')
        f.write('email = test@example.com\n')

    yield temp_dir

    os.chdir(original_dir)


@pytest.fixture
def store_root(temp_repo):
    return repository.store_path(temp_repo)


@pytest.fixture
def repo_with_file(temp_repo):
    # Creates a repo with a single file (not committed)
    file_path = os.path.join(temp_repo, 'test.txt')
    with open(file_path, 'w') as f:
        f.write('Hello, World!')
    return temp_repo


@pytest.fixture
def repo_with_commit(temp_repo):
    # Creates a repo with one committed file, built from the low-level functions
    file_path = os.path.join(temp_repo, 'README.md')
    with open(file_path, 'w') as f:
        f.write('# Test Project\n')

    store_root = repository.store_path(temp_repo)
    tree_hash = trees.write_tree(store_root, temp_repo, ignore.compile_patterns([]))

    author = commits.Signature(AUTHOR, *WHEN)
    commit_hash = commits.write_commit(store_root, tree_hash, [], "Initial commit", author)
    repository.update_head(store_root, commit_hash)

    return temp_repo, commit_hash


def write_file(root, rel_path, content, mode=None): # Creates parent directories, writes bytes or text, optionally chmods
    path = os.path.join(root, *rel_path.split('/'))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'wb') as f:
        f.write(content.encode() if isinstance(content, str) else content)
    if mode is not None:
        os.chmod(path, mode)
    return path


def read_file(root, rel_path):
    with open(os.path.join(root, *rel_path.split('/')), 'rb') as f:
        return f.read()
