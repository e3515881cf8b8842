# What it does: Defines the exceptions raised by the object store, the codecs and the porcelain commands
# How it does: Every failure derives from OgitError so the command layer can catch one type, print "fatal: ..." and exit
# What data structure it uses: A small class hierarchy (InvalidObject -> MalformedCommit)


class OgitError(Exception):
    pass


class NotARepository(OgitError):
    def __init__(self, path):
        super().__init__(f"not an ogit repository (or any of the parent directories): {path}")
        self.path = path


class RepositoryExists(OgitError): # Store re-initialization; there is no merge-on-reinit
    def __init__(self, path):
        super().__init__(f"repository already exists: {path}")
        self.path = path


class ObjectNotFound(OgitError):
    def __init__(self, oid):
        super().__init__(f"object not found: {oid}")
        self.oid = oid


class AmbiguousObjectName(OgitError):
    def __init__(self, name, candidates):
        super().__init__(f"short object id {name} is ambiguous ({len(candidates)} candidates)")
        self.name = name
        self.candidates = candidates


class ObjectTypeMismatch(OgitError):
    def __init__(self, oid, expected, actual):
        super().__init__(f"object {oid} is a {actual}, expected a {expected}")
        self.oid = oid
        self.expected = expected
        self.actual = actual


class InvalidObject(OgitError):
    """Stored bytes that cannot be decoded: bad header, bad compression, bad tree line."""


class MalformedCommit(InvalidObject):
    pass


class StorageError(OgitError):
    """Filesystem failure while reading or writing; the OSError is kept as __cause__."""


class IdentityUnknown(OgitError):
    def __init__(self):
        super().__init__(
            "Author identity unknown. Run\n\n"
            "  ogit config user.name \"Your Name\"\n"
            "  ogit config user.email \"you@example.com\"\n"
        )
