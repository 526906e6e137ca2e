class QgdError(Exception):
    """Base class for qgd-specific errors."""


# Container format
class FormatError(QgdError):
    pass


class ChunkLayoutError(QgdError):
    pass


class CodecError(QgdError):
    pass


# Writer lifecycle
class ArchiveOpenError(QgdError):
    pass


class ArchiveStateError(QgdError):
    pass


# Project configuration
class ProjectError(QgdError):
    pass


class PatternError(QgdError):
    pass
