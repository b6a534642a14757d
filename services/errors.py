class DecodeFailure(ValueError):
    """The uploaded bytes could not be turned into a header row plus data rows."""


class UnsupportedFileType(ValueError):
    """The file does not carry a spreadsheet extension (.xlsx / .xls)."""


class AnalysisFailure(RuntimeError):
    """Raised by an analyzer when a command could not be analyzed."""


class InvalidTransition(RuntimeError):
    """The requested action is not allowed in the current session phase."""


class CommandInProgress(RuntimeError):
    """Another command is still running for this session."""


class SessionNotFound(KeyError):
    pass
