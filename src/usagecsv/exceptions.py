class UsageExportError(Exception):
    """
    UsageExportError is the base for every error raised while
    exporting usage records. The entrypoint catches this type
    to turn a failed run into a non-zero exit.
    """


class ConfigurationError(UsageExportError):
    """
    raised when credentials are missing or malformed. Happens at
    source construction, before any network or disk I/O.
    """


class SourceIterationError(UsageExportError):
    """
    raised when the usage source fails mid-stream (network, auth
    or provider-side errors). Batches flushed before the failure
    remain on disk.
    """


class FilesystemError(UsageExportError):
    """
    raised when the output directory or CSV file cannot be
    created or written.
    """
