"""
Failure taxonomy for milestone badge generation.

InvalidInput is the caller's fault (400). Everything under UpstreamError
comes from the GitHub API side and is reported as a 500.
"""


class MilestoneError(Exception):
    pass


class InvalidInput(MilestoneError):
    """Bad or missing query parameters. The message is safe to show."""


class UpstreamError(MilestoneError):
    """Network failure, non-2xx status or malformed response from GitHub."""


class NotFound(UpstreamError):
    """The repository does not exist (or is not visible to the token)."""


class UpstreamInconsistency(UpstreamError):
    """The stargazer page holds fewer records than the star count promised."""


class MalformedRecord(UpstreamError):
    """A stargazer record came back without a starred_at timestamp."""
