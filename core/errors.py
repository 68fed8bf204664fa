# =============================================================================
# core/errors.py  -  Exception hierarchy
# =============================================================================
#
#   MediaWikiMCPError
#     ├── ConfigurationError   startup only; the process does not serve
#     └── WikiAPIError         one remote call failed; propagates to the
#                              tool invocation as an error result
#
# "Nothing found" is NOT an error anywhere in this project.  A missing page,
# an empty search or a category without members are ordinary results.
# =============================================================================


class MediaWikiMCPError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(MediaWikiMCPError):
    """Configuration or environment setup error."""


class WikiAPIError(MediaWikiMCPError):
    """The wiki could not be reached or reported an error for a query."""
