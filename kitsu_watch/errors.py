"""
Error types raised while resolving and syncing a watched episode

Every fatal condition of a watch run is a KitsuWatchError subclass. Each one
knows how to describe itself to the operator through diagnostics(), so the
entry point only has to log the lines and pick an exit status.
"""

from typing import List, Optional


class KitsuWatchError(Exception):
    """Base class for all fatal watch-run errors"""

    def diagnostics(self) -> List[str]:
        """Human-readable lines describing the failure"""
        return [str(self)]


# ==================== Filename Parsing ====================

class ParseError(KitsuWatchError):
    """A file name does not follow a supported release-group format"""

    def __init__(self, file_name: str, message: str):
        super().__init__(message)
        self.file_name = file_name

    def diagnostics(self) -> List[str]:
        return [f"Could not parse file name: {self.file_name}", str(self)]


class BatchReleaseError(ParseError):
    """The file is a batch release, so the season has already concluded"""

    def __init__(self, file_name: str):
        super().__init__(file_name, "This is a batch file, which means the season is over.")


class UnrecognizedFormatError(ParseError):
    """The release group's naming convention is not supported"""

    def __init__(self, file_name: str):
        super().__init__(file_name, "Try to find another release group.")


# ==================== Invocation Input ====================

class WorkingDirectoryMissingError(KitsuWatchError):
    def __init__(self, path: str):
        super().__init__(f"Working directory invalid: {path}")
        self.path = path


class InvalidArgumentsError(KitsuWatchError):
    def diagnostics(self) -> List[str]:
        return ["Incorrect Argument Syntax", str(self), "Run with --help to see the expected syntax"]


# ==================== Resolution ====================

class FileNotFoundForEpisodeError(KitsuWatchError):
    """No file in the working directory matches the name and episode"""

    def __init__(self, search_term: str, episode: str):
        super().__init__(f"{search_term} episode {episode} does NOT exist")
        self.search_term = search_term
        self.episode = episode


class AmbiguousFilesError(KitsuWatchError):
    """More than one file matches the name and episode"""

    def __init__(self, titles: List[str]):
        super().__init__("More than one file name found")
        self.titles = titles

    def diagnostics(self) -> List[str]:
        return [str(self), *self.titles]


class AmbiguousEntriesError(KitsuWatchError):
    """More than one cached library entry matches the search term"""

    def __init__(self, titles: List[str]):
        super().__init__("Multiple Cached Titles Found")
        self.titles = titles

    def diagnostics(self) -> List[str]:
        lines = [str(self)]
        lines.extend(f"Title: {title}" for title in self.titles)
        lines.append("Use a more unique name to reference the episode")
        return lines


class EntryNotFoundError(KitsuWatchError):
    """A matching file exists but no cached library entry corresponds to it"""

    HINTS = [
        "The series is not in your current watch list",
        "The cache has not been refreshed since it was added (use --refresh-cache)",
        "No file binding exists yet, so the search name must match a cached title",
    ]

    def __init__(self, title: str):
        super().__init__("Watch List Incomplete")
        self.title = title

    def diagnostics(self) -> List[str]:
        return [str(self), f"Missing: {self.title}", "Possible causes:", *self.HINTS]


# ==================== Collaborators ====================

class AuthenticationError(KitsuWatchError):
    pass


class RemoteUpdateError(KitsuWatchError):
    """The remote library update failed (transport, auth or server error)"""

    def __init__(self, library_id: Optional[str], reason: str, status_code: Optional[int] = None):
        target = f"library entry {library_id}" if library_id else "Kitsu"
        super().__init__(f"Failed to update {target}: {reason}")
        self.library_id = library_id
        self.reason = reason
        self.status_code = status_code


class RelocationError(KitsuWatchError):
    """Moving the consumed file into the watched directory failed"""

    def __init__(self, source: str, destination: str, reason: str):
        super().__init__(f"Could not move {source} to {destination}: {reason}")
        self.source = source
        self.destination = destination
        self.reason = reason

    def diagnostics(self) -> List[str]:
        return [str(self), "Progress was already updated, move the file manually"]


class ConfigStoreError(KitsuWatchError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Configuration file {path} unusable: {reason}")
        self.path = path
        self.reason = reason
