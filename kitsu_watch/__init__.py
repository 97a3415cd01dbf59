"""
Kitsu watch package
"""

__version__ = "0.2.0"

from .watch_manager import WatchManager, WatchResult
from .kitsu_client import KitsuClient
from .kitsu_auth import KitsuAuth
from .kitsu_api import KitsuAPI
from .candidate_resolver import CandidateResolver
from .config_store import ConfigStore
from .bindings import BindingStore
from .progress_sync import ProgressSynchronizer
from .filename_parser import ParsedFilename, parse_release_filename
from .models import LibraryEntry
from .relocator import relocate

__all__ = [
    'WatchManager',
    'WatchResult',
    'KitsuClient',
    'KitsuAuth',
    'KitsuAPI',
    'CandidateResolver',
    'ConfigStore',
    'BindingStore',
    'ProgressSynchronizer',
    'ParsedFilename',
    'parse_release_filename',
    'LibraryEntry',
    'relocate',
]
