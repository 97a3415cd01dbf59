"""
Release-Group Filename Parser
Parses episode metadata from file names like "[Group] Title - 07 (1080p).mkv".
"""

import re
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import BatchReleaseError, UnrecognizedFormatError

logger = logging.getLogger(__name__)

# The title is greedy so numbers inside titles ("Mob Psycho 100 - 05") stay in the title;
# the episode token is the last 2-4 digit, SxxEyy or NNvM token followed by a space or dot.
RELEASE_PATTERN = re.compile(
    r'^\[(?P<group>[\w\s-]+)\]\s'
    r'(?P<title>.+)'
    r'\s(?:S(?P<alt_season>\d{2})E(?P<alt_episode>\d{2,4})|(?P<episode>\d{2,4})(?:v\d)?)'
    r'[\s.]',
    re.IGNORECASE
)

SEASON_SUFFIX_PATTERN = re.compile(r'\sS(\d{1,2})$', re.IGNORECASE)
BRACKET_TAG_PATTERN = re.compile(r'^\[[^\]]+\]')
BATCH_MARKERS = ['(batch)', '[batch]']


@dataclass(frozen=True)
class ParsedFilename:
    """Episode metadata extracted from a release file name"""

    group: str
    title: str
    season: Optional[str]
    episode_number: int
    padded_episode_number: str
    # Title with its season marker kept, so each season gets its own binding
    binding_title: str = ''


def parse_release_filename(file_name: str) -> ParsedFilename:
    """
    Parse a release-group file name into structured episode metadata

    Args:
        file_name: Bare file name (no directory)

    Returns:
        ParsedFilename with group, title, season and episode number

    Raises:
        BatchReleaseError: name is a batch release (season concluded)
        UnrecognizedFormatError: name does not follow a supported convention
    """
    match = RELEASE_PATTERN.match(file_name)
    if not match:
        lowered = file_name.lower()
        if any(marker in lowered for marker in BATCH_MARKERS):
            raise BatchReleaseError(file_name)
        raise UnrecognizedFormatError(file_name)

    title = _trim_separator(match.group('title'))
    binding_title = title
    season = None

    if match.group('alt_episode'):
        padded = match.group('alt_episode')
        season = match.group('alt_season')
        binding_title = f"{title} S{season}"
    else:
        padded = match.group('episode')
        season_match = SEASON_SUFFIX_PATTERN.search(title)
        if season_match:
            season = season_match.group(1)
            title = _trim_separator(title[:season_match.start()])

    parsed = ParsedFilename(
        group=match.group('group'),
        title=title,
        season=season,
        episode_number=int(padded),
        padded_episode_number=padded,
        binding_title=binding_title,
    )
    logger.debug(f"Parsed '{file_name}' -> {parsed}")
    return parsed


def _trim_separator(title: str) -> str:
    """Drop a trailing lone hyphen separator from a title"""
    title = title.rstrip()
    if title.endswith(' -'):
        title = title[:-2]
    return title.rstrip()


def has_bracket_tag(file_name: str) -> bool:
    """Check whether a file name starts with a bracketed release-group tag"""
    return bool(BRACKET_TAG_PATTERN.match(file_name))


def episode_token(episode_number: int) -> str:
    """Render the "- NN" token release files use for an episode number"""
    return f"- {episode_number:02d}"

