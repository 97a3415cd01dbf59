"""
Library entry model shared by the cache, resolver and synchronizer
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


@dataclass
class LibraryEntry:
    """One cached row of the currently-watching list"""

    library_id: str
    original_title: str
    localized_title: str = ''
    synonyms: List[str] = field(default_factory=list)
    episode_progress: int = 0
    episode_count: Optional[int] = None

    def titles(self) -> List[str]:
        """All titles the entry can be matched by"""
        return [title for title in [self.original_title, self.localized_title, *self.synonyms] if title]

    def matches(self, search_term: str) -> bool:
        """Case-insensitive substring match against every title"""
        term = search_term.lower()
        return any(term in title.lower() for title in self.titles())

    @property
    def is_complete(self) -> bool:
        return self.episode_progress > 0 and self.episode_progress == self.episode_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'library_id': self.library_id,
            'original_title': self.original_title,
            'localized_title': self.localized_title,
            'synonyms': list(self.synonyms),
            'episode_progress': self.episode_progress,
            'episode_count': self.episode_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LibraryEntry':
        synonyms = []
        seen = set()
        for synonym in data.get('synonyms') or []:
            if synonym and synonym.lower() not in seen:
                seen.add(synonym.lower())
                synonyms.append(synonym)

        return cls(
            library_id=str(data['library_id']),
            original_title=data.get('original_title') or '',
            localized_title=data.get('localized_title') or '',
            synonyms=synonyms,
            episode_progress=int(data.get('episode_progress') or 0),
            episode_count=data.get('episode_count'),
        )
