from __future__ import annotations

from kaptan.models import Media
from kaptan.repositories.base import Repository

DEFAULT_MEDIA_LIMIT = 50


class MediaRepository(Repository[Media]):
    """Media metadata, newest first. Media rows have no public/private flag."""

    model = Media

    def ordering(self):
        return (Media.created_at.desc(), Media.id.desc())
