from __future__ import annotations

from typing import Any, Dict, List, Optional

from db.repos.base import BaseRepo


class BlogPostsRepo(BaseRepo):
    table = "blog_posts"

    def fetch_blog_posts(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Published posts, newest first; ``limit`` of None or 0 returns all."""
        query = self._published().order("published_at", ascending=False)
        if limit:
            query = query.limit(limit)
        return self._rows("fetch_blog_posts", query)

    def fetch_blog_post(self, slug: str) -> Optional[Dict[str, Any]]:
        return self._row("fetch_blog_post", self._published().eq("slug", slug))
