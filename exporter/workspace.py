"""
Workspace - Temporary directory holding the files of one push.

The directory is removed on both success and failure; use it as a
context manager or call clean_up() from a finally block.
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config.constants import ARTICLE_FILENAME

logger = logging.getLogger(__name__)


class Workspace:
    """
    Per-content scratch directory.

    Usage:
        with Workspace(content_id, settings.temp_dir) as workspace:
            workspace.write_article(article)
    """

    def __init__(self, content_id: str, root: Optional[Union[str, Path]] = None):
        self.content_id = str(content_id)
        if root is not None:
            base = Path(root)
            base.mkdir(parents=True, exist_ok=True)
            self.path = Path(tempfile.mkdtemp(prefix=f"article-{self.content_id}-", dir=str(base)))
        else:
            self.path = Path(tempfile.mkdtemp(prefix=f"article-{self.content_id}-"))

    @property
    def article_path(self) -> Path:
        return self.path / ARTICLE_FILENAME

    def write_article(self, article: Dict[str, Any]) -> Path:
        """Write the article document as JSON and return its path."""
        with open(self.article_path, "w", encoding="utf-8") as f:
            json.dump(article, f, ensure_ascii=False, indent=2)
        return self.article_path

    def read_article(self) -> Dict[str, Any]:
        with open(self.article_path, "r", encoding="utf-8") as f:
            return json.load(f)

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def clean_up(self) -> None:
        if self.path.exists():
            shutil.rmtree(self.path, ignore_errors=True)
            logger.debug(f"Cleaned workspace {self.path}")

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clean_up()
