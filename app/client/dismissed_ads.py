import json
import logging
from pathlib import Path
from typing import Iterable, List, Set, Union

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".storefront" / "dismissed_ads.json"


class DismissedAds:
    """Ad IDs the local user closed. Per-machine only, never sent to the server."""

    def __init__(self, path: Union[str, Path] = DEFAULT_PATH):
        self.path = Path(path)
        self._ids: Set[int] = self._load()

    def _load(self) -> Set[int]:
        if not self.path.exists():
            return set()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return {int(i) for i in data}
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring unreadable dismissed ads file {self.path}: {e}")
            return set()

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(sorted(self._ids)), encoding="utf-8")

    def dismiss(self, ad_id: int) -> None:
        if ad_id in self._ids:
            return
        self._ids.add(ad_id)
        self._save()

    def is_dismissed(self, ad_id: int) -> bool:
        return ad_id in self._ids

    def visible(self, ads: Iterable) -> List:
        return [ad for ad in ads if not self.is_dismissed(ad.id)]
