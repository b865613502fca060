import json
from dataclasses import dataclass
from typing import Optional

from utils.url_cleaner import is_populated

# Checked in this order for every entry.
URL_FIELDS = ("url", "windows", "android", "mac", "webapp", "original_url")

@dataclass(frozen=True)
class CatalogEntry:
    name: str
    url: Optional[str] = None
    windows: Optional[str] = None
    android: Optional[str] = None
    mac: Optional[str] = None
    webapp: Optional[str] = None
    original_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, data):
        """Build an entry from a decoded sites.json object, ignoring unrelated keys."""
        links = {field: data[field] for field in URL_FIELDS if isinstance(data.get(field), str)}
        return cls(name=str(data.get("name", "")), **links)

    def urls(self):
        """Yield (field, value) for each populated URL field."""
        for field in URL_FIELDS:
            value = getattr(self, field)
            if is_populated(value):
                yield field, value

def load_catalog(path):
    """Read the catalog file into a list of entries."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of site entries")
    return [CatalogEntry.from_mapping(item) for item in data if isinstance(item, dict)]
