from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

AVAILABILITY_VALUES = ["downloadable", "partially", "unfinished", "lost", "unavailable", "demo"]

ENTRY_KEYS = [
    "availability", "names", "email", "email_body", "email_subject", "meta", "name", "notes",
    "url", "windows", "mac", "android", "webapp", "song", "creator", "original", "original_url"
]

LANGUAGE_KEYS = [
    "about",
    "availability",
    "availability_demo",
    "availability_downloadable",
    "availability_lost",
    "availability_partially",
    "availability_unavailable",
    "availability_unfinished",
    "contribute",
    "defaultnote_downloadable",
    "defaultnote_email",
    "footercredits",
    "guide",
    "guidedemo",
    "guidedownloadable",
    "guideexplanations",
    "guidelost",
    "guidepartially",
    "guideunavailable",
    "guideunfinished",
    "hideinfo",
    "jgmd",
    "name",
    "noinfo",
    "noresults",
    "noresultshelp",
    "popular",
    "pullrequest",
    "reset",
    "search",
    "sendmail",
    "showinfo",
    "tagline",
    "title",
    "whatisthis",
    "whatisthis1",
    "whatisthis4"
]

@dataclass
class Settings:
    catalog: str = "_data/sites.json"
    data_dir: str = "_data"
    translations_dir: str = "_data/trans"
    pool_size: int = 20
    queue_size: int = 100
    timeout: float = 60
    availability_values: list = field(default_factory=lambda: list(AVAILABILITY_VALUES))
    entry_keys: list = field(default_factory=lambda: list(ENTRY_KEYS))
    language_keys: list = field(default_factory=lambda: list(LANGUAGE_KEYS))

def load_settings(path):
    """Load settings from a YAML file; a missing file gives the defaults."""
    path = Path(path)
    if not path.is_file():
        return Settings()
    with open(path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"{path}: expected a mapping of settings")
    known = {f.name for f in fields(Settings)}
    return Settings(**{key: value for key, value in config.items() if key in known})
