import json
from pathlib import Path


def load_import_list(path):
    """Load recipe URLs to import from a JSON file.

    The file holds a list whose entries are either URL strings or objects
    with a "url" key.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: URL strings, in file order.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        entries = json.load(f)
    urls = []
    for entry in entries:
        if isinstance(entry, dict):
            entry = entry.get("url")
        if isinstance(entry, str) and entry.strip():
            urls.append(entry.strip())
    return urls
