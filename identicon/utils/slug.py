# identicon/utils/slug.py
import re


def safe_slug(name: str) -> str:
    """
    File-name slug for a contact name:
      - Lowercase, replace spaces and underscores with hyphens, collapse repeats.
      - Strip special characters, provide fallback for empty results.
    """
    s = name.strip().replace("_", "-").replace(" ", "-")
    s = "-".join(s.split())
    s = re.sub(r"[^a-zA-Z0-9-]", "", s)
    while "--" in s:
        s = s.replace("--", "-")
    s = s.strip("-")
    return s.lower() if s else "unnamed"
