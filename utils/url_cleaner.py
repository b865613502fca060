def clean_url(url):
    """Trim surrounding whitespace from a URL."""
    return url.strip()

def is_populated(value):
    """True for strings that still hold something once trimmed."""
    return isinstance(value, str) and bool(clean_url(value))
