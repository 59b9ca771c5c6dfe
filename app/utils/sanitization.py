import re

def sanitize_string(v):
    """Strip HTML tags and surrounding whitespace; non-strings pass through."""
    if not isinstance(v, str):
        return v
    v = re.sub(r'<[^>]*>', '', v)
    return v.strip()
