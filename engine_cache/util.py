WILDCARD = "*"

def normalize_ext(ext: str) -> str:
    # prefixes a leading dot; empty keys, dotted keys and the wildcard pass through.
    if not ext or ext == WILDCARD or ext.startswith("."):
        return ext
    return "." + ext

def parse_user_vars(pairs) -> dict:
    # turns ("k=v", ...) into {"k": "v"}; entries without "=" are ignored.
    return {k.strip(): v for k, v in (s.split("=", 1) for s in pairs if "=" in s)}
