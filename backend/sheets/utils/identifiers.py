def normalize_id(raw: str) -> str:
    """
    Normalize a sheet or cell id taken from a URL path.

    The router has already percent-decoded the path segment, so the id is
    only stripped of surrounding whitespace. A literal "%41" stays "%41".

    Raises:
        ValueError: If nothing is left after normalization
    """
    identifier = raw.strip()
    if not identifier:
        raise ValueError("Identifier must not be empty")
    return identifier
