def _ascii_upper(char: str) -> str:
    return char.upper() if "a" <= char <= "z" else char


def derive_property_name(identifier: str, override: str | None = None) -> str:
    """Return the public property name for a backing field.

    An override is returned verbatim. Otherwise leading underscores are stripped and
    the first remaining character is upper-cased; an empty string means no name can
    be derived.
    """
    if override is not None:
        return override

    name = identifier.lstrip("_")
    if not name:
        return ""
    if len(name) == 1:
        return _ascii_upper(name)
    return _ascii_upper(name[0]) + name[1:]
