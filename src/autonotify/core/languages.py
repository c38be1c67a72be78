from pathlib import Path

_LANGUAGE_ALIASES = {
    "c#": "csharp",
    "cs": "csharp",
    "csharp": "csharp",
}

_EXTENSION_LANGUAGE_MAP = {
    ".cs": "csharp",
}

_SUPPORTED_LANGUAGES = set(_EXTENSION_LANGUAGE_MAP.values())


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def is_supported_file(path: Path) -> bool:
    return path.suffix.lower() in _EXTENSION_LANGUAGE_MAP


def collect_source_files(paths: list[Path]) -> list[Path]:
    """Expand directories into the supported files below them, sorted; files are kept as given."""
    collected: list[Path] = []
    for path in paths:
        if path.is_dir():
            collected.extend(sorted(p for p in path.rglob("*") if p.is_file() and is_supported_file(p)))
        else:
            collected.append(path)
    return collected
