import os

from pydantic import BaseModel, ConfigDict

_TRUE_VALUES = {"1", "true", "yes", "on"}


class GeneratorOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    qualified_keys: bool = False
    extra_references: tuple[str, ...] = ()


def _parse_references(value: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in value.split(",") if name.strip())


def load_options(**overrides: object) -> GeneratorOptions:
    """Build options from ``AUTONOTIFY_*`` environment variables; non-None overrides win."""
    values: dict[str, object] = {
        "qualified_keys": os.getenv("AUTONOTIFY_QUALIFIED_KEYS", "").strip().lower() in _TRUE_VALUES,
        "extra_references": _parse_references(os.getenv("AUTONOTIFY_REFERENCES", "")),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return GeneratorOptions.model_validate(values)
