from autonotify.config import GeneratorOptions, load_options
from autonotify.core.driver import GeneratorDriver, generate, generate_files, generate_sources
from autonotify.core.generator import AutoNotifyGenerator
from autonotify.core.naming import derive_property_name
from autonotify.models import Diagnostic, GeneratedFragment, GenerationResult

__all__ = [
    "AutoNotifyGenerator",
    "Diagnostic",
    "GeneratedFragment",
    "GenerationResult",
    "GeneratorDriver",
    "GeneratorOptions",
    "derive_property_name",
    "generate",
    "generate_files",
    "generate_sources",
    "load_options",
]
