"""Build-definition files and the context they declare targets into."""

from .context import BuildContext
from .loader import DefinitionError, load_definition

__all__ = ["BuildContext", "DefinitionError", "load_definition"]
