"""Blueprint loading and validation.

- loader.py: YAML blueprint files -> Blueprint models
- validator.py: authoring checks run before generation
"""

from .loader import (
    load_blueprints,
    parse_blueprint,
    parse_field,
    parse_choice_source,
    read_option_file,
)
from .validator import validate_blueprint

__all__ = [
    "load_blueprints",
    "parse_blueprint",
    "parse_field",
    "parse_choice_source",
    "read_option_file",
    "validate_blueprint",
]
