"""
Templates layer: installer 정의와 template 치환.

역할:
- manifest + delimiters 정의 (definition.py)
- delimiter 표현식 치환 (substitution.py)
"""

from .definition import (
    InstallerDefinition,
    load_definition,
    package_share_dir,
    validate_delimiters,
)
from .substitution import (
    ExpressionRenderer,
    Renderer,
    render_template,
)

__all__ = [
    # definition
    "InstallerDefinition",
    "load_definition",
    "package_share_dir",
    "validate_delimiters",
    # substitution
    "Renderer",
    "ExpressionRenderer",
    "render_template",
]
