"""modelrules compilation layer: rule declarations → validators."""
from modelrules.compile.compiler import RuleCompiler
from modelrules.compile.registry import ValidatorRegistry

__all__ = [
    "RuleCompiler",
    "ValidatorRegistry",
]
