"""modelrules scenario resolution: validators → scenario map."""
from modelrules.resolve.resolver import ScenarioResolver

__all__ = ["ScenarioResolver"]
