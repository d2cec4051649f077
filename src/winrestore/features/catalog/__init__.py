"""Public surface for the feature catalog."""

from .adapters.toml_loader import load_definition_file, parse_feature_definition
from .usecases.catalog import FeatureCatalog, builtin_definitions

__all__ = ["FeatureCatalog", "builtin_definitions", "load_definition_file", "parse_feature_definition"]
