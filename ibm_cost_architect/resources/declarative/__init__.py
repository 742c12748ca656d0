from .loader import load_definitions
from .model import DeclarativeResourceType
from .schema import MeterDef, ResourceDefinition

__all__ = ["load_definitions", "DeclarativeResourceType", "MeterDef", "ResourceDefinition"]
